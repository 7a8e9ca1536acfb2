import dailylog

FAULT_MAPPING = dict(
    path_not_found="Path is not correct: {path}",
    path_not_directory="Path is not a directory: {path}",
    metadata_unavailable="Failed to get metadata for path {path}: {error}",
    path_not_writable="Not enough permissions to access the path: '{path}'",
    output_level_misuse="Cannot set a log directory while the output level is '{level}'.\n"
    "Set the output level to 'file' or 'both' first, e.g. facility.set_level(OutputLevel.FILE).",
    file_write_failed="Failed to write to log file: {error}",
    invalid_output="Invalid output '{output}'. Must be one of: {choices}",
    invalid_size="Invalid max_size '{value}': {error}",
    invalid_age="Invalid max_age '{value}': {error}",
    invalid_grace_delay="Invalid grace_delay '{value}': {error}",
    incomplete_rotation="Both max_size and max_age are required to enable log rotation.",
    rotation_without_directory="A directory is required to enable log rotation.",
    invalid_rotation_limit="Rotation limits must be positive (max_size: {max_size}, max_age: {max_age}).",
    message_format_failed="{message} [unformatted arguments {args!r}: {error}]",
    yaml_file_parse_issue="Error occurred while parsing yaml file ({file_path}). "
    "Make sure that structure of a file is correct.",
    file_open_issue="Error occurred while opening the file ({file_path}). "
    "Make sure that the file exists or the path is correct.",
)

TOOL_VERSION = f"""dailylog v{dailylog.__version__}
Copyright 2026 dailylog contributors - Released under the MIT License."""

TOOL_USAGE = """Supported and loaded modules:
    - emit: log messages to the console, a dated file or both
    - check_dir: validate a log directory
    - show_config: print the effective logging configuration"""

LEVEL_TAGS = ("ERROR", "WARN", "INFO", "DEBUG", "TRACE")

STDERR_LEVEL_TAGS = ("ERROR", "WARN")
