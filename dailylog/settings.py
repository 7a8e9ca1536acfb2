DEFAULT_OUTPUT = "console"
DEFAULT_GRACE_DELAY = 10.0
LOG_FILE_SUFFIX = ".log"
ROTATED_MARKER = "_rot-"
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
