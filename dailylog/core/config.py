"""
Configuration System - Logging configuration for dailylog

Loads the routing configuration from a YAML file, environment variables and
explicit overrides, with precedence handling and environment variable
substitution.
"""

import os
import re
import sys
from pathlib import Path

import yaml
from beartype.typing import Any, Dict, Optional, Tuple
from humanfriendly import InvalidSize, InvalidTimespan, parse_size, parse_timespan

from dailylog.constants import FAULT_MAPPING
from dailylog.core.facility import LogFacility
from dailylog.core.store import OutputLevel, RotationPolicy
from dailylog.settings import DEFAULT_GRACE_DELAY, DEFAULT_OUTPUT


class LoggingConfig:
    """
    Centralized logging configuration for dailylog.

    Reads from file, environment variables, or overrides with
    proper precedence handling.

    Example configuration file (dailylog.yml):
        dailylog:
          output: both          # console, file or both
          directory: /var/log/${APP_NAME}
          max_size: 5MB         # rotation is enabled when both max_size
          max_age: 1h           # and max_age are set
          grace_delay: 10       # seconds to wait before exiting on a bad directory
          require_file_output: false
    """

    DEFAULT_CONFIG = {
        "output": DEFAULT_OUTPUT,
        "directory": None,
        "max_size": None,
        "max_age": None,
        "grace_delay": DEFAULT_GRACE_DELAY,
        "require_file_output": False,
    }

    ENV_MAPPINGS = {
        "DAILYLOG_OUTPUT": "output",
        "DAILYLOG_DIRECTORY": "directory",
        "DAILYLOG_MAX_SIZE": "max_size",
        "DAILYLOG_MAX_AGE": "max_age",
        "DAILYLOG_GRACE_DELAY": "grace_delay",
    }

    @classmethod
    def load(cls, config_path: Optional[str] = None, **overrides) -> Dict[str, Any]:
        """
        Load configuration from multiple sources.

        Precedence: overrides > Environment > File > Default.
        Overrides set to None are ignored.

        Args:
            config_path: Path to configuration file
            **overrides: Configuration overrides (e.g., output="file")

        Returns:
            Configuration dictionary

        Example:
            config = LoggingConfig.load("dailylog.yml", output="both")
        """
        config = cls.DEFAULT_CONFIG.copy()

        # 1. Load from file
        if config_path and Path(config_path).exists():
            file_config = cls._load_from_file(config_path)
            if file_config and "dailylog" in file_config:
                config.update(file_config["dailylog"])

        # 2. Override with environment variables
        config = cls._apply_env_overrides(config)

        # 3. Explicit overrides
        config.update({key: value for key, value in overrides.items() if value is not None})

        # 4. Substitute environment variables in values
        return cls._substitute_env_vars(config)

    @classmethod
    def _load_from_file(cls, config_path: str) -> Optional[Dict[str, Any]]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to configuration file

        Returns:
            Configuration dictionary or None if error
        """
        try:
            with open(config_path) as f:
                return yaml.safe_load(f)
        except yaml.YAMLError:
            sys.stderr.write(FAULT_MAPPING["yaml_file_parse_issue"].format(file_path=config_path) + "\n")
            return None
        except OSError:
            sys.stderr.write(FAULT_MAPPING["file_open_issue"].format(file_path=config_path) + "\n")
            return None

    @classmethod
    def _apply_env_overrides(cls, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides.

        Environment variables:
            DAILYLOG_OUTPUT: Output destination (console, file, both)
            DAILYLOG_DIRECTORY: Log directory
            DAILYLOG_MAX_SIZE: Max log file size before rotation (e.g. 5MB)
            DAILYLOG_MAX_AGE: Max log file age before rotation (e.g. 1h)
            DAILYLOG_GRACE_DELAY: Seconds to wait before exiting on a bad directory
            DAILYLOG_REQUIRE_FILE_OUTPUT: Refuse a directory with console output (true, false, yes, no, 1, 0)

        Args:
            config: Configuration dictionary

        Returns:
            Updated configuration dictionary
        """
        for env_var, config_key in cls.ENV_MAPPINGS.items():
            if env_var in os.environ:
                config[config_key] = os.environ[env_var]

        if "DAILYLOG_REQUIRE_FILE_OUTPUT" in os.environ:
            value = os.environ["DAILYLOG_REQUIRE_FILE_OUTPUT"].lower()
            config["require_file_output"] = value in ("true", "yes", "1", "on")

        return config

    @classmethod
    def _substitute_env_vars(cls, config: Any) -> Any:
        """
        Recursively substitute environment variables in configuration.

        Supports ${VAR_NAME} syntax; unknown variables are left as they are.

        Example:
            directory: /var/log/${ENVIRONMENT}
            With ENVIRONMENT=production, becomes:
            directory: /var/log/production
        """
        if isinstance(config, str):

            def replace_env(match):
                var_name = match.group(1)
                return os.environ.get(var_name, match.group(0))

            return re.sub(r"\$\{([^}]+)\}", replace_env, config)

        elif isinstance(config, dict):
            return {k: cls._substitute_env_vars(v) for k, v in config.items()}

        elif isinstance(config, list):
            return [cls._substitute_env_vars(item) for item in config]

        else:
            return config

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> Tuple[bool, str]:
        """
        Validate configuration.

        Args:
            config: Configuration dictionary

        Returns:
            Tuple of (is_valid, error_message)

        Example:
            is_valid, error = LoggingConfig.validate(config)
            if not is_valid:
                print(f"Invalid configuration: {error}")
        """
        valid_outputs = [level.value for level in OutputLevel]
        output = str(config.get("output", DEFAULT_OUTPUT)).lower()
        if output not in valid_outputs:
            return False, FAULT_MAPPING["invalid_output"].format(output=output, choices=", ".join(valid_outputs))

        max_size = config.get("max_size")
        max_age = config.get("max_age")
        if max_size is not None:
            try:
                size_limit = parse_size(str(max_size))
            except InvalidSize as e:
                return False, FAULT_MAPPING["invalid_size"].format(value=max_size, error=e)
            if size_limit <= 0:
                return False, FAULT_MAPPING["invalid_rotation_limit"].format(max_size=max_size, max_age=max_age)
        if max_age is not None:
            try:
                age_limit = parse_timespan(str(max_age))
            except InvalidTimespan as e:
                return False, FAULT_MAPPING["invalid_age"].format(value=max_age, error=e)
            if age_limit <= 0:
                return False, FAULT_MAPPING["invalid_rotation_limit"].format(max_size=max_size, max_age=max_age)

        try:
            parse_timespan(str(config.get("grace_delay", DEFAULT_GRACE_DELAY)))
        except InvalidTimespan as e:
            return False, FAULT_MAPPING["invalid_grace_delay"].format(value=config.get("grace_delay"), error=e)

        if (max_size is None) != (max_age is None):
            return False, FAULT_MAPPING["incomplete_rotation"]
        if max_size is not None and not config.get("directory"):
            return False, FAULT_MAPPING["rotation_without_directory"]

        return True, ""

    @classmethod
    def rotation_policy(cls, config: Dict[str, Any]) -> Optional[RotationPolicy]:
        """
        Build the rotation policy described by a validated configuration.

        Returns:
            RotationPolicy, or None when rotation is not configured
        """
        if config.get("max_size") is None or config.get("max_age") is None:
            return None
        return RotationPolicy.create(
            directory=config["directory"],
            max_size=parse_size(str(config["max_size"])),
            max_age=parse_timespan(str(config["max_age"])),
        )

    @classmethod
    def setup_facility(cls, config_path: Optional[str] = None, **overrides) -> LogFacility:
        """
        Build a facility from configuration.

        Args:
            config_path: Path to configuration file
            **overrides: Configuration overrides (e.g., output="file")

        Returns:
            Configured LogFacility

        Raises:
            ValueError: if the configuration is invalid
            FatalConfigurationError: if the configured directory cannot be used

        Example:
            facility = LoggingConfig.setup_facility("dailylog.yml", output="both")
        """
        config = cls.load(config_path, **overrides)
        return cls.configure(config)

    @classmethod
    def configure(cls, config: Dict[str, Any]) -> LogFacility:
        is_valid, error = cls.validate(config)
        if not is_valid:
            raise ValueError(error)

        facility = LogFacility(require_file_output=bool(config.get("require_file_output")))
        facility.set_level(OutputLevel(str(config.get("output", DEFAULT_OUTPUT)).lower()))

        policy = cls.rotation_policy(config)
        if policy is not None:
            facility.set_directory(policy)
        elif config.get("directory"):
            facility.set_directory(config["directory"])
        return facility

    @classmethod
    def grace_delay(cls, config: Dict[str, Any]) -> float:
        """Seconds to wait before exiting on a fatal configuration error."""
        return parse_timespan(str(config.get("grace_delay", DEFAULT_GRACE_DELAY)))
