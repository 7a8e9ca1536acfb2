"""
Configuration Store - Shared routing configuration for a log facility

Holds the three values that govern where records go:
- the active output level (console, file or both)
- the log directory (None means the current working directory)
- the optional rotation policy

Every field has its own lock. Accessors copy the value in or out and release
the lock immediately, so a reader of one field never waits on a writer of
another, and no lock is ever held across file I/O.

Usage:
    from dailylog.core.store import ConfigurationStore, OutputLevel

    store = ConfigurationStore()
    store.set_level(OutputLevel.BOTH)
    store.get_level()
"""

import enum
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from threading import Lock

from beartype.typing import Optional, Tuple, Union
from serde import deserialize, field, serialize

from dailylog.constants import FAULT_MAPPING


class OutputLevel(enum.Enum):
    """Destinations for every emitted record"""

    CONSOLE = "console"
    FILE = "file"
    BOTH = "both"

    @property
    def writes_console(self) -> bool:
        return self in (OutputLevel.CONSOLE, OutputLevel.BOTH)

    @property
    def writes_file(self) -> bool:
        return self in (OutputLevel.FILE, OutputLevel.BOTH)


@serialize
@deserialize
@dataclass(frozen=True)
class RotationPolicy:
    """Size and age limits for the active log file.

    Attributes:
        directory: directory holding the dated log files
        max_size: size in bytes above which the file is rotated
        max_age: age in seconds (since last modification) above which the file is rotated
    """

    directory: Path = field(serializer=str, deserializer=Path)
    max_size: int
    max_age: float

    @classmethod
    def create(
        cls, directory: Union[str, Path], max_size: int, max_age: Union[int, float, timedelta]
    ) -> "RotationPolicy":
        if isinstance(max_age, timedelta):
            max_age = max_age.total_seconds()
        if max_size <= 0 or max_age <= 0:
            raise ValueError(FAULT_MAPPING["invalid_rotation_limit"].format(max_size=max_size, max_age=max_age))
        return cls(directory=Path(directory), max_size=int(max_size), max_age=float(max_age))


class ConfigurationStore:
    """
    Per-field synchronized holder of the output level, directory and rotation policy.

    Accessors are unconditional: validation happens before a value reaches the store.
    """

    def __init__(self, level: OutputLevel = OutputLevel.CONSOLE):
        self._level = level
        self._directory: Optional[Path] = None
        self._rotation_policy: Optional[RotationPolicy] = None
        self._level_lock = Lock()
        self._directory_lock = Lock()
        self._rotation_lock = Lock()

    def get_level(self) -> OutputLevel:
        with self._level_lock:
            return self._level

    def set_level(self, level: OutputLevel):
        with self._level_lock:
            self._level = level

    def get_directory(self) -> Optional[Path]:
        with self._directory_lock:
            return self._directory

    def set_directory(self, directory: Optional[Path]):
        with self._directory_lock:
            self._directory = Path(directory) if directory is not None else None

    def get_rotation_policy(self) -> Optional[RotationPolicy]:
        with self._rotation_lock:
            return self._rotation_policy

    def set_rotation_policy(self, policy: Optional[RotationPolicy]):
        with self._rotation_lock:
            self._rotation_policy = policy

    def install(self, directory: Path, policy: Optional[RotationPolicy] = None):
        """
        Install a directory and a rotation policy as one update.

        Locks are always taken directory first, then rotation policy.

        Args:
            directory: validated log directory
            policy: rotation policy to install with it, or None to keep the current one
        """
        with self._directory_lock, self._rotation_lock:
            self._directory = Path(directory)
            if policy is not None:
                self._rotation_policy = policy

    def get_file_settings(self) -> Tuple[Optional[Path], Optional[RotationPolicy]]:
        """Read directory and rotation policy as one consistent pair."""
        with self._directory_lock, self._rotation_lock:
            return self._directory, self._rotation_policy

    def snapshot(self) -> dict:
        """Return a plain copy of all three values, for display only."""
        level = self.get_level()
        directory = self.get_directory()
        policy = self.get_rotation_policy()
        return {
            "output": level.value,
            "directory": str(directory) if directory is not None else None,
            "rotation": policy,
        }
