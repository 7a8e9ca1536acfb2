"""
Rotation Decider - Decides when the active log file is renamed aside

A file is rotated when it is larger than the policy's max_size OR older
(by modification time) than its max_age; whichever limit is hit first.

Rotated files are named <base>_rot-<n>.log where n is the first positive
integer with no existing file, so earlier rotations are never overwritten.

Rotation pattern (max_size reached twice on the same day):
    2026-10-18.log -> 2026-10-18_rot-1.log
    2026-10-18.log -> 2026-10-18_rot-2.log
"""

import logging
import os
import time
from itertools import count
from pathlib import Path

from beartype.typing import Optional, Union

from dailylog.backports import removesuffix
from dailylog.core.store import RotationPolicy
from dailylog.settings import LOG_FILE_SUFFIX, ROTATED_MARKER

logger = logging.getLogger(__name__)


def should_rotate(stat_result: os.stat_result, policy: RotationPolicy, now: Optional[float] = None) -> bool:
    """
    Check the size and age limits of a log file.

    Args:
        stat_result: metadata of the current log file
        policy: active rotation policy
        now: current time as a POSIX timestamp (default: time.time())

    Returns:
        True if either limit is exceeded
    """
    if stat_result.st_size > policy.max_size:
        return True
    if now is None:
        now = time.time()
    return now - stat_result.st_mtime > policy.max_age


def next_rotated_name(base_filename: Union[str, Path]) -> str:
    """
    Find the first free rotated name for a log file.

    Args:
        base_filename: path of the active log file, e.g. "logs/2026-10-18.log"

    Returns:
        First non-existing "<base>_rot-<n>.log", n starting at 1
    """
    base = removesuffix(str(base_filename), LOG_FILE_SUFFIX)
    for i in count(1):
        candidate = f"{base}{ROTATED_MARKER}{i}{LOG_FILE_SUFFIX}"
        if not os.path.exists(candidate):
            return candidate


def rotate_if_needed(path: Path, policy: RotationPolicy) -> Optional[Path]:
    """
    Rename the log file aside if it exceeds the policy.

    Rotation is best-effort: when the file metadata cannot be read (usually
    because the file does not exist yet) nothing is rotated.

    Args:
        path: active log file
        policy: active rotation policy

    Returns:
        Path of the rotated file, or None if no rotation happened

    Raises:
        OSError: if the rename itself fails
    """
    try:
        stat_result = path.stat()
    except OSError as e:
        logger.debug(f"Skipping rotation check for {path}: {e}")
        return None

    if not should_rotate(stat_result, policy):
        return None

    rotated = Path(next_rotated_name(path))
    path.rename(rotated)
    logger.debug(f"Rotated {path} to {rotated}")
    return rotated
