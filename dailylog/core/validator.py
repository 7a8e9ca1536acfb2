"""
Path Validator - Checks a log directory before it is installed

A directory is accepted only if it exists, its metadata can be read, it is a
directory and it is writable. Existence and metadata come from a single stat
call. The checks run on a single-use worker thread which the caller waits for,
so the call is blocking from the caller's side while any failure stays
isolated in the worker until it is re-raised here.

Failures raise a FatalConfigurationError subclass. Turning that into a process
exit is left to the bootstrap (see dailylog.cli).
"""

import logging
import os
import stat
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from beartype.typing import Optional, Union

from dailylog.core.errors import MetadataUnavailable, PathNotDirectory, PathNotFound, PathNotWritable
from dailylog.core.store import ConfigurationStore, RotationPolicy

logger = logging.getLogger(__name__)


def check_directory(candidate: Union[str, Path]) -> Path:
    """
    Run the directory checks in order.

    Args:
        candidate: directory to check

    Returns:
        The candidate as a Path

    Raises:
        PathNotFound, PathNotDirectory, MetadataUnavailable, PathNotWritable
    """
    path = Path(candidate)
    try:
        mode = path.stat().st_mode
    except (FileNotFoundError, NotADirectoryError) as e:
        raise PathNotFound(path, e) from e
    except OSError as e:
        raise MetadataUnavailable(path, e) from e
    if not stat.S_ISDIR(mode):
        raise PathNotDirectory(path)
    if not os.access(path, os.W_OK):
        raise PathNotWritable(path)
    return path


def _validate_and_install(candidate, store: ConfigurationStore, policy: Optional[RotationPolicy]) -> Path:
    path = check_directory(candidate)
    store.install(path, policy)
    logger.debug(f"Installed log directory {path} (rotation policy: {policy})")
    return path


def validate_and_install(
    candidate: Union[str, Path], store: ConfigurationStore, policy: Optional[RotationPolicy] = None
) -> Path:
    """
    Validate a candidate log directory and install it into the store.

    When a rotation policy is given it is installed together with the directory.
    Nothing is installed if any check fails.

    Args:
        candidate: directory to validate
        store: configuration store receiving the directory
        policy: optional rotation policy installed alongside

    Returns:
        The installed directory

    Raises:
        FatalConfigurationError: if the directory cannot be used
    """
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="dailylog-validator") as executor:
        future = executor.submit(_validate_and_install, candidate, store, policy)
        return future.result()
