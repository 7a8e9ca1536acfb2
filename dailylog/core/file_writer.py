"""
File Writer - Appends one record to a log file

The file is opened in append mode (created if absent), one line is written
with a single write call and the handle is closed before returning; no handle
is kept between records.
"""

import os
from pathlib import Path

from beartype.typing import Union


def append(path: Union[str, Path], now: str, message: str, encoding: str = "utf-8"):
    """
    Append "<now> <message>" as one line.

    Args:
        path: log file to append to
        now: timestamp string
        message: rendered message
        encoding: file encoding (default: utf-8)

    Raises:
        OSError: on permission, disk or path errors
    """
    with open(path, "a", encoding=encoding, errors="backslashreplace") as f:
        f.write(f"{now} {message}\n")
        f.flush()
        os.fsync(f.fileno())  # Ensure data is written to disk
