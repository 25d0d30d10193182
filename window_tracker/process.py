"""
Process records of the window's owner, read through psutil.

Every field is read on its own. A failed read returns None (absent) and never
stops another field from being read; callers turn None into "" or 0 when they
serialize.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, TypeVar, Union

import psutil

logger = logging.getLogger(__name__)

T = TypeVar("T")

FIELDS = ("name", "executable_path", "cmdline", "cwd", "parent_id")


class ProcessRecordReader:
    """Best-effort reader for a process's name, executable, command line, cwd and parent."""

    def __init__(self, proc_root: Optional[Union[str, Path]] = None):
        if proc_root is not None:
            # psutil reads Linux process records under this mount
            psutil.PROCFS_PATH = str(proc_root)

    def _read(self, pid: int, what: str, getter: Callable[[psutil.Process], T]) -> Optional[T]:
        if pid <= 0:
            return None
        try:
            return getter(psutil.Process(pid))
        except psutil.Error as e:
            logger.debug("Error reading process %s for PID %s: %s", what, pid, e)
            return None

    def read_field(self, pid: int, field: str) -> Optional[Union[str, int]]:
        """Read one named field. Unknown field names are a programming error."""
        if field not in FIELDS:
            raise ValueError(f"Unknown process record field: {field}")
        return getattr(self, field)(pid)

    def name(self, pid: int) -> Optional[str]:
        return self._read(pid, "name", lambda p: p.name())

    def executable_path(self, pid: int) -> Optional[str]:
        # kernel threads and zombies have no executable
        return self._read(pid, "path", lambda p: p.exe() or None)

    def cmdline(self, pid: int) -> Optional[str]:
        """Arguments joined with single spaces."""
        return self._read(pid, "cmdline", lambda p: " ".join(p.cmdline()).strip())

    def cwd(self, pid: int) -> Optional[str]:
        return self._read(pid, "cwd", lambda p: p.cwd() or None)

    def parent_id(self, pid: int) -> Optional[int]:
        return self._read(pid, "parent", lambda p: p.ppid())
