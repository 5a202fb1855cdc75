"""Child process handle for a running chain."""

import logging
import subprocess
import threading
from typing import List, Optional

__all__ = ["ChildProcess"]

logger = logging.getLogger(__name__)


class ChildProcess:
    """
    Owns a spawned chain process and kills it when released.

    Usable as a context manager.
    """

    def __init__(
        self,
        child: subprocess.Popen,
        pipes: Optional[List[threading.Thread]] = None
    ) -> None:
        self.child = child
        self._pipes = pipes or []
        self._waited = False

    @property
    def pid(self) -> int:
        return self.child.pid

    @property
    def is_running(self) -> bool:
        return self.child.poll() is None

    def kill(self, timeout: float = 5.0) -> Optional[int]:
        """
        Kill the process and wait for it and its log pipes to finish.

        Returns:
            Exit code of the process
        """
        if self.is_running:
            logger.debug(f"Killing chain process {self.pid}")
            self.child.kill()
        code = self.child.wait(timeout=timeout)
        for pipe in self._pipes:
            pipe.join(timeout=timeout)
        self._waited = True
        return code

    def __enter__(self) -> "ChildProcess":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.kill()

    def __del__(self) -> None:
        if not self._waited and self.child.poll() is None:
            self.child.kill()

    def __repr__(self) -> str:
        state = "running" if self.is_running else f"exited({self.child.returncode})"
        return f"ChildProcess(pid={self.pid}, {state})"
