"""Helpers for the chain harness."""

import logging
import secrets
import threading
from typing import IO

__all__ = ["random_u32", "pipe_to_file"]

logger = logging.getLogger(__name__)


def random_u32() -> int:
    """Random unsigned 32-bit integer for naming wallets and chains."""
    return secrets.randbits(32)


def pipe_to_file(stream: IO[bytes], file_path: str) -> threading.Thread:
    """
    Copy a child process stream into a file on a background thread.

    The thread ends when the stream reaches EOF.
    """
    def _copy() -> None:
        with stream, open(file_path, "wb") as out:
            for line in stream:
                out.write(line)
                out.flush()
        logger.debug(f"Finished writing {file_path}")

    thread = threading.Thread(target=_copy, name=f"pipe:{file_path}", daemon=True)
    thread.start()
    return thread
