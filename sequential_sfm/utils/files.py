"""Mini README: File helpers for artifacts that must appear all at once.

Structure:
    * atomic_writer - context manager yielding a text handle on a temporary
      file that replaces the destination only when the block succeeds.
    * atomic_write_text - convenience wrapper for a single string payload.

Readers of an artifact therefore see either the previous file or the
complete new one, never a partially written file. The temporary file lives
in the destination directory so the final ``os.replace`` stays on one
filesystem.
"""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


# mkstemp creates 0600 files; artifacts get the mode a plain open() would give.
FILE_MODE = 0o666 & ~_current_umask()


@contextmanager
def atomic_writer(destination: Path, *, encoding: str = "utf-8") -> Iterator[IO[str]]:
    """Yield a writable handle whose content is moved onto ``destination`` on success."""

    destination = Path(destination)
    descriptor, temporary_name = tempfile.mkstemp(
        prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
    )
    try:
        with os.fdopen(descriptor, "w", encoding=encoding, newline="\n") as handle:
            yield handle
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(temporary_name, FILE_MODE)
        os.replace(temporary_name, destination)
    except BaseException:
        if os.path.exists(temporary_name):
            os.unlink(temporary_name)
        raise


def atomic_write_text(destination: Path, payload: str) -> Path:
    """Write ``payload`` to ``destination`` atomically and return the path."""

    with atomic_writer(destination) as handle:
        handle.write(payload)
    return Path(destination)
