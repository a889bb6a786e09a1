import logging
import os
import tempfile

from pathlib import Path

from serdevault.errors import VaultIOError

logger = logging.getLogger(__name__)


def _fsync_dir(dir_path: Path) -> None:
    # directory fsync persists the rename itself; not available everywhere
    if os.name != "posix":
        return
    try:
        fd = os.open(str(dir_path), os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError:
        pass
    finally:
        os.close(fd)


def atomic_write(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` so readers see either the old file or the new one.

    The bytes go to a temp file in the same directory, are fsynced, then
    renamed over the target with os.replace.
    """
    path = Path(path)
    parent = path.parent
    tmp_path = None
    try:
        parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as e:
        raise VaultIOError(f"cannot write {path}: {e.strerror or e}", path) from e
    finally:
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
    _fsync_dir(parent)
    logger.debug("Wrote %d bytes to %s", len(data), path)
