"""Owner-only file I/O for cached clipboard payloads.

Cache files may contain anything a user copies (passwords included), so the
storage directory is kept at 0o700 and every payload at 0o600. Permission
hardening is best-effort: platforms or filesystems that reject chmod (e.g.
some DrvFs mounts under WSL) must not break a clipboard operation.
"""

import logging
import os
import stat
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

# Owner-only directory (rwx------)
SECURE_DIR_MODE: int = stat.S_IRWXU  # 0o700

# Owner-only file (rw-------)
SECURE_FILE_MODE: int = stat.S_IRUSR | stat.S_IWUSR  # 0o600


def harden(path: Path, mode: int) -> bool:
    """Apply ``mode`` to ``path``, swallowing failures.

    Returns:
        True if the chmod succeeded, False otherwise.
    """
    try:
        os.chmod(path, mode)
    except OSError as e:
        logger.debug("Could not set mode %o on %s: %s", mode, path, e)
        return False
    return True


def secure_mkdir(path: Path) -> None:
    """Create ``path`` (and parents) and restrict it to the owner.

    Permissions are only applied when the directory is created here; an
    existing directory is left as the user configured it.

    Raises:
        OSError: If the directory cannot be created.
    """
    if path.is_dir():
        return
    path.mkdir(parents=True, exist_ok=True, mode=SECURE_DIR_MODE)
    # Re-apply in case umask interfered
    harden(path, SECURE_DIR_MODE)


def secure_write_atomic(path: Path, content: str | bytes) -> None:
    """Write ``content`` to ``path`` via a temp file and rename.

    The temp file lives in the same directory so the rename stays on one
    filesystem, and mkstemp creates it 0o600 from the start, so the payload
    is never readable by other users even briefly.

    Raises:
        OSError: If the file cannot be written.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp_", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up temp file on error
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise

    # Some filesystems do not preserve the mode across replace
    harden(path, SECURE_FILE_MODE)


def remove_quietly(path: Path) -> bool:
    """Delete ``path`` if it exists; failures are logged, never raised.

    Returns:
        True if a file was removed.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.debug("Could not remove %s: %s", path, e)
        return False
    return True
