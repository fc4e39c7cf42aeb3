"""
Stub store — path-addressed read/write of generated stub files.

Stubs live in a single classes directory as ``<ClassName><extension>``.
Writes are atomic (write to temp file, then rename) so a crash never
leaves a half-written class file behind.
"""

from __future__ import annotations

import logging
import tempfile
import time
from pathlib import Path

logger = logging.getLogger(__name__)


class StubStore:
    """File access for one classes directory."""

    def __init__(self, classes_dir: Path, extension: str = ".php") -> None:
        self.classes_dir = classes_dir
        self.extension = extension

    def path_for(self, class_name: str) -> Path:
        return self.classes_dir / f"{class_name}{self.extension}"

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read(self, path: Path) -> str | None:
        """Return the file content, or None if absent or unreadable.

        Line endings are returned as stored.
        """
        if not path.is_file():
            return None
        try:
            with open(path, encoding="utf-8", newline="") as fh:
                return fh.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read stub %s: %s", path, e)
            return None

    def write(self, path: Path, content: str) -> None:
        """Replace the file content (atomic write).

        Args:
            path: Target file.
            content: Full new content.
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        _fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".stub_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(_fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(content)
            tmp.replace(path)
            logger.debug("Wrote %s (%d bytes)", path, len(content))
        except Exception:
            tmp.unlink(missing_ok=True)
            raise

    def changed_within(self, path: Path, seconds: float) -> bool:
        """True if the file's status changed less than *seconds* ago."""
        try:
            changed_at = path.stat().st_ctime
        except OSError:
            return False
        return time.time() - changed_at <= seconds
