import logging
import os
from pathlib import Path


logger = logging.getLogger(__name__)


def ensure_suffix(path: str, suffix: str) -> str:
    """
    Append a reserved suffix to a path, exactly once.

    Args:
        path: Caller supplied path
        suffix: Reserved extension (e.g. ".fastdb")

    Returns:
        The path, ending with suffix
    """
    path = os.fspath(path)
    if not path.endswith(suffix):
        path = f"{path}{suffix}"
    return path


# ==============================================
# FileStore
# ==============================================
#
# PURPOSE:
#   Byte-level access to one backing file. Knows nothing about
#   records; the Database decides what to write and when.
#
# WRITES:
#   Every write replaces the whole file. With atomic writes on,
#   the text goes to "<name>.tmp" first, is fsync'ed and then
#   os.replace'd over the target, so a reader always sees either
#   the previous or the new full document.
#
class FileStore:
    """Read/write/exists over a single text file."""

    def __init__(self, path: str, encoding: str = "utf-8", atomic_writes: bool = True):
        """
        Initialize the file store. Nothing is touched on disk yet.

        Args:
            path: File to read and write
            encoding: Text encoding
            atomic_writes: Write through a temp file + os.replace
        """
        self.path = Path(path)
        self.encoding = encoding
        self.atomic_writes = atomic_writes

    def exists(self) -> bool:
        return self.path.exists()

    def read_text(self) -> str:
        """
        Read the whole file.

        Raises:
            FileNotFoundError: If the file does not exist yet
        """
        with open(self.path, "r", encoding=self.encoding) as f:
            return f.read()

    def write_text(self, text: str) -> None:
        """
        Replace the file contents with text.

        Args:
            text: Full document to write
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        if not self.atomic_writes:
            with open(self.path, "w", encoding=self.encoding) as f:
                f.write(text)
            return

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding=self.encoding) as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if tmp_path.exists():
                tmp_path.unlink()
            raise

        logger.debug("Wrote %d bytes to %s", len(text), self.path)
