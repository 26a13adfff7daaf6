"""Filesystem access for notes."""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from leet_analyzer.core.exceptions import NoteStorageError
from leet_analyzer.core.logging import log_file_operation

PathLike = Union[str, Path]

NEW_NOTE_MODE = 0o644


class NoteStorage:
    """
    Reads and writes note files.

    Writes go to a temporary file next to the target which is then renamed
    over it, so a reader sees either the old note or the new one. There is
    no locking: two processes exporting to the same note race and the last
    writer wins.
    """

    encoding = "utf-8"

    def read(self, path: PathLike) -> Optional[str]:
        """
        Read a note.

        Args:
            path: Note file path
        Returns:
            The note text, or None if the file does not exist
        Raises:
            NoteStorageError: If the file exists but cannot be read
        """
        path = Path(path)
        try:
            with open(path, "r", encoding=self.encoding) as f:
                text = f.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise NoteStorageError(f"Failed to read note {path}: {e}") from e
        log_file_operation("read", path)
        return text

    def ensure_dir(self, path: PathLike) -> Path:
        """Create the parent directory of a note if needed."""
        parent = Path(path).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise NoteStorageError(
                f"Failed to create note directory {parent}: {e}"
            ) from e
        return parent

    def write(self, path: PathLike, text: str) -> None:
        """
        Replace a note's content.

        Args:
            path: Note file path
            text: Full note text
        Raises:
            NoteStorageError: If the note cannot be written; the previous
                content is left in place
        """
        path = Path(path)
        parent = self.ensure_dir(path)
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=str(parent), prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding=self.encoding, newline="") as f:
                f.write(text)
            # mkstemp creates 0600 files; keep the note's existing mode
            mode = path.stat().st_mode & 0o777 if path.exists() else NEW_NOTE_MODE
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
            raise NoteStorageError(f"Failed to write note {path}: {e}") from e
        log_file_operation("write", path)
