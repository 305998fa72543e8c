# src/files_to_prompt/core/reader.py
from pathlib import Path

from files_to_prompt.errors import BinaryContentError, UnreadableFileError
from files_to_prompt.models import DocumentRecord, FileEntry


class ContentReader:
    """Reads whole files and accepts them only if they decode as UTF-8."""

    encoding = "utf-8"

    def read(self, path: Path) -> str:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise UnreadableFileError(str(e)) from e

        try:
            return data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise BinaryContentError(f"{path} is not valid {self.encoding}") from e

    def load(self, entry: FileEntry) -> DocumentRecord:
        try:
            return DocumentRecord(entry=entry, content=self.read(entry.path))
        except (UnreadableFileError, BinaryContentError) as e:
            return DocumentRecord(entry=entry, error=e)
