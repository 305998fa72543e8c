# src/files_to_prompt/models.py
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from files_to_prompt.errors import FilesToPromptError


@dataclass(frozen=True)
class FileEntry:
    """An eligible file found by the scanner."""
    path: Path
    rel_path: str
    display_path: str


@dataclass(frozen=True)
class DocumentRecord:
    entry: FileEntry
    content: Optional[str] = None
    error: Optional[FilesToPromptError] = None

    @property
    def skipped(self) -> bool:
        return self.error is not None
