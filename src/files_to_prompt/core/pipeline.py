# src/files_to_prompt/core/pipeline.py
from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO, Union

from files_to_prompt.config import Configuration
from files_to_prompt.core.formatter import OutputFormatter
from files_to_prompt.core.reader import ContentReader
from files_to_prompt.core.scanner import PathScanner
from files_to_prompt.errors import BinaryContentError
from files_to_prompt.models import DocumentRecord, FileEntry
from files_to_prompt.utils.diagnostics import warn


def _load_documents(entries: Iterable[FileEntry], reader: ContentReader, diagnostics: Optional[TextIO]) -> Iterator[DocumentRecord]:
    for entry in entries:
        record = reader.load(entry)
        if isinstance(record.error, BinaryContentError):
            warn(f"Warning: Skipping file {entry.display_path} due to UnicodeDecodeError", diagnostics)
        elif record.error is not None:
            warn(f"Warning: Skipping file {entry.display_path} due to read error: {record.error}", diagnostics)
        yield record


def files_to_prompt(
    roots: Iterable[Union[str, Path]],
    config: Configuration,
    output: TextIO,
    diagnostics: Optional[TextIO] = None,
) -> int:
    """
    Walks `roots`, reads each eligible file and renders it to `output`.

    Per-file problems go to `diagnostics` (stderr by default) and never stop
    the run. OutputError propagates. Returns the number of documents written.
    """
    scanner = PathScanner(config, diagnostics)
    formatter = OutputFormatter(config, output)
    documents = _load_documents(scanner.walk(roots), ContentReader(), diagnostics)
    return formatter.render(documents)
