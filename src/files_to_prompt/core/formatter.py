# src/files_to_prompt/core/formatter.py
import re
from typing import Iterable, TextIO

from files_to_prompt.config import EXTENSION_LANGUAGES, Configuration, OutputFormat
from files_to_prompt.errors import OutputError
from files_to_prompt.models import DocumentRecord

_BACKTICK_RUN = re.compile(r"`+")


def add_line_numbers(content: str) -> str:
    """Prefixes each line with its right-aligned 1-based number and two spaces."""
    # Only "\n" ends a line; other separators stay part of the content
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    padding = len(str(len(lines)))
    return "\n".join(f"{i:>{padding}}  {line}" for i, line in enumerate(lines, start=1))


def fence_for(content: str) -> str:
    """Shortest backtick fence (at least 3) longer than any backtick run in `content`."""
    longest = max((len(run) for run in _BACKTICK_RUN.findall(content)), default=0)
    return "`" * max(3, longest + 1)


def language_for(path: str) -> str:
    name = path.rsplit("/", 1)[-1]
    _, dot, ext = name.rpartition(".")
    if not dot:
        return ""
    return EXTENSION_LANGUAGES.get(ext, "")


class OutputFormatter:
    def __init__(self, config: Configuration, output: TextIO):
        self.config = config
        self.output = output
        # Dispatch once; OutputFormat is a closed set
        self._write_document = {
            OutputFormat.PLAIN: self._write_plain,
            OutputFormat.CLAUDE_XML: self._write_xml,
            OutputFormat.MARKDOWN: self._write_markdown,
        }[config.format]

    def _writeln(self, text: str) -> None:
        try:
            self.output.write(text + "\n")
        except OSError as e:
            raise OutputError(f"Could not write output: {e}") from e

    def render(self, documents: Iterable[DocumentRecord]) -> int:
        """
        Writes every readable document and returns how many were written.
        Skipped records produce no output at all.
        """
        is_xml = self.config.format is OutputFormat.CLAUDE_XML
        if is_xml:
            self._writeln("<documents>")

        index = 0
        for doc in documents:
            if doc.skipped:
                continue
            index += 1
            content = add_line_numbers(doc.content) if self.config.line_numbers else doc.content
            self._write_document(index, doc.entry.display_path, content)

        if is_xml:
            self._writeln("</documents>")
        return index

    def _write_plain(self, index: int, path: str, content: str) -> None:
        self._writeln(path)
        self._writeln("---")
        self._writeln(content)
        self._writeln("")
        self._writeln("---")

    def _write_xml(self, index: int, path: str, content: str) -> None:
        self._writeln(f'<document index="{index}">')
        self._writeln(f"<source>{path}</source>")
        self._writeln("<document_content>")
        self._writeln(content)
        self._writeln("</document_content>")
        self._writeln("</document>")

    def _write_markdown(self, index: int, path: str, content: str) -> None:
        fence = fence_for(content)
        self._writeln(path)
        self._writeln(f"{fence}{language_for(path)}")
        self._writeln(content)
        self._writeln(fence)
