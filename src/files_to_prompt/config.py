# src/files_to_prompt/config.py
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Tuple


class OutputFormat(Enum):
    PLAIN = "plain"
    CLAUDE_XML = "cxml"
    MARKDOWN = "markdown"


# Markdown fence language tags, keyed by extension (no leading dot)
EXTENSION_LANGUAGES = {
    "py": "python",
    "c": "c",
    "cpp": "cpp",
    "java": "java",
    "js": "javascript",
    "ts": "typescript",
    "html": "html",
    "css": "css",
    "xml": "xml",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "sh": "bash",
    "rb": "ruby",
}


@dataclass(frozen=True)
class Configuration:
    """Options recognised by the traversal and formatting core."""
    extensions: FrozenSet[str] = field(default_factory=frozenset)
    include_hidden: bool = False
    ignore_patterns: Tuple[str, ...] = ()
    ignore_files_only: bool = False
    ignore_gitignore: bool = False
    format: OutputFormat = OutputFormat.PLAIN
    line_numbers: bool = False

    def __post_init__(self):
        # Accept "py" and ".py" alike
        object.__setattr__(self, "extensions", frozenset(e.lstrip(".") for e in self.extensions))
        object.__setattr__(self, "ignore_patterns", tuple(self.ignore_patterns))
