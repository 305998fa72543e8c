# src/files_to_prompt/utils/diagnostics.py
import sys
from typing import Optional, TextIO


def warn(message: str, stream: Optional[TextIO] = None) -> None:
    """Writes one diagnostic line, keeping it out of the primary output."""
    print(message, file=stream if stream is not None else sys.stderr)
