# src/files_to_prompt/core/ignore.py
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

import pathspec

GITIGNORE_FILENAME = ".gitignore"


@dataclass(frozen=True)
class IgnorePattern:
    """
    A compiled gitignore-style pattern.

    `anchored` patterns (those containing a '/') are matched against the path
    relative to the directory the pattern belongs to; all others are matched
    against the base name at any depth.
    """
    raw: str
    negated: bool
    dir_only: bool
    anchored: bool
    spec: Optional[pathspec.PathSpec]


class GitignoreRule(NamedTuple):
    base: Path
    pattern: IgnorePattern


# Ordered, parent rules first. Tuples keep each directory's frame private.
RuleSet = Tuple[GitignoreRule, ...]


def compile_pattern(line: str) -> Optional[IgnorePattern]:
    """
    Compiles a single ignore line. Blank lines and comments yield None.
    A pattern that pathspec rejects is kept, but never matches.
    """
    raw = line.rstrip("\r\n")
    # Trailing spaces are dropped unless escaped as "\ "
    while raw.endswith(" ") and not raw.endswith("\\ "):
        raw = raw[:-1]
    if not raw.strip() or raw.startswith("#"):
        return None

    body = raw
    negated = body.startswith("!")
    if negated:
        body = body[1:]
    dir_only = body.endswith("/")
    body = body.rstrip("/")
    anchored = "/" in body

    spec = None
    if body:
        try:
            spec = pathspec.PathSpec.from_lines("gitignore", [body])
        except (ValueError, re.error):
            spec = None

    return IgnorePattern(raw=raw, negated=negated, dir_only=dir_only, anchored=anchored, spec=spec)


def compile_patterns(lines: Iterable[str]) -> List[IgnorePattern]:
    patterns = []
    for line in lines:
        pattern = compile_pattern(line)
        if pattern is not None:
            patterns.append(pattern)
    return patterns


def matches(pattern: Union[IgnorePattern, str], candidate: str, is_directory: bool) -> bool:
    """True if the glob of `pattern` matches `candidate` (negation is not applied here)."""
    if isinstance(pattern, str):
        pattern = compile_pattern(pattern)
        if pattern is None:
            return False

    if pattern.spec is None:
        return False
    if pattern.dir_only and not is_directory:
        return False

    target = candidate if pattern.anchored else candidate.rsplit("/", 1)[-1]
    return pattern.spec.match_file(target)


def is_path_ignored(rel_path: Union[Path, str], patterns: Sequence[IgnorePattern], is_directory: bool = False) -> bool:
    """
    Evaluates patterns in order against a relative path.
    The last matching pattern wins, so a later '!pattern' re-includes.
    """
    candidate = rel_path.as_posix() if isinstance(rel_path, Path) else rel_path
    ignored = False
    for pattern in patterns:
        if matches(pattern, candidate, is_directory):
            ignored = not pattern.negated
    return ignored


def is_excluded_by_rules(path: Path, rules: RuleSet, is_directory: bool = False) -> bool:
    """Like is_path_ignored, but each rule sees the path relative to its own .gitignore directory."""
    ignored = False
    for rule in rules:
        try:
            candidate = path.relative_to(rule.base).as_posix()
        except ValueError:
            continue
        if matches(rule.pattern, candidate, is_directory):
            ignored = not rule.pattern.negated
    return ignored


def load_gitignore_rules(directory: Path) -> List[IgnorePattern]:
    """
    Loads the .gitignore directly inside `directory`.
    Missing or unreadable files contribute no rules.
    """
    gitignore_file = directory / GITIGNORE_FILENAME
    if not gitignore_file.is_file():
        return []

    try:
        with open(gitignore_file, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError):
        return []

    return compile_patterns(lines)


class GitignoreResolver:
    def __init__(self, disabled: bool = False):
        self.disabled = disabled

    def resolve(self, directory: Path, parent_rules: RuleSet = ()) -> RuleSet:
        """Returns the effective rule set for the children of `directory`."""
        if self.disabled:
            return ()
        own_rules = tuple(GitignoreRule(directory, p) for p in load_gitignore_rules(directory))
        return tuple(parent_rules) + own_rules
