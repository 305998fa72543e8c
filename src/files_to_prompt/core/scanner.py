# src/files_to_prompt/core/scanner.py
import os
import posixpath
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TextIO, Union

from files_to_prompt.config import Configuration
from files_to_prompt.core.ignore import (
    GitignoreResolver,
    RuleSet,
    compile_patterns,
    is_excluded_by_rules,
    is_path_ignored,
)
from files_to_prompt.errors import FilesToPromptError, PathNotFoundError, UnreadableFileError
from files_to_prompt.models import FileEntry
from files_to_prompt.utils.diagnostics import warn


class PathScanner:
    def __init__(self, config: Configuration, diagnostics: Optional[TextIO] = None):
        self.config = config
        self.diagnostics = diagnostics
        self.resolver = GitignoreResolver(disabled=config.ignore_gitignore)
        self.ignore_patterns = compile_patterns(config.ignore_patterns)
        self.errors: List[FilesToPromptError] = []

    def _report(self, error: FilesToPromptError) -> None:
        self.errors.append(error)
        warn(str(error), self.diagnostics)

    def _has_allowed_extension(self, name: str) -> bool:
        if not self.config.extensions:
            return True
        _, dot, ext = name.rpartition(".")
        return bool(dot) and ext in self.config.extensions

    def _is_excluded(self, path: Path, root: Path, rules: RuleSet, is_directory: bool) -> bool:
        # .gitignore rules first (negations apply), then --ignore patterns,
        # which nothing in a .gitignore can re-include.
        if is_excluded_by_rules(path, rules, is_directory):
            return True
        if self.ignore_patterns:
            rel_path = path.relative_to(root)
            return is_path_ignored(rel_path, self.ignore_patterns, is_directory)
        return False

    def walk(self, roots: Iterable[Union[str, Path]]) -> Iterator[FileEntry]:
        """
        Yields eligible files under each root, in the order the roots are given.
        Explicit file roots are only subject to the extension filter.
        """
        for root in roots:
            root_path = Path(root)
            if not root_path.exists():
                self._report(PathNotFoundError(f"Path does not exist: {root}"))
                continue

            if root_path.is_file():
                if self._has_allowed_extension(root_path.name):
                    yield FileEntry(
                        path=root_path.absolute(),
                        rel_path=root_path.name,
                        display_path=os.fspath(root),
                    )
            elif root_path.is_dir():
                # Rules from the .gitignore beside the root also apply to it
                inherited: RuleSet = ()
                if root_path.parent != root_path:
                    inherited = self.resolver.resolve(root_path.parent)
                yield from self._walk_directory(root_path, root_path, os.fspath(root), inherited)

    def _walk_directory(self, directory: Path, root: Path, display_root: str, parent_rules: RuleSet) -> Iterator[FileEntry]:
        rules = self.resolver.resolve(directory, parent_rules)

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            self._report(UnreadableFileError(f"Warning: Skipping directory {directory.as_posix()} ({e})"))
            return

        for entry in entries:
            # --- 1. Hidden entries (prunes hidden directories too) ---
            if entry.name.startswith(".") and not self.config.include_hidden:
                continue

            try:
                is_dir = entry.is_dir()
                is_file = entry.is_file()
                is_link = entry.is_symlink()
            except OSError:
                continue

            # Links to directories are never followed, which rules out cycles
            if is_dir and is_link:
                continue
            if not (is_dir or is_file):
                continue

            entry_path = directory / entry.name

            # --- 2. Ignore patterns and .gitignore ---
            if self._is_excluded(entry_path, root, rules, is_dir):
                if not (is_dir and self.config.ignore_files_only):
                    continue

            if is_dir:
                yield from self._walk_directory(entry_path, root, display_root, rules)
                continue

            # --- 3. Extension filter ---
            if not self._has_allowed_extension(entry.name):
                continue

            rel_path = entry_path.relative_to(root).as_posix()
            yield FileEntry(
                path=entry_path.absolute(),
                rel_path=rel_path,
                display_path=posixpath.join(display_root, rel_path),
            )
