# tests/test_ignore.py
import pytest
from pathlib import Path

from files_to_prompt.core.ignore import (
    GitignoreResolver,
    compile_pattern,
    compile_patterns,
    is_excluded_by_rules,
    is_path_ignored,
    load_gitignore_rules,
    matches,
)

# --- Test 1: Pattern compilation ---

def test_blank_and_comment_lines_yield_no_pattern():
    assert compile_pattern("") is None
    assert compile_pattern("   ") is None
    assert compile_pattern("# a comment") is None

def test_pattern_flags():
    negated = compile_pattern("!keep.log")
    assert negated.negated is True
    assert negated.anchored is False

    directory = compile_pattern("venv/")
    assert directory.dir_only is True
    assert directory.anchored is False

    anchored = compile_pattern("/build")
    assert anchored.anchored is True

# --- Test 2: Glob matching ---

def test_pattern_without_slash_matches_base_name_at_any_depth():
    assert matches("*.log", "app.log", False)
    assert matches("*.log", "src/deep/app.log", False)
    assert not matches("*.log", "src/app.py", False)

def test_pattern_with_slash_is_relative_to_base():
    assert matches("docs/*.md", "docs/a.md", False)
    assert not matches("docs/*.md", "src/docs/a.md", False)
    assert matches("/only.txt", "only.txt", False)
    assert not matches("/only.txt", "sub/only.txt", False)

def test_double_star_matches_any_depth():
    assert matches("**/build", "a/b/build", True)
    assert matches("logs/**", "logs/2024/app.txt", False)

def test_question_mark_and_character_class():
    assert matches("file?.txt", "file1.txt", False)
    assert not matches("file?.txt", "file10.txt", False)
    assert matches("[ab].txt", "a.txt", False)
    assert not matches("[ab].txt", "c.txt", False)

def test_trailing_slash_matches_directories_only():
    assert matches("venv/", "venv", True)
    assert not matches("venv/", "venv", False)

def test_matching_is_case_sensitive():
    assert not matches("*.TXT", "notes.txt", False)
    assert matches("*.txt", "notes.txt", False)

def test_malformed_pattern_never_matches():
    pattern = compile_pattern("[z-a]")
    assert pattern is not None
    assert pattern.spec is None
    assert not matches(pattern, "z", False)
    assert not matches("[z-a].txt", "a.txt", False)

def test_trailing_spaces_are_dropped_unless_escaped():
    assert compile_pattern("build/   ").dir_only is True
    assert matches("*.log  ", "app.log", False)

    escaped = compile_pattern("foo\\ ")
    assert escaped.raw == "foo\\ "
    assert matches(escaped, "foo ", False)
    assert not matches(escaped, "foo", False)

def test_empty_body_never_matches():
    assert not matches("/", "anything", True)
    assert not matches("!", "anything", False)

# --- Test 3: Rule precedence (last match wins) ---

@pytest.fixture
def sample_patterns():
    return compile_patterns([
        "*.log",
        "venv/",
        "!src/important.log",
    ])

def test_is_path_ignored_simple(sample_patterns):
    assert is_path_ignored(Path("app.log"), sample_patterns) is True
    assert is_path_ignored("src/app.log", sample_patterns) is True

def test_is_path_ignored_not_ignored(sample_patterns):
    assert is_path_ignored("src/main.py", sample_patterns) is False
    assert is_path_ignored("README.md", sample_patterns) is False

def test_is_path_ignored_forced_inclusion(sample_patterns):
    assert is_path_ignored("src/important.log", sample_patterns) is False

def test_is_path_ignored_directory(sample_patterns):
    assert is_path_ignored("venv", sample_patterns, is_directory=True) is True
    assert is_path_ignored("venv", sample_patterns, is_directory=False) is False

# --- Test 4: .gitignore loading and inheritance ---

def test_load_gitignore_rules(tmp_path):
    (tmp_path / ".gitignore").write_text("node_modules/\n# comment\n\n!src/keep.js\n", encoding="utf-8")

    rules = load_gitignore_rules(tmp_path)

    assert [r.raw for r in rules] == ["node_modules/", "!src/keep.js"]
    assert rules[1].negated is True

def test_missing_or_unreadable_gitignore_is_empty(tmp_path):
    assert load_gitignore_rules(tmp_path) == []

    (tmp_path / ".gitignore").write_bytes(b"\xff\xfe\x00bad")
    assert load_gitignore_rules(tmp_path) == []

def test_child_negation_overrides_parent(tmp_path):
    sub = tmp_path / "sub"
    sub.mkdir()
    (tmp_path / ".gitignore").write_text("*.log\n", encoding="utf-8")
    (sub / ".gitignore").write_text("!keep.log\n", encoding="utf-8")

    resolver = GitignoreResolver()
    parent_rules = resolver.resolve(tmp_path)
    child_rules = resolver.resolve(sub, parent_rules)

    assert len(parent_rules) == 1
    assert [r.pattern.raw for r in child_rules] == ["*.log", "!keep.log"]
    assert is_excluded_by_rules(sub / "keep.log", child_rules) is False
    assert is_excluded_by_rules(sub / "drop.log", child_rules) is True
    # The parent's frame is left untouched
    assert is_excluded_by_rules(tmp_path / "keep.log", parent_rules) is True

def test_anchored_rule_is_relative_to_its_gitignore(tmp_path):
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / ".gitignore").write_text("/only.txt\n", encoding="utf-8")

    rules = GitignoreResolver().resolve(sub)

    assert is_excluded_by_rules(sub / "only.txt", rules) is True
    assert is_excluded_by_rules(sub / "deeper" / "only.txt", rules) is False

def test_disabled_resolver_returns_no_rules(tmp_path):
    (tmp_path / ".gitignore").write_text("*\n", encoding="utf-8")
    assert GitignoreResolver(disabled=True).resolve(tmp_path) == ()
