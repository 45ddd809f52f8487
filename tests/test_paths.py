"""Tests for path normalization and escaping."""

from __future__ import annotations

import pytest

from slnsync.paths import (
    PathNormalizer,
    escape_markup,
    escaped_hint_path,
    escaped_reference_name,
    extension_of,
    file_name_without_extension,
    full_path,
    is_rooted,
    skip_path_prefix,
)


def test_escape_markup_reserved_characters():
    """Test escaping of all markup-reserved characters."""
    assert escape_markup("a&b'c<d>e\"f") == "a&amp;b&apos;c&lt;d&gt;e&quot;f"


def test_escape_markup_leaves_backslashes():
    """Test that separators are never touched by escaping."""
    assert escape_markup("Assets\\Sub\\a.cs") == "Assets\\Sub\\a.cs"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/abs/path.dll", True),
        ("\\\\server\\share.dll", True),
        ("C:\\libs\\a.dll", True),
        ("c:/libs/a.dll", True),
        ("Assets/a.dll", False),
        ("a.dll", False),
    ],
)
def test_is_rooted(path: str, expected: bool):
    """Test rooted path detection for both path flavors."""
    assert is_rooted(path) is expected


def test_skip_path_prefix():
    """Test stripping a directory prefix plus separator."""
    assert skip_path_prefix("\\root\\dir\\a.cs", "\\root\\dir") == "a.cs"
    assert skip_path_prefix("\\root\\directory\\a.cs", "\\root\\dir") == "\\root\\directory\\a.cs"
    assert skip_path_prefix("/root/dir/a.cs", "/root/dir", "/") == "a.cs"


def test_full_path():
    """Test that only relative paths are anchored at the base directory."""
    assert full_path("Library/a.dll", "/Project") == "/Project/Library/a.dll"
    assert full_path("/libs/a.dll", "/Project") == "/libs/a.dll"


def test_file_name_without_extension():
    """Test name extraction for both separators and dotted directories."""
    assert file_name_without_extension("/with.cs/assembly.dll") == "assembly"
    assert file_name_without_extension("C:\\libs\\My.Lib.dll") == "My.Lib"
    assert file_name_without_extension("noextension") == "noextension"


def test_extension_of():
    """Test lower-cased extension without dot."""
    assert extension_of("Assets/Script.CS") == "cs"
    assert extension_of("Assets.dir/README") == ""


def test_relative_path_strips_project_root():
    """Test that project files become backslash-separated relative paths."""
    normalizer = PathNormalizer("/FullPath/Example")
    assert normalizer.relative_path_for("/FullPath/Example/Assets/Script.cs") == "Assets\\Script.cs"
    assert normalizer.relative_path_for("Assets/Script.cs") == "Assets\\Script.cs"
    assert normalizer.relative_path_for("/Other/Script.cs") == "\\Other\\Script.cs"


def test_relative_path_escapes_after_normalizing():
    """Test that escaping happens on the already-normalized path."""
    normalizer = PathNormalizer("/FullPath/Example")
    path = "/FullPath/Example/Assets/Tom & Jerry's.cs"
    assert normalizer.escaped_relative_path_for(path) == "Assets\\Tom &amp; Jerry&apos;s.cs"


def test_package_paths_are_re_resolved():
    """Test that package paths are normalized only when a package matches."""

    def lookup(path: str) -> str | None:
        return "com.example" if path.startswith("Packages/") else None

    normalizer = PathNormalizer("/FullPath/Example", lookup)
    path = "/FullPath/Example/Packages/com.example/../com.other/a.cs"
    assert normalizer.relative_path_for(path) == "Packages\\com.other\\a.cs"

    unmatched = "/FullPath/Example/Assets/../Other/a.cs"
    assert normalizer.relative_path_for(unmatched) == "Assets\\..\\Other\\a.cs"


def test_hint_path_collapses_backslashes():
    """Test that single and doubled backslashes become one forward slash."""
    assert escaped_hint_path("C:\\\\libs\\\\a.dll") == "C:/libs/a.dll"
    assert escaped_hint_path("C:\\libs\\Tom&Jerry.dll") == "C:/libs/Tom&amp;Jerry.dll"


def test_reference_name():
    """Test that references are displayed by file name without extension."""
    assert escaped_reference_name("C:\\libs\\Tom&Jerry.dll") == "Tom&amp;Jerry"
    assert escaped_reference_name("/FullPath/Example/Library/B.dll") == "B"
