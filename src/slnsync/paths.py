"""Path normalization and markup escaping for generated project files.

Item paths (compile and non-compile items) are written relative to the
project directory with backslash separators. Reference hint paths are
written with forward slashes. In both cases separators are
normalized first and markup-reserved characters are escaped last, so a
backslash never takes part in escaping.
"""

from __future__ import annotations

import posixpath
import re
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Callable


_MARKUP_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&apos;"}
_MARKUP_PATTERN = re.compile(r"[&<>\"']")
_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:[\\/]")
# A single or doubled backslash collapses to one forward slash.
_BACKSLASH_PATTERN = re.compile(r"\\\\?")
_SEPARATOR_PATTERN = re.compile(r"[\\/]")


def escape_markup(text: str) -> str:
    """Escape characters reserved by the project file markup."""
    return _MARKUP_PATTERN.sub(lambda m: _MARKUP_ESCAPES[m.group()], text)


def is_rooted(path: str) -> bool:
    """Check whether a path is absolute on either POSIX or Windows."""
    return path.startswith(("/", "\\")) or bool(_DRIVE_PATTERN.match(path))


def to_backslashes(path: str) -> str:
    return path.replace("/", "\\")


def to_forward_slashes(path: str) -> str:
    return _BACKSLASH_PATTERN.sub("/", path)


def skip_path_prefix(path: str, prefix: str, separator: str = "\\") -> str:
    """Strip `prefix` plus one separator from `path` if present."""
    if path.startswith(f"{prefix}{separator}"):
        return path[len(prefix) + 1 :]
    return path


def full_path(path: str, base_directory: str) -> str:
    """Join relative paths onto `base_directory`, leave rooted ones alone."""
    if is_rooted(path):
        return path
    return f"{base_directory}/{path}"


def file_name_without_extension(path: str) -> str:
    """Return the last path segment without its final extension.

    Works on both separator styles, e.g. '/with.cs/assembly.dll' -> 'assembly'.
    """
    name = _SEPARATOR_PATTERN.split(path)[-1]
    stem, dot, _ = name.rpartition(".")
    return stem if dot else name


def extension_of(path: str) -> str:
    """Return the lower-cased extension of a path without the dot ('' if none)."""
    name = _SEPARATOR_PATTERN.split(path)[-1]
    _, dot, ext = name.rpartition(".")
    return ext.lower() if dot else ""


class PathNormalizer:
    """Turns provider paths into the forms written to project files."""

    def __init__(
        self,
        project_directory: str,
        package_lookup: Callable[[str], str | None] | None = None,
    ):
        """Initialize the normalizer.

        Args:
            project_directory: Project root, used as the prefix to strip
            package_lookup: Returns the package owning a path, if any. Paths
                with a package match are re-resolved against the project root.
        """
        self.project_directory = to_forward_slashes(project_directory).rstrip("/")
        self._package_lookup = package_lookup

    def relative_path_for(self, path: str) -> str:
        """Backslash-separated path relative to the project root (unescaped)."""
        project_dir = to_backslashes(self.project_directory)
        relative = skip_path_prefix(to_backslashes(path), project_dir)
        if self._package_lookup is None:
            return relative

        forward = relative.replace("\\", "/")
        if self._package_lookup(forward) is None:
            return relative

        # Package files may be relocated; resolve before stripping the root again.
        resolved = posixpath.normpath(full_path(forward, self.project_directory))
        return skip_path_prefix(to_backslashes(resolved), project_dir)

    def escaped_relative_path_for(self, path: str) -> str:
        return escape_markup(self.relative_path_for(path))


def escaped_hint_path(reference: str) -> str:
    """Forward-slash, markup-escaped form of a reference path."""
    return escape_markup(to_forward_slashes(reference))


def escaped_reference_name(reference: str) -> str:
    """Display name of a reference: its file name without extension, escaped."""
    return escape_markup(file_name_without_extension(to_forward_slashes(reference)))
