"""Exclusion globs for units nested inside another unit's directory."""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable


def get_excluded_paths(
    current_manifest_path: str | None,
    all_manifest_paths: Iterable[str],
) -> list[str]:
    """Get the directories a unit's directory glob must not capture.

    Args:
        current_manifest_path: Manifest of the unit being rendered, None for
            the implicit root unit
        all_manifest_paths: Manifests of all units

    Returns:
        Containing directories of the excluded manifests, first-seen order
    """
    current_dir = None
    if current_manifest_path is not None:
        directory = posixpath.dirname(current_manifest_path).lower()
        current_dir = f"{directory}/" if directory else ""

    excluded: list[str] = []
    for path in all_manifest_paths:
        if path == current_manifest_path:
            continue
        if current_dir is not None and not path.lower().startswith(current_dir):
            continue
        directory = posixpath.dirname(path)
        if directory and directory not in excluded:
            excluded.append(directory)
    return excluded
