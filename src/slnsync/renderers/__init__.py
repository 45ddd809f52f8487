"""Project and solution renderers."""

from __future__ import annotations

from slnsync.renderers.legacy import LegacyProjectRenderer
from slnsync.renderers.protocol import ProjectRenderer
from slnsync.renderers.sdk import SdkProjectRenderer
from slnsync.renderers.solution import SolutionRenderer


PROJECT_RENDERERS: dict[str, type[LegacyProjectRenderer | SdkProjectRenderer]] = {
    LegacyProjectRenderer.style: LegacyProjectRenderer,
    SdkProjectRenderer.style: SdkProjectRenderer,
}
"""Project renderers by `SyncConfig.project_style`."""

__all__ = [
    "PROJECT_RENDERERS",
    "LegacyProjectRenderer",
    "ProjectRenderer",
    "SdkProjectRenderer",
    "SolutionRenderer",
]
