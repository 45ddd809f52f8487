"""Project renderer protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol


if TYPE_CHECKING:
    from slnsync.models import ProjectSettings, ResolvedReferences


class ProjectRenderer(Protocol):
    """Protocol for rendering the project file of one unit."""

    style: str
    """Configuration name selecting this renderer."""

    uses_exclusions: bool
    """Whether the renderer needs nested-unit exclusion directories."""

    def render(
        self,
        unit_name: str,
        settings: ProjectSettings,
        references: ResolvedReferences,
    ) -> str:
        """Render the full project text. Must be a pure function of its inputs."""
        ...
