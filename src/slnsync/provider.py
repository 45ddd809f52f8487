"""Metadata provider protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol


if TYPE_CHECKING:
    from collections.abc import Sequence

    from slnsync.models import CompilationUnit, ResponseFileDirectives


class MetadataProvider(Protocol):
    """Source of units, assets and package information for a sync pass."""

    def all_units(self) -> list[CompilationUnit]:
        """Current compilation units. Treated as immutable during a pass."""
        ...

    def all_asset_paths(self) -> list[str]:
        """All asset paths of the project."""
        ...

    def owning_unit_name(self, path: str) -> str | None:
        """Name of the unit that compiles (or would compile) `path`."""
        ...

    def is_internalized_package_path(self, path: str) -> bool:
        """True if `path` is first-party (not from an external package)."""
        ...

    def package_name_for(self, path: str) -> str | None:
        """Name of the package containing `path`, if any."""
        ...

    def parse_response_file(
        self,
        path: str,
        base_directory: str,
        system_directories: Sequence[str],
    ) -> ResponseFileDirectives:
        """Parse a response file of a unit."""
        ...

    def manifest_path_for_unit(self, name: str) -> str | None:
        """Manifest declaring the unit, None for implicit units."""
        ...

    def roslyn_analyzer_paths(self) -> list[str]:
        """Analyzers applied to every unit."""
        ...

    def supported_user_extensions(self) -> list[str]:
        """Project-level extra extensions (without dot) to include."""
        ...
