"""Metadata provider backed by a YAML snapshot of the project.

Allows running synchronization outside an editor:

    default_unit: Assembly-CSharp
    units:
      - name: Assembly-CSharp
        output_path: Library/ScriptAssemblies/Assembly-CSharp.dll
        source_files: [Assets/Player.cs]
        references: [Game.Core]
      - name: Game.Core
        output_path: Library/ScriptAssemblies/Game.Core.dll
        manifest: Assets/Core/Game.Core.asmdef
        source_files: [Assets/Core/Health.cs]
        response_files: [Assets/csc.rsp]
    assets: [Assets/Player.cs, Assets/Core/Health.cs, Assets/Water.shader]
    packages:
      - name: com.example.tools
        path: Packages/com.example.tools
        source: registry
"""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING, Literal, Self

from pydantic import BaseModel, Field, ValidationError

from slnsync.exceptions import ConfigError
from slnsync.log import get_logger
from slnsync.models import CompilationUnit, CompilerOptions
from slnsync.response_files import ResponseFileResolver


if TYPE_CHECKING:
    from collections.abc import Sequence

    from upath.types import JoinablePathLike

    from slnsync.models import ResponseFileDirectives


logger = get_logger(__name__)

PackageSource = Literal["registry", "builtin", "git", "embedded", "local", "local_tarball"]
FIRST_PARTY_SOURCES: frozenset[str] = frozenset({"embedded", "local"})


class UnitEntry(BaseModel):
    """A compilation unit in the snapshot."""

    name: str
    """Unique unit name."""

    output_path: str
    """Path of the compiled output."""

    source_files: list[str] = Field(default_factory=list)
    """Ordered source files."""

    defines: list[str] = Field(default_factory=list)
    """Declared preprocessor defines."""

    references: list[str] = Field(default_factory=list)
    """Names of referenced units."""

    compiled_references: list[str] = Field(default_factory=list)
    """Precompiled references."""

    manifest: str | None = None
    """Manifest file declaring the unit."""

    allow_unsafe: bool = False
    """Whether unsafe code is allowed."""

    response_files: list[str] = Field(default_factory=list)
    """Response files with extra compiler directives."""

    system_reference_directories: list[str] = Field(default_factory=list)
    """Directories probed for response-file references."""

    analyzers: list[str] = Field(default_factory=list)
    """Analyzers configured for this unit."""

    ruleset: str | None = None
    """Code analysis ruleset file."""


class PackageEntry(BaseModel):
    """A package whose files live below `path`."""

    name: str
    """Package name."""

    path: str
    """Directory of the package, relative to the project."""

    source: PackageSource = "registry"
    """Where the package comes from. Embedded and local packages are first-party."""


class ProjectSnapshot(BaseModel):
    """Root model of a provider snapshot file."""

    units: list[UnitEntry] = Field(default_factory=list)
    """Compilation units."""

    assets: list[str] = Field(default_factory=list)
    """All asset paths."""

    packages: list[PackageEntry] = Field(default_factory=list)
    """Known packages."""

    analyzers: list[str] = Field(default_factory=list)
    """Analyzers applied to every unit."""

    user_extensions: list[str] = Field(default_factory=list)
    """Additional extensions to include."""

    default_unit: str | None = None
    """Unit owning scripts not claimed by any manifest."""


class ManifestMetadataProvider:
    """`MetadataProvider` serving a static `ProjectSnapshot`."""

    def __init__(
        self,
        snapshot: ProjectSnapshot,
        resolver: ResponseFileResolver | None = None,
    ):
        self.snapshot = snapshot
        self.resolver = resolver or ResponseFileResolver()
        self._entries = {entry.name: entry for entry in snapshot.units}
        unknown = [
            ref for entry in snapshot.units for ref in entry.references if ref not in self._entries
        ]
        if unknown:
            msg = f"Unknown unit references: {', '.join(sorted(set(unknown)))}"
            raise ConfigError("snapshot", msg)
        if snapshot.default_unit and snapshot.default_unit not in self._entries:
            raise ConfigError("snapshot", f"Unknown default unit: {snapshot.default_unit}")

    @classmethod
    def from_file(cls, path: JoinablePathLike) -> Self:
        """Load a provider snapshot from a YAML file.

        Raises:
            ConfigError: If the file cannot be loaded or is invalid
        """
        import yamling

        try:
            data = yamling.load_yaml_file(path)
            snapshot = ProjectSnapshot.model_validate(data or {})
        except (OSError, ValidationError, yamling.YAMLError) as exc:
            raise ConfigError(str(path), str(exc)) from exc
        logger.debug("Loaded project snapshot", path=str(path), units=len(snapshot.units))
        return cls(snapshot)

    def all_units(self) -> list[CompilationUnit]:
        units = {
            entry.name: CompilationUnit(
                name=entry.name,
                output_path=entry.output_path,
                source_files=list(entry.source_files),
                defines=list(entry.defines),
                compiled_references=list(entry.compiled_references),
                compiler_options=CompilerOptions(
                    allow_unsafe=entry.allow_unsafe,
                    response_files=list(entry.response_files),
                    system_reference_directories=list(entry.system_reference_directories),
                    analyzer_paths=list(entry.analyzers),
                    ruleset_path=entry.ruleset,
                ),
            )
            for entry in self.snapshot.units
        }
        for entry in self.snapshot.units:
            units[entry.name].references = [units[ref] for ref in entry.references]
        return list(units.values())

    def all_asset_paths(self) -> list[str]:
        return list(self.snapshot.assets)

    def owning_unit_name(self, path: str) -> str | None:
        """Exact source membership first, then the closest enclosing manifest."""
        for entry in self.snapshot.units:
            if path in entry.source_files:
                return entry.name

        best: tuple[int, str] | None = None
        lowered = path.lower()
        for entry in self.snapshot.units:
            if not entry.manifest:
                continue
            directory = posixpath.dirname(entry.manifest).lower()
            prefix = f"{directory}/" if directory else ""
            if lowered.startswith(prefix) and (best is None or len(prefix) > best[0]):
                best = (len(prefix), entry.name)
        if best is not None:
            return best[1]
        return self.snapshot.default_unit

    def _package_for(self, path: str) -> PackageEntry | None:
        for package in self.snapshot.packages:
            root = package.path.rstrip("/")
            if path == root or path.startswith(f"{root}/"):
                return package
        return None

    def is_internalized_package_path(self, path: str) -> bool:
        package = self._package_for(path)
        return package is None or package.source in FIRST_PARTY_SOURCES

    def package_name_for(self, path: str) -> str | None:
        package = self._package_for(path)
        return package.name if package else None

    def parse_response_file(
        self,
        path: str,
        base_directory: str,
        system_directories: Sequence[str],
    ) -> ResponseFileDirectives:
        return self.resolver.parse(path, base_directory, system_directories)

    def manifest_path_for_unit(self, name: str) -> str | None:
        entry = self._entries.get(name)
        return entry.manifest if entry else None

    def roslyn_analyzer_paths(self) -> list[str]:
        return list(self.snapshot.analyzers)

    def supported_user_extensions(self) -> list[str]:
        return list(self.snapshot.user_extensions)
