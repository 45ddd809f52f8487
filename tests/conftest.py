"""Test configuration and shared fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

import pytest

from slnsync import (
    CompilationUnit,
    CompilerOptions,
    HashIdentifierGenerator,
    ResponseFileDirectives,
    ResponseFileResolver,
    SyncConfig,
    SyncEngine,
)


if TYPE_CHECKING:
    from collections.abc import Sequence


PROJECT_DIRECTORY = "/FullPath/Example"
AGGREGATE_NAME = "Example"


class MockMetadataProvider:
    """In-memory metadata provider configured through builder methods."""

    def __init__(self):
        self.units: list[CompilationUnit] = []
        self.assets: list[str] = []
        self.owners: dict[str, str] = {}
        self.packages: dict[str, tuple[str, bool]] = {}
        self.response_files: dict[str, str] = {}
        self.manifests: dict[str, str] = {}
        self.analyzers: list[str] = []
        self.user_extensions: list[str] = []
        self.existing_files: set[str] = set()
        self.resolver = ResponseFileResolver(file_exists=self.existing_files.__contains__)

    def with_units(self, *units: CompilationUnit) -> Self:
        """Add units and register them as owners of their source files."""
        for unit in units:
            self.units.append(unit)
            self.assign_files_to_unit(unit.name, *unit.source_files)
        return self

    def with_unit_data(
        self,
        name: str = "Test",
        source_files: Sequence[str] = ("test.cs",),
        *,
        references: Sequence[CompilationUnit] = (),
        allow_unsafe: bool = False,
        response_files: Sequence[str] = (),
        **kwargs: Any,
    ) -> Self:
        """Add a unit built from plain values.

        Extra keyword arguments go to `CompilationUnit`, except `output_path`
        (defaulted), `analyzer_paths` and `ruleset_path` (compiler options).
        """
        output_path = kwargs.pop("output_path", f"Library/ScriptAssemblies/{name}.dll")
        options = CompilerOptions(
            allow_unsafe=allow_unsafe,
            response_files=list(response_files),
            analyzer_paths=kwargs.pop("analyzer_paths", []),
            ruleset_path=kwargs.pop("ruleset_path", None),
        )
        unit = CompilationUnit(
            name=name,
            output_path=output_path,
            source_files=list(source_files),
            references=list(references),
            compiler_options=options,
            **kwargs,
        )
        return self.with_units(unit)

    def unit(self, name: str) -> CompilationUnit:
        return next(unit for unit in self.units if unit.name == name)

    def with_asset_files(self, *paths: str) -> Self:
        self.assets.extend(paths)
        return self

    def assign_files_to_unit(self, unit_name: str, *paths: str) -> Self:
        """Make `unit_name` the owner of paths and of their virtual source paths."""
        for path in paths:
            self.owners[path] = unit_name
            self.owners[f"{path}.cs"] = unit_name
        return self

    def with_response_file_data(self, path: str, text: str, *existing_files: str) -> Self:
        """Register response file content and files visible to reference probing."""
        self.response_files[path] = text
        self.existing_files.update(existing_files)
        return self

    def with_package_asset(self, path: str, package: str, *, internalized: bool = False) -> Self:
        self.packages[path] = (package, internalized)
        return self

    def with_user_extensions(self, *extensions: str) -> Self:
        self.user_extensions.extend(extensions)
        return self

    def with_analyzers(self, *paths: str) -> Self:
        self.analyzers.extend(paths)
        return self

    def with_manifest(self, unit_name: str, manifest_path: str) -> Self:
        self.manifests[unit_name] = manifest_path
        return self

    # MetadataProvider

    def all_units(self) -> list[CompilationUnit]:
        return list(self.units)

    def all_asset_paths(self) -> list[str]:
        return list(self.assets)

    def owning_unit_name(self, path: str) -> str | None:
        return self.owners.get(path)

    def is_internalized_package_path(self, path: str) -> bool:
        package = self.packages.get(path)
        return package is None or package[1]

    def package_name_for(self, path: str) -> str | None:
        package = self.packages.get(path)
        return package[0] if package else None

    def parse_response_file(
        self,
        path: str,
        base_directory: str,
        system_directories: Sequence[str],
    ) -> ResponseFileDirectives:
        if path not in self.response_files:
            return ResponseFileDirectives()
        text = self.response_files[path]
        return self.resolver.parse_text(text, path, base_directory, system_directories)

    def manifest_path_for_unit(self, name: str) -> str | None:
        return self.manifests.get(name)

    def roslyn_analyzer_paths(self) -> list[str]:
        return list(self.analyzers)

    def supported_user_extensions(self) -> list[str]:
        return list(self.user_extensions)


class MemoryArtifactStore:
    """Artifact store keeping files in a dict and counting reads and writes."""

    def __init__(self):
        self.files: dict[str, str] = {}
        self.directories: set[str] = set()
        self.read_count = 0
        self.write_count = 0
        self.failing_paths: set[str] = set()

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.directories

    def read(self, path: str) -> str:
        self.read_count += 1
        return self.files[path]

    def write(self, path: str, text: str) -> None:
        if path in self.failing_paths:
            msg = f"Permission denied: {path}"
            raise PermissionError(msg)
        self.write_count += 1
        self.files[path] = text

    def create_directory(self, path: str) -> None:
        if path in self.failing_paths:
            msg = f"Permission denied: {path}"
            raise PermissionError(msg)
        self.directories.add(path)


@pytest.fixture
def provider() -> MockMetadataProvider:
    """Empty metadata provider."""
    return MockMetadataProvider()


@pytest.fixture
def store() -> MemoryArtifactStore:
    """Empty in-memory artifact store."""
    return MemoryArtifactStore()


@pytest.fixture
def config() -> SyncConfig:
    """Default configuration rooted at the example project."""
    return SyncConfig(project_directory=PROJECT_DIRECTORY)


@pytest.fixture
def identifiers() -> HashIdentifierGenerator:
    return HashIdentifierGenerator()


@pytest.fixture
def engine(
    config: SyncConfig,
    provider: MockMetadataProvider,
    store: MemoryArtifactStore,
) -> SyncEngine:
    """Engine wired to the mock provider and the memory store."""
    return SyncEngine(config, provider, store)
