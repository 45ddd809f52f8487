"""Main orchestrator for project synchronization."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from slnsync.classifier import UnitClassifier, unit_extension
from slnsync.exceptions import ArtifactWriteError
from slnsync.excludes import get_excluded_paths
from slnsync.identifiers import HashIdentifierGenerator
from slnsync.log import get_logger
from slnsync.models import ProjectSettings, RenderedArtifact, SyncReport
from slnsync.paths import PathNormalizer
from slnsync.references import ReferenceResolver, merge_defines
from slnsync.renderers import PROJECT_RENDERERS, SolutionRenderer
from slnsync.response_files import merge_directives, other_arguments_lookup
from slnsync.store import UPathArtifactStore, sync_file_if_changed


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from slnsync.config import SyncConfig
    from slnsync.identifiers import IdentifierGenerator
    from slnsync.models import CompilationUnit, ResponseFileDirectives
    from slnsync.provider import MetadataProvider
    from slnsync.store import ArtifactStore


logger = get_logger(__name__)

LANG_VERSION_ARGUMENT = "langversion"


class SyncEngine:
    """Keeps project and solution files in line with the provider's units.

    Two entry points: `full_sync` regenerates everything, `sync_if_needed`
    regenerates only the projects implicated by a set of changed paths.
    Content is compared before writing, unchanged artifacts are not written.
    """

    def __init__(
        self,
        config: SyncConfig,
        provider: MetadataProvider,
        store: ArtifactStore | None = None,
        identifiers: IdentifierGenerator | None = None,
    ):
        """Initialize the engine.

        Args:
            config: Sync configuration
            provider: Source of units and assets
            store: Artifact storage (default: local filesystem)
            identifiers: Id generator (default: name digests)
        """
        self.config = config
        self.provider = provider
        self.store: ArtifactStore = store or UPathArtifactStore()
        self.identifiers: IdentifierGenerator = identifiers or HashIdentifierGenerator()
        self.classifier = UnitClassifier(
            provider.is_internalized_package_path,
            generate_all=config.generate_all,
        )
        self.normalizer = PathNormalizer(config.project_directory, provider.package_name_for)
        self.resolver = ReferenceResolver(
            self.classifier,
            self.identifiers,
            config.project_name,
            config.project_directory,
        )
        self.renderer = PROJECT_RENDERERS[config.project_style](config, self.normalizer)
        self.solution_renderer = SolutionRenderer(config, self.identifiers)
        self.last_report: SyncReport | None = None
        self._write_lock = threading.Lock()

    def solution_exists(self) -> bool:
        return self.store.exists(self.config.solution_path)

    def full_sync(self) -> SyncReport:
        """Regenerate the solution and every project.

        Raises:
            ArtifactWriteError: If any artifact could not be written. All
                other artifacts of the pass are still written.
        """
        self._begin_pass()
        units = self.provider.all_units()
        project_units = self._project_units(units)
        logger.debug("Starting full sync", units=len(project_units))

        report = SyncReport()
        artifacts = [self._render_solution(project_units)]
        artifacts.extend(self._render_projects(project_units, project_units, report))
        self._write(artifacts, report)
        return report

    def sync_if_needed(
        self,
        affected_paths: Iterable[str],
        reimported_paths: Iterable[str],
    ) -> bool:
        """Regenerate the projects implicated by changed paths.

        Without an existing solution there is no baseline to update and
        nothing happens.

        Args:
            affected_paths: Paths that were added, removed or modified
            reimported_paths: Paths that were reimported without change

        Returns:
            Whether a resync was performed

        Raises:
            ArtifactWriteError: If any artifact could not be written
        """
        affected = list(affected_paths)
        reimported = list(reimported_paths)
        self._begin_pass()
        if not self.solution_exists():
            logger.debug("No solution yet, skipping incremental sync")
            return False

        needed = any(self.classifier.is_eligible(p) for p in affected) or any(
            self.classifier.triggers_resync_on_reimport(p) for p in reimported
        )
        if not needed:
            return False

        names = {name for path in (*affected, *reimported) if (name := self._unit_name_for(path))}
        project_units = self._project_units(self.provider.all_units())
        implicated = [unit for unit in project_units if unit.name in names]
        logger.debug("Starting incremental sync", units=[unit.name for unit in implicated])

        report = SyncReport()
        artifacts = self._render_projects(implicated, project_units, report)
        self._write(artifacts, report)
        return True

    def _begin_pass(self) -> None:
        self.classifier.reset(
            self.provider.supported_user_extensions(),
            generate_all=self.config.generate_all,
        )

    def _project_units(self, units: Sequence[CompilationUnit]) -> list[CompilationUnit]:
        return [unit for unit in units if self.classifier.has_qualifying_sources(unit)]

    def _unit_name_for(self, path: str) -> str | None:
        owner = self.provider.owning_unit_name(path)
        if not owner:
            return None
        return owner.removesuffix(".dll")

    def _render_solution(self, units: Sequence[CompilationUnit]) -> RenderedArtifact:
        listed = [
            (unit.name, unit_extension(unit))
            for unit in units
            if self.classifier.is_primary_unit(unit)
        ]
        text = self.solution_renderer.render(listed)
        return RenderedArtifact(path=self.config.solution_path, text=text, bom=True)

    def _render_projects(
        self,
        units: Sequence[CompilationUnit],
        project_units: Sequence[CompilationUnit],
        report: SyncReport,
    ) -> list[RenderedArtifact]:
        non_compile = self.resolver.non_compile_items_by_unit(
            self.provider.all_asset_paths(),
            self.provider.owning_unit_name,
        )
        manifests = [
            manifest
            for unit in project_units
            if (manifest := self.provider.manifest_path_for_unit(unit.name))
        ]
        analyzers = self.provider.roslyn_analyzer_paths()
        artifacts = []
        for unit in units:
            directives = self._parse_response_files(unit, report)
            references = self.resolver.resolve(unit, directives, analyzers, non_compile)
            settings = self._settings_for(unit, directives, manifests)
            text = self.renderer.render(unit.name, settings, references)
            artifacts.append(RenderedArtifact(path=self.config.project_path(unit.name), text=text))
            report.units.append(unit.name)
        return artifacts

    def _parse_response_files(
        self,
        unit: CompilationUnit,
        report: SyncReport,
    ) -> ResponseFileDirectives:
        parsed = []
        for path in unit.compiler_options.response_files:
            directives = self.provider.parse_response_file(
                path,
                self.config.project_directory,
                unit.compiler_options.system_reference_directories,
            )
            for error in directives.errors:
                logger.error(
                    "Response file parse error",
                    response_file=path,
                    directive=error,
                    unit=unit.name,
                )
                known = report.parse_errors.setdefault(path, [])
                if error not in known:
                    known.append(error)
            parsed.append(directives)
        return merge_directives(parsed)

    def _settings_for(
        self,
        unit: CompilationUnit,
        directives: ResponseFileDirectives,
        manifests: Sequence[str],
    ) -> ProjectSettings:
        lookup = other_arguments_lookup(directives.other_arguments)
        lang_versions = lookup.get(LANG_VERSION_ARGUMENT)
        excluded: list[str] = []
        if self.renderer.uses_exclusions:
            current = self.provider.manifest_path_for_unit(unit.name)
            excluded = get_excluded_paths(current, manifests)
        return ProjectSettings(
            unit_id=self.identifiers.unit_id(self.config.project_name, unit.name),
            defines=merge_defines(unit.defines, directives.defines, self.config.active_defines),
            allow_unsafe=unit.compiler_options.allow_unsafe or directives.unsafe,
            lang_version=lang_versions[-1] if lang_versions else self.config.lang_version,
            ruleset_path=unit.compiler_options.ruleset_path,
            excluded_directories=excluded,
        )

    def _write(self, artifacts: Sequence[RenderedArtifact], report: SyncReport) -> None:
        failures: dict[str, OSError] = {}
        with self._write_lock:
            if artifacts and not self.store.exists(self.config.project_directory):
                try:
                    self.store.create_directory(self.config.project_directory)
                except OSError as exc:
                    # Artifact writes are still attempted.
                    logger.exception(
                        "Failed to create project directory",
                        path=self.config.project_directory,
                    )
                    failures[self.config.project_directory] = exc
            for artifact in artifacts:
                try:
                    changed = sync_file_if_changed(self.store, artifact.path, artifact.content)
                except OSError as exc:
                    logger.exception("Failed to write artifact", path=artifact.path)
                    failures[artifact.path] = exc
                    continue
                (report.written if changed else report.unchanged).append(artifact.path)
        self.last_report = report
        logger.debug(
            "Sync pass finished",
            written=len(report.written),
            unchanged=len(report.unchanged),
            failed=len(failures),
        )
        if failures:
            raise ArtifactWriteError(failures)
