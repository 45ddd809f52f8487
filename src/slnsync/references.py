"""Resolve the items and references listed in a unit's project."""

from __future__ import annotations

from typing import TYPE_CHECKING

from slnsync.classifier import PRIMARY_SOURCE_SUFFIX, REFERENCE_EXTENSION
from slnsync.models import ProjectReference, ResolvedReferences
from slnsync.paths import extension_of, full_path
from slnsync.response_files import other_arguments_lookup


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping, Sequence

    from slnsync.classifier import UnitClassifier
    from slnsync.identifiers import IdentifierGenerator
    from slnsync.models import CompilationUnit, ResponseFileDirectives


BASE_DEFINES = ("DEBUG", "TRACE")
ANALYZER_ARGUMENTS = ("analyzer", "a")


def _distinct(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def merge_defines(*define_sets: Iterable[str]) -> list[str]:
    """Merge define sets behind the base defines.

    Duplicates are compared case-insensitively; the first spelling wins.
    """
    merged: dict[str, str] = {}
    for define in (*BASE_DEFINES, *(d for defines in define_sets for d in defines)):
        if define and define.lower() not in merged:
            merged[define.lower()] = define
    return list(merged.values())


class ReferenceResolver:
    """Computes compile items and references for units of one pass."""

    def __init__(
        self,
        classifier: UnitClassifier,
        identifiers: IdentifierGenerator,
        aggregate_name: str,
        project_directory: str,
    ):
        self.classifier = classifier
        self.identifiers = identifiers
        self.aggregate_name = aggregate_name
        self.project_directory = project_directory

    def non_compile_items_by_unit(
        self,
        asset_paths: Iterable[str],
        owning_unit_name: Callable[[str], str | None],
    ) -> dict[str, list[str]]:
        """Group eligible non-compilable assets by the unit that would own them.

        Ownership is decided by asking for the owner of the asset path with
        the primary source suffix appended.
        """
        items: dict[str, list[str]] = {}
        for asset in asset_paths:
            if not self.classifier.is_non_compile(asset):
                continue
            owner = owning_unit_name(f"{asset}{PRIMARY_SOURCE_SUFFIX}")
            if not owner:
                continue
            items.setdefault(owner.removesuffix(".dll"), []).append(asset)
        return items

    def analyzer_paths_for(
        self,
        unit: CompilationUnit,
        directives: ResponseFileDirectives,
        roslyn_analyzer_paths: Sequence[str] = (),
    ) -> list[str]:
        """Unit-configured, response-file and global analyzers, distinct.

        Relative paths are joined onto the project directory.
        """
        lookup = other_arguments_lookup(directives.other_arguments)
        from_arguments = [
            path
            for key in ANALYZER_ARGUMENTS
            for value in lookup.get(key, [])
            for path in value.split(";")
            if path
        ]
        paths = [*unit.compiler_options.analyzer_paths, *from_arguments, *roslyn_analyzer_paths]
        return _distinct(full_path(path, self.project_directory) for path in paths)

    def resolve(
        self,
        unit: CompilationUnit,
        directives: ResponseFileDirectives,
        roslyn_analyzer_paths: Sequence[str] = (),
        non_compile_items: Mapping[str, list[str]] | None = None,
    ) -> ResolvedReferences:
        """Resolve everything the project of `unit` lists.

        Args:
            unit: Unit to resolve
            directives: Merged response-file directives of the unit
            roslyn_analyzer_paths: Analyzers applied to every unit
            non_compile_items: Result of `non_compile_items_by_unit` for the pass
        """
        compile_items: list[str] = []
        dll_entries: list[str] = []
        for file in unit.source_files:
            if not self.classifier.is_eligible(file):
                continue
            if extension_of(file) == REFERENCE_EXTENSION:
                dll_entries.append(file)
            else:
                compile_items.append(file)

        project_refs: list[ProjectReference] = []
        demoted: list[str] = []
        for reference in unit.references:
            if self.classifier.has_qualifying_sources(reference):
                unit_id = self.identifiers.unit_id(self.aggregate_name, reference.name)
                project_refs.append(ProjectReference(name=reference.name, unit_id=unit_id))
            else:
                # No project will exist for it, reference the compiled output.
                demoted.append(reference.output_path)

        analyzer_items = self.analyzer_paths_for(unit, directives, roslyn_analyzer_paths)
        analyzers = set(analyzer_items)
        candidates = _distinct([
            *unit.compiled_references,
            *directives.full_path_references,
            *dll_entries,
            *demoted,
        ])
        # Compare joined paths, analyzers are already joined.
        joined = (full_path(ref, self.project_directory) for ref in candidates)
        external_refs = _distinct(path for path in joined if path not in analyzers)
        return ResolvedReferences(
            compile_items=compile_items,
            non_compile_items=list((non_compile_items or {}).get(unit.name, [])),
            project_refs=project_refs,
            external_refs=external_refs,
            analyzer_items=analyzer_items,
        )
