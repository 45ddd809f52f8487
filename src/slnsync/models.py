"""Core models for project synchronization."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CompilerOptions:
    """Compiler settings attached to a compilation unit."""

    allow_unsafe: bool = False
    """Whether unsafe code is allowed for the unit."""

    response_files: list[str] = field(default_factory=list)
    """Paths of response files carrying extra compiler directives."""

    system_reference_directories: list[str] = field(default_factory=list)
    """Directories probed when resolving relative response-file references."""

    analyzer_paths: list[str] = field(default_factory=list)
    """Analyzer DLLs configured explicitly for this unit."""

    ruleset_path: str | None = None
    """Optional code analysis ruleset file."""


@dataclass
class CompilationUnit:
    """A named set of source files compiled together into one output.

    Created by the metadata provider each pass and treated as immutable
    while the pass runs.
    """

    name: str
    """Unique name within a sync pass."""

    output_path: str
    """Path of the compiled output (e.g. 'Library/ScriptAssemblies/Game.dll')."""

    source_files: list[str] = field(default_factory=list)
    """Ordered source paths. May include '.dll' and manifest entries."""

    defines: list[str] = field(default_factory=list)
    """Preprocessor defines declared for the unit."""

    references: list[CompilationUnit] = field(default_factory=list)
    """Other units this unit references."""

    compiled_references: list[str] = field(default_factory=list)
    """Paths of precompiled external references."""

    compiler_options: CompilerOptions = field(default_factory=CompilerOptions)
    """Compiler settings."""


@dataclass(frozen=True)
class ResponseFileReference:
    """A reference directive from a response file."""

    path: str
    """Resolved full path of the referenced assembly (forward slashes)."""

    alias: str = ""
    """Extern alias, empty when none was given."""


@dataclass
class ResponseFileDirectives:
    """Structured content of one (or several merged) response files."""

    defines: list[str] = field(default_factory=list)
    references: list[ResponseFileReference] = field(default_factory=list)
    other_arguments: list[str] = field(default_factory=list)
    """Raw flags not understood by the parser, e.g. '/langversion:9.0'."""

    unsafe: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def full_path_references(self) -> list[str]:
        """Paths of all references, in directive order."""
        return [ref.path for ref in self.references]


@dataclass(frozen=True)
class AssetRecord:
    """Classification of a single asset path."""

    path: str
    is_compilable: bool
    """Whether the path is a source file of the primary language."""

    is_non_compile: bool
    """Whether the path is eligible but shown only as a non-compile item."""

    owning_unit: str | None = None
    """Unit that claims the asset, if any."""


@dataclass(frozen=True)
class ProjectReference:
    """A reference to another generated project."""

    name: str
    """Name of the referenced unit."""

    unit_id: str
    """Identifier of the referenced unit's project."""


@dataclass
class ResolvedReferences:
    """Everything a project renderer needs to list for one unit."""

    compile_items: list[str] = field(default_factory=list)
    non_compile_items: list[str] = field(default_factory=list)
    project_refs: list[ProjectReference] = field(default_factory=list)
    external_refs: list[str] = field(default_factory=list)
    """Full paths of hint-path references."""

    analyzer_items: list[str] = field(default_factory=list)


@dataclass
class ProjectSettings:
    """Per-unit header values of a project artifact."""

    unit_id: str
    defines: list[str]
    allow_unsafe: bool
    lang_version: str
    ruleset_path: str | None = None
    excluded_directories: list[str] = field(default_factory=list)
    """Directories owned by nested units (SDK style only)."""


@dataclass(frozen=True)
class RenderedArtifact:
    """Text of a project or solution file and where it goes."""

    path: str
    text: str
    bom: bool = False
    """Whether the file is stored with a UTF-8 byte-order mark."""

    @property
    def content(self) -> str:
        """Text as stored, including the byte-order mark if requested."""
        return f"\ufeff{self.text}" if self.bom else self.text


@dataclass
class SyncReport:
    """Outcome of one synchronization pass."""

    units: list[str] = field(default_factory=list)
    """Names of the units whose projects were rendered."""

    written: list[str] = field(default_factory=list)
    """Paths whose content changed and were written."""

    unchanged: list[str] = field(default_factory=list)
    """Paths skipped because on-disk content already matched."""

    parse_errors: dict[str, list[str]] = field(default_factory=dict)
    """Mapping of response-file path -> parse error messages."""
