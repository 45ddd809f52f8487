"""Project and solution file synchronization for compilation units.

This module provides a system for:
- Rendering one project file per compilation unit and one solution file
  (itemized legacy projects or SDK-style glob projects)
- Resolving compile items, non-compile items and references per unit
- Parsing compiler response files for defines, references and flags
- Deciding cheaply whether changed files require a resync
- Writing artifacts only when their content changed
"""

from __future__ import annotations

from slnsync.classifier import BUILTIN_EXTENSIONS, SourceLanguage, UnitClassifier
from slnsync.config import SyncConfig
from slnsync.exceptions import ArtifactWriteError, ConfigError, SyncError
from slnsync.excludes import get_excluded_paths
from slnsync.identifiers import HashIdentifierGenerator, IdentifierGenerator
from slnsync.manager import SyncEngine
from slnsync.manifest_provider import ManifestMetadataProvider, ProjectSnapshot
from slnsync.models import (
    AssetRecord,
    CompilationUnit,
    CompilerOptions,
    ProjectReference,
    ProjectSettings,
    RenderedArtifact,
    ResolvedReferences,
    ResponseFileDirectives,
    ResponseFileReference,
    SyncReport,
)
from slnsync.paths import PathNormalizer, escape_markup
from slnsync.provider import MetadataProvider
from slnsync.references import ReferenceResolver, merge_defines
from slnsync.renderers import (
    PROJECT_RENDERERS,
    LegacyProjectRenderer,
    ProjectRenderer,
    SdkProjectRenderer,
    SolutionRenderer,
)
from slnsync.response_files import ResponseFileResolver, merge_directives, other_arguments_lookup
from slnsync.store import ArtifactStore, UPathArtifactStore, sync_file_if_changed

__all__ = [
    # Classification
    "BUILTIN_EXTENSIONS",
    # Renderers
    "PROJECT_RENDERERS",
    # Storage
    "ArtifactStore",
    # Errors
    "ArtifactWriteError",
    # Models
    "AssetRecord",
    "CompilationUnit",
    "CompilerOptions",
    "ConfigError",
    # Identifiers
    "HashIdentifierGenerator",
    "IdentifierGenerator",
    "LegacyProjectRenderer",
    # Providers
    "ManifestMetadataProvider",
    "MetadataProvider",
    # Paths
    "PathNormalizer",
    "ProjectReference",
    "ProjectRenderer",
    "ProjectSettings",
    "ProjectSnapshot",
    # References
    "ReferenceResolver",
    "RenderedArtifact",
    "ResolvedReferences",
    "ResponseFileDirectives",
    "ResponseFileReference",
    # Response files
    "ResponseFileResolver",
    "SdkProjectRenderer",
    "SolutionRenderer",
    "SourceLanguage",
    # Config
    "SyncConfig",
    # Core
    "SyncEngine",
    "SyncError",
    "SyncReport",
    "UPathArtifactStore",
    "UnitClassifier",
    "escape_markup",
    "get_excluded_paths",
    "merge_defines",
    "merge_directives",
    "other_arguments_lookup",
    "sync_file_if_changed",
]
