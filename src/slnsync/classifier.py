"""Asset classification: which paths belong in generated projects."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from slnsync.models import AssetRecord
from slnsync.paths import extension_of


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from slnsync.models import CompilationUnit


class SourceLanguage(Enum):
    """Language a source extension is compiled as."""

    NONE = "none"
    """Supported for display, never compiled."""

    CSHARP = "csharp"


BUILTIN_EXTENSIONS: dict[str, SourceLanguage] = {
    "cs": SourceLanguage.CSHARP,
    "uxml": SourceLanguage.NONE,
    "uss": SourceLanguage.NONE,
    "shader": SourceLanguage.NONE,
    "compute": SourceLanguage.NONE,
    "cginc": SourceLanguage.NONE,
    "hlsl": SourceLanguage.NONE,
    "glslinc": SourceLanguage.NONE,
    "template": SourceLanguage.NONE,
    "raytrace": SourceLanguage.NONE,
}
"""Extensions supported out of the box."""

REFERENCE_EXTENSION = "dll"
MANIFEST_EXTENSION = "asmdef"
REIMPORT_SYNC_EXTENSIONS = frozenset({REFERENCE_EXTENSION, MANIFEST_EXTENSION})
"""Extensions whose mere reimport forces a resync."""

PRIMARY_SOURCE_SUFFIX = ".cs"
"""Suffix appended to an asset path to ask which unit would own it."""


def language_for(extension: str) -> SourceLanguage:
    """Language of an extension, `SourceLanguage.NONE` if unknown."""
    return BUILTIN_EXTENSIONS.get(extension.lower().lstrip("."), SourceLanguage.NONE)


def unit_extension(unit: CompilationUnit) -> str:
    """Extension of the unit's first source file ('NA' for empty units)."""
    return extension_of(unit.source_files[0]) if unit.source_files else "NA"


def triggers_resync_on_reimport(path: str) -> bool:
    """Check whether reimporting `path` (without content change) needs a resync."""
    return extension_of(path) in REIMPORT_SYNC_EXTENSIONS


class UnitClassifier:
    """Decides per asset path whether it is part of the generated projects.

    Results are cached per path. The caches only hold for one view of the
    provider's units and assets; call `reset` before every pass.
    """

    def __init__(
        self,
        is_internalized: Callable[[str], bool],
        *,
        generate_all: bool = False,
        user_extensions: Iterable[str] = (),
    ):
        """Initialize the classifier.

        Args:
            is_internalized: Returns True for first-party paths, including
                files of packages that are treated as first-party
            generate_all: Include files of external packages as well
            user_extensions: Additional extensions (without dot) to include
        """
        self._is_internalized = is_internalized
        self.generate_all = generate_all
        self.user_extensions = frozenset(e.lower().lstrip(".") for e in user_extensions)
        self._eligible: dict[str, bool] = {}
        self._internalized: dict[str, bool] = {}

    def reset(
        self,
        user_extensions: Iterable[str] | None = None,
        *,
        generate_all: bool | None = None,
    ) -> None:
        """Drop all cached decisions, optionally switching settings."""
        if user_extensions is not None:
            self.user_extensions = frozenset(e.lower().lstrip(".") for e in user_extensions)
        if generate_all is not None:
            self.generate_all = generate_all
        self._eligible.clear()
        self._internalized.clear()

    def is_supported_extension(self, extension: str) -> bool:
        extension = extension.lower().lstrip(".")
        return extension in BUILTIN_EXTENSIONS or extension in self.user_extensions

    def is_internalized(self, path: str) -> bool:
        """Cached package-origin check."""
        if not path.strip():
            return False
        if path not in self._internalized:
            self._internalized[path] = self._is_internalized(path)
        return self._internalized[path]

    def is_eligible(self, path: str) -> bool:
        """Check whether `path` should be part of the generated projects."""
        if (cached := self._eligible.get(path)) is not None:
            return cached

        if not self.generate_all and not self.is_internalized(path):
            result = False
        else:
            extension = extension_of(path)
            result = extension in {
                REFERENCE_EXTENSION,
                MANIFEST_EXTENSION,
            } or self.is_supported_extension(extension)
        self._eligible[path] = result
        return result

    def triggers_resync_on_reimport(self, path: str) -> bool:
        return triggers_resync_on_reimport(path)

    def is_non_compile(self, path: str) -> bool:
        """Eligible, supported, but not compiled (e.g. shaders)."""
        extension = extension_of(path)
        return (
            self.is_eligible(path)
            and self.is_supported_extension(extension)
            and language_for(extension) is SourceLanguage.NONE
        )

    def classify(self, path: str, owning_unit: str | None = None) -> AssetRecord:
        """Build the full classification record of a path."""
        extension = extension_of(path)
        eligible = self.is_eligible(path)
        return AssetRecord(
            path=path,
            is_compilable=eligible and language_for(extension) is SourceLanguage.CSHARP,
            is_non_compile=self.is_non_compile(path),
            owning_unit=owning_unit,
        )

    def has_qualifying_sources(self, unit: CompilationUnit) -> bool:
        """Whether the unit gets a project artifact of its own."""
        return any(self.is_eligible(f) for f in unit.source_files)

    def is_primary_unit(self, unit: CompilationUnit) -> bool:
        """Whether the unit is listed in the solution (primary language only)."""
        return language_for(unit_extension(unit)) is SourceLanguage.CSHARP
