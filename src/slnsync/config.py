"""Configuration models for project synchronization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from slnsync.exceptions import ConfigError


if TYPE_CHECKING:
    from upath.types import JoinablePathLike


ProjectStyle = Literal["legacy", "sdk"]


class SyncConfig(BaseModel):
    """Root sync configuration.

    Can be loaded from YAML:

        project_directory: /work/MyGame
        project_style: legacy
        root_namespace: MyGame
        active_defines: [UNITY_EDITOR, UNITY_2021_3]
    """

    model_config = ConfigDict(frozen=True)

    project_directory: str
    """Root directory of the project. Its base name becomes the solution name."""

    project_style: ProjectStyle = "legacy"
    """Which project renderer to use: itemized legacy files or SDK-style globs."""

    generate_all: bool = False
    """Include files from non-internalized packages as well."""

    root_namespace: str = ""
    """Value of the RootNamespace property in generated projects."""

    active_defines: list[str] = Field(default_factory=list)
    """Process-wide defines appended after unit and response-file defines."""

    newline: str = "\r\n"
    """Line separator for generated lines."""

    project_extension: str = ".csproj"
    """Extension of per-unit project files."""

    solution_extension: str = ".sln"
    """Extension of the aggregate solution file."""

    target_framework_version: str = "v4.7.1"
    """TargetFrameworkVersion for legacy projects."""

    sdk_target_framework: str = "net471"
    """TargetFramework for SDK-style projects."""

    lang_version: str = "latest"
    """Default LangVersion, overridden by a /langversion response-file argument."""

    @field_validator("project_directory")
    @classmethod
    def _strip_trailing_separator(cls, value: str) -> str:
        stripped = value.replace("\\", "/").rstrip("/")
        if not stripped:
            msg = "project_directory must not be empty"
            raise ValueError(msg)
        return stripped

    @field_validator("project_extension", "solution_extension")
    @classmethod
    def _ensure_dot(cls, value: str) -> str:
        return value if value.startswith(".") else f".{value}"

    @property
    def project_name(self) -> str:
        """Name of the aggregate, derived from the project directory."""
        return self.project_directory.rsplit("/", 1)[-1]

    @property
    def solution_path(self) -> str:
        """Full path of the solution file."""
        return f"{self.project_directory}/{self.project_name}{self.solution_extension}"

    def project_path(self, unit_name: str) -> str:
        """Full path of the project file for a unit."""
        return f"{self.project_directory}/{unit_name}{self.project_extension}"

    @classmethod
    def from_file(cls, path: JoinablePathLike) -> Self:
        """Load sync configuration from a YAML file.

        Args:
            path: Path to the configuration file

        Raises:
            ConfigError: If loading or validation fails
        """
        import yamling

        try:
            data = yamling.load_yaml_file(path)
            return cls.model_validate(data)
        except (OSError, ValidationError, yamling.YAMLError) as exc:
            raise ConfigError(str(path), str(exc)) from exc
