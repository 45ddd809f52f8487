"""Renderer for SDK-style project files using directory globs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from slnsync.paths import escape_markup, escaped_hint_path, escaped_reference_name


if TYPE_CHECKING:
    from slnsync.config import SyncConfig
    from slnsync.models import ProjectSettings, ResolvedReferences
    from slnsync.paths import PathNormalizer


class SdkProjectRenderer:
    """Relies on SDK default globs instead of listing compile items.

    Directories owned by nested units are removed from the globs, so each
    file is only picked up by the unit that owns it.
    """

    style = "sdk"
    uses_exclusions = True

    def __init__(self, config: SyncConfig, normalizer: PathNormalizer):
        self.config = config
        self.normalizer = normalizer

    def render(
        self,
        unit_name: str,
        settings: ProjectSettings,
        references: ResolvedReferences,
    ) -> str:
        defines = escape_markup(";".join(settings.defines))
        lines = [
            '<Project Sdk="Microsoft.NET.Sdk">',
            "  <PropertyGroup>",
            f"    <TargetFramework>{self.config.sdk_target_framework}</TargetFramework>",
            f"    <LangVersion>{escape_markup(settings.lang_version)}</LangVersion>",
            f"    <AssemblyName>{escape_markup(unit_name)}</AssemblyName>",
            f"    <DefineConstants>{defines}</DefineConstants>",
            f"    <AllowUnsafeBlocks>{str(settings.allow_unsafe).lower()}</AllowUnsafeBlocks>",
        ]
        if self.config.root_namespace:
            lines.append(f"    <RootNamespace>{escape_markup(self.config.root_namespace)}</RootNamespace>")  # noqa: E501
        if settings.ruleset_path:
            ruleset = escape_markup(settings.ruleset_path)
            lines.append(f"    <CodeAnalysisRuleSet>{ruleset}</CodeAnalysisRuleSet>")
        lines += [
            "  </PropertyGroup>",
            "  <ItemGroup>",
            r'    <None Remove="**\*.meta" />',
            r'    <None Remove="Library\*" />',
        ]
        for directory in settings.excluded_directories:
            path = self.normalizer.escaped_relative_path_for(directory)
            lines.append(rf'    <Compile Remove="{path}\**" /> <None Remove="{path}\**" />')
        lines.extend(
            f'    <None Include="{self.normalizer.escaped_relative_path_for(item)}" />'
            for item in references.non_compile_items
        )
        lines.extend(
            f'    <ProjectReference Include="{escape_markup(ref.name)}{self.config.project_extension}" />'  # noqa: E501
            for ref in references.project_refs
        )
        for reference in references.external_refs:
            lines.append(f'    <Reference Include="{escaped_reference_name(reference)}">')
            lines.append(f"      <HintPath>{escaped_hint_path(reference)}</HintPath>")
            lines.append("    </Reference>")
        lines.append("  </ItemGroup>")
        if references.analyzer_items:
            lines.append("  <ItemGroup>")
            lines.extend(
                f'    <Analyzer Include="{escape_markup(path)}" />'
                for path in references.analyzer_items
            )
            lines.append("  </ItemGroup>")
        lines += ["</Project>", ""]
        return self.config.newline.join(lines)
