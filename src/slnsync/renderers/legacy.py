"""Renderer for itemized (pre-SDK) project files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from slnsync.paths import escape_markup, escaped_hint_path, escaped_reference_name


if TYPE_CHECKING:
    from slnsync.config import SyncConfig
    from slnsync.models import ProjectSettings, ResolvedReferences
    from slnsync.paths import PathNormalizer


MSBUILD_NAMESPACE_URI = "http://schemas.microsoft.com/developer/msbuild/2003"
TOOLS_VERSION = "4.0"
PRODUCT_VERSION = "10.0.20506"
BASE_DIRECTORY = "."

FOOTER_LINES = (
    "  </ItemGroup>",
    r'  <Import Project="$(MSBuildToolsPath)\Microsoft.CSharp.targets" />',
    "  <!-- To modify your build process, add your task inside one of the targets below and uncomment it.",  # noqa: E501
    "       Other similar extension points exist, see Microsoft.Common.targets.",
    '  <Target Name="BeforeBuild">',
    "  </Target>",
    '  <Target Name="AfterBuild">',
    "  </Target>",
    "  -->",
    "</Project>",
    "",
)


def _flag(value: bool) -> str:
    return "True" if value else "False"


class LegacyProjectRenderer:
    """Lists every compile item, non-compile item and reference explicitly.

    Example output (shortened):

        <Project ToolsVersion="4.0" DefaultTargets="Build" ...>
          ...
          <ItemGroup>
             <Compile Include="Assets\\Player.cs" />
             <None Include="Assets\\Water.shader" />
         <Reference Include="Newtonsoft.Json">
         <HintPath>/work/Game/Assets/Plugins/Newtonsoft.Json.dll</HintPath>
         </Reference>
          </ItemGroup>
          ...
        </Project>
    """

    style = "legacy"
    uses_exclusions = False

    def __init__(self, config: SyncConfig, normalizer: PathNormalizer):
        self.config = config
        self.normalizer = normalizer

    def render(
        self,
        unit_name: str,
        settings: ProjectSettings,
        references: ResolvedReferences,
    ) -> str:
        lines = self._header(unit_name, settings, references.analyzer_items)
        lines.extend(
            f'     <Compile Include="{self.normalizer.escaped_relative_path_for(item)}" />'
            for item in references.compile_items
        )
        lines.extend(
            f'     <None Include="{self.normalizer.escaped_relative_path_for(item)}" />'
            for item in references.non_compile_items
        )
        for reference in references.external_refs:
            lines.append(f' <Reference Include="{escaped_reference_name(reference)}">')
            lines.append(f" <HintPath>{escaped_hint_path(reference)}</HintPath>")
            lines.append(" </Reference>")

        if references.project_refs:
            lines.append("  </ItemGroup>")
            lines.append("  <ItemGroup>")
            extension = self.config.project_extension
            for ref in references.project_refs:
                name = escape_markup(ref.name)
                lines.append(f'    <ProjectReference Include="{name}{extension}">')
                lines.append(f"      <Project>{{{ref.unit_id}}}</Project>")
                lines.append(f"      <Name>{name}</Name>")
                lines.append("      <ReferenceOutputAssembly>false</ReferenceOutputAssembly>")
                lines.append("    </ProjectReference>")

        lines.extend(FOOTER_LINES)
        return self.config.newline.join(lines)

    def _header(
        self,
        unit_name: str,
        settings: ProjectSettings,
        analyzers: list[str],
    ) -> list[str]:
        defines = ";".join(settings.defines)
        unsafe = _flag(settings.allow_unsafe)
        lines = [
            '<?xml version="1.0" encoding="utf-8"?>',
            f'<Project ToolsVersion="{TOOLS_VERSION}" DefaultTargets="Build" xmlns="{MSBUILD_NAMESPACE_URI}">',  # noqa: E501
            "  <PropertyGroup>",
            f"    <LangVersion>{escape_markup(settings.lang_version)}</LangVersion>",
        ]
        if settings.ruleset_path:
            ruleset = escape_markup(settings.ruleset_path)
            lines.append(f"    <CodeAnalysisRuleSet>{ruleset}</CodeAnalysisRuleSet>")
        lines += [
            "  </PropertyGroup>",
            "  <PropertyGroup>",
            "    <Configuration Condition=\" '$(Configuration)' == '' \">Debug</Configuration>",
            "    <Platform Condition=\" '$(Platform)' == '' \">AnyCPU</Platform>",
            f"    <ProductVersion>{PRODUCT_VERSION}</ProductVersion>",
            "    <SchemaVersion>2.0</SchemaVersion>",
            f"    <RootNamespace>{escape_markup(self.config.root_namespace)}</RootNamespace>",
            f"    <ProjectGuid>{{{settings.unit_id}}}</ProjectGuid>",
            "    <OutputType>Library</OutputType>",
            "    <AppDesignerFolder>Properties</AppDesignerFolder>",
            f"    <AssemblyName>{escape_markup(unit_name)}</AssemblyName>",
            f"    <TargetFrameworkVersion>{self.config.target_framework_version}</TargetFrameworkVersion>",  # noqa: E501
            "    <FileAlignment>512</FileAlignment>",
            f"    <BaseDirectory>{BASE_DIRECTORY}</BaseDirectory>",
            "  </PropertyGroup>",
            "  <PropertyGroup Condition=\" '$(Configuration)|$(Platform)' == 'Debug|AnyCPU' \">",
            "    <DebugSymbols>true</DebugSymbols>",
            "    <DebugType>full</DebugType>",
            "    <Optimize>false</Optimize>",
            r"    <OutputPath>Temp\bin\Debug\</OutputPath>",
            f"    <DefineConstants>{escape_markup(defines)}</DefineConstants>",
            "    <ErrorReport>prompt</ErrorReport>",
            "    <WarningLevel>4</WarningLevel>",
            "    <NoWarn>0169</NoWarn>",
            f"    <AllowUnsafeBlocks>{unsafe}</AllowUnsafeBlocks>",
            "  </PropertyGroup>",
            "  <PropertyGroup Condition=\" '$(Configuration)|$(Platform)' == 'Release|AnyCPU' \">",
            "    <DebugType>pdbonly</DebugType>",
            "    <Optimize>true</Optimize>",
            r"    <OutputPath>Temp\bin\Release\</OutputPath>",
            "    <ErrorReport>prompt</ErrorReport>",
            "    <WarningLevel>4</WarningLevel>",
            "    <NoWarn>0169</NoWarn>",
            f"    <AllowUnsafeBlocks>{unsafe}</AllowUnsafeBlocks>",
            "  </PropertyGroup>",
            "  <PropertyGroup>",
            "    <NoConfig>true</NoConfig>",
            "    <NoStdLib>true</NoStdLib>",
            "    <AddAdditionalExplicitAssemblyReferences>false</AddAdditionalExplicitAssemblyReferences>",  # noqa: E501
            "    <ImplicitlyExpandNETStandardFacades>false</ImplicitlyExpandNETStandardFacades>",
            "    <ImplicitlyExpandDesignTimeFacades>false</ImplicitlyExpandDesignTimeFacades>",
            "  </PropertyGroup>",
        ]
        if analyzers:
            lines.append("  <ItemGroup>")
            lines.extend(f'    <Analyzer Include="{escape_markup(path)}" />' for path in analyzers)
            lines.append("  </ItemGroup>")
        lines.append("  <ItemGroup>")
        return lines
