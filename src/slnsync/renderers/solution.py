"""Renderer for the aggregate solution file."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence

    from slnsync.config import SyncConfig
    from slnsync.identifiers import IdentifierGenerator


FORMAT_VERSION = "11.00"
VISUAL_STUDIO_VERSION = "2010"
BUILD_CONFIGURATIONS = ("Debug", "Release")


class SolutionRenderer:
    """Renders one entry and one configuration block per listed unit."""

    def __init__(self, config: SyncConfig, identifiers: IdentifierGenerator):
        self.config = config
        self.identifiers = identifiers

    def render(self, units: Sequence[tuple[str, str]]) -> str:
        """Render the solution text.

        Args:
            units: (unit name, extension of its first source file) pairs, in
                the order they appear in the solution
        """
        aggregate = self.config.project_name
        entries: list[str] = []
        configurations: list[str] = []
        for name, extension in units:
            unit_id = self.identifiers.unit_id(aggregate, name)
            aggregate_id = self.identifiers.aggregate_id(aggregate, extension)
            project_file = f"{name}{self.config.project_extension}"
            entries.append(f'Project("{{{aggregate_id}}}") = "{name}", "{project_file}", "{{{unit_id}}}"')  # noqa: E501
            entries.append("EndProject")
            for build in BUILD_CONFIGURATIONS:
                configurations.append(f"\t\t{{{unit_id}}}.{build}|Any CPU.ActiveCfg = {build}|Any CPU")  # noqa: E501
                configurations.append(f"\t\t{{{unit_id}}}.{build}|Any CPU.Build.0 = {build}|Any CPU")  # noqa: E501

        lines = [
            "",
            f"Microsoft Visual Studio Solution File, Format Version {FORMAT_VERSION}",
            f"# Visual Studio {VISUAL_STUDIO_VERSION}",
            *(entries or [""]),
            "Global",
            "\tGlobalSection(SolutionConfigurationPlatforms) = preSolution",
            "\t\tDebug|Any CPU = Debug|Any CPU",
            "\t\tRelease|Any CPU = Release|Any CPU",
            "\tEndGlobalSection",
            "\tGlobalSection(ProjectConfigurationPlatforms) = postSolution",
            *(configurations or [""]),
            "\tEndGlobalSection",
            "\tGlobalSection(SolutionProperties) = preSolution",
            "\t\tHideSolutionNode = FALSE",
            "\tEndGlobalSection",
            "EndGlobal",
            "",
        ]
        return self.config.newline.join(lines)
