"""Tests for the YAML snapshot metadata provider."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from slnsync import (
    ConfigError,
    ManifestMetadataProvider,
    ProjectSnapshot,
    SyncConfig,
    SyncEngine,
    UPathArtifactStore,
)


if TYPE_CHECKING:
    from pathlib import Path


SNAPSHOT_YAML = """\
default_unit: Assembly-CSharp
units:
  - name: Assembly-CSharp
    output_path: Library/ScriptAssemblies/Assembly-CSharp.dll
    source_files: [Assets/Player.cs]
    references: [Game.Core]
  - name: Game.Core
    output_path: Library/ScriptAssemblies/Game.Core.dll
    manifest: Assets/Core/Game.Core.asmdef
    source_files: [Assets/Core/Health.cs]
    defines: [CORE]
assets: [Assets/Player.cs, Assets/Core/Health.cs, Assets/Core/Outline.shader]
packages:
  - name: com.example.tools
    path: Packages/com.example.tools
"""


def make_provider(**data) -> ManifestMetadataProvider:
    return ManifestMetadataProvider(ProjectSnapshot.model_validate(data))


@pytest.fixture
def snapshot_provider() -> ManifestMetadataProvider:
    return make_provider(
        default_unit="Assembly-CSharp",
        units=[
            {"name": "Assembly-CSharp", "output_path": "A.dll", "source_files": ["Assets/a.cs"]},
            {
                "name": "Game",
                "output_path": "Game.dll",
                "manifest": "Assets/Game/Game.asmdef",
                "source_files": ["Assets/Game/g.cs"],
            },
            {
                "name": "Game.Editor",
                "output_path": "Game.Editor.dll",
                "manifest": "Assets/Game/Editor/Game.Editor.asmdef",
                "references": ["Game"],
            },
        ],
        packages=[
            {"name": "com.ext", "path": "Packages/com.ext"},
            {"name": "com.own", "path": "Packages/com.own", "source": "embedded"},
        ],
    )


def test_all_units_links_references(snapshot_provider: ManifestMetadataProvider):
    """Test that references point to the unit objects of the same pass."""
    units = {unit.name: unit for unit in snapshot_provider.all_units()}

    assert list(units) == ["Assembly-CSharp", "Game", "Game.Editor"]
    assert units["Game.Editor"].references == [units["Game"]]
    assert units["Game.Editor"].references[0] is units["Game"]


def test_unknown_reference():
    with pytest.raises(ConfigError, match="Unknown unit references: Missing"):
        make_provider(units=[{"name": "A", "output_path": "A.dll", "references": ["Missing"]}])


def test_unknown_default_unit():
    with pytest.raises(ConfigError, match="Unknown default unit"):
        make_provider(default_unit="Missing")


def test_owning_unit_name(snapshot_provider: ManifestMetadataProvider):
    """Test exact membership, closest manifest and default unit fallback."""
    assert snapshot_provider.owning_unit_name("Assets/Game/g.cs") == "Game"
    assert snapshot_provider.owning_unit_name("Assets/Game/new.cs") == "Game"
    assert snapshot_provider.owning_unit_name("Assets/Game/Editor/Tool.cs") == "Game.Editor"
    assert snapshot_provider.owning_unit_name("assets/game/editor/Tool.cs") == "Game.Editor"
    assert snapshot_provider.owning_unit_name("Assets/GameOther/x.cs") == "Assembly-CSharp"


def test_owning_unit_name_without_default():
    provider = make_provider(units=[{"name": "A", "output_path": "A.dll"}])

    assert provider.owning_unit_name("Assets/x.cs") is None


def test_packages(snapshot_provider: ManifestMetadataProvider):
    """Test that only embedded and local packages count as first-party."""
    assert snapshot_provider.is_internalized_package_path("Assets/a.cs") is True
    assert snapshot_provider.is_internalized_package_path("Packages/com.ext/x.cs") is False
    assert snapshot_provider.is_internalized_package_path("Packages/com.own/x.cs") is True
    assert snapshot_provider.is_internalized_package_path("Packages/com.extra/x.cs") is True
    assert snapshot_provider.package_name_for("Packages/com.ext/x.cs") == "com.ext"
    assert snapshot_provider.package_name_for("Assets/a.cs") is None


def test_manifest_path_for_unit(snapshot_provider: ManifestMetadataProvider):
    assert snapshot_provider.manifest_path_for_unit("Game") == "Assets/Game/Game.asmdef"
    assert snapshot_provider.manifest_path_for_unit("Assembly-CSharp") is None
    assert snapshot_provider.manifest_path_for_unit("Unknown") is None


def test_parse_response_file(tmp_path: Path):
    """Test reading response files relative to the project directory."""
    (tmp_path / "csc.rsp").write_text("-define:A;B\n-r:Lib.dll\n-nowarn:0169\n")
    (tmp_path / "Lib.dll").write_bytes(b"")
    provider = make_provider()

    directives = provider.parse_response_file("csc.rsp", str(tmp_path), [])

    assert directives.defines == ["A", "B"]
    assert directives.full_path_references == [f"{tmp_path}/Lib.dll"]
    assert directives.other_arguments == ["/nowarn:0169"]
    assert directives.errors == []


def test_parse_missing_response_file(tmp_path: Path):
    directives = make_provider().parse_response_file("missing.rsp", str(tmp_path), [])

    assert directives.defines == []
    assert directives.errors == []


def test_from_file(tmp_path: Path):
    path = tmp_path / "snapshot.yml"
    path.write_text(SNAPSHOT_YAML)

    provider = ManifestMetadataProvider.from_file(path)

    assert [unit.name for unit in provider.all_units()] == ["Assembly-CSharp", "Game.Core"]
    assert provider.all_asset_paths()[-1] == "Assets/Core/Outline.shader"
    assert provider.owning_unit_name("Assets/Core/Outline.shader.cs") == "Game.Core"


def test_from_file_invalid(tmp_path: Path):
    path = tmp_path / "snapshot.yml"
    path.write_text("units:\n  - name: A\n")

    with pytest.raises(ConfigError):
        ManifestMetadataProvider.from_file(path)


def test_full_sync_from_snapshot(tmp_path: Path):
    """Test a full pass from a snapshot file to files on disk."""
    project_dir = tmp_path / "Game"
    snapshot = tmp_path / "snapshot.yml"
    snapshot.write_text(SNAPSHOT_YAML)
    config = SyncConfig(project_directory=str(project_dir))
    engine = SyncEngine(config, ManifestMetadataProvider.from_file(snapshot), UPathArtifactStore())

    report = engine.full_sync()

    assert report.units == ["Assembly-CSharp", "Game.Core"]
    solution = (project_dir / "Game.sln").read_bytes()
    assert solution.startswith(b"\xef\xbb\xbf\r\nMicrosoft Visual Studio Solution File")
    core = (project_dir / "Game.Core.csproj").read_text(encoding="utf-8")
    assert '<None Include="Assets\\Core\\Outline.shader" />' in core
    assert "<DefineConstants>DEBUG;TRACE;CORE</DefineConstants>" in core
    main = (project_dir / "Assembly-CSharp.csproj").read_text(encoding="utf-8")
    assert '<ProjectReference Include="Game.Core.csproj">' in main

    assert engine.full_sync().written == []
    assert engine.sync_if_needed(["Assets/Core/Health.cs"], []) is True
    assert engine.last_report is not None
    assert engine.last_report.units == ["Game.Core"]
