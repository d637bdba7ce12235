"""Tests for OrgmapSettings: the configuration source priority chain."""

from pathlib import Path

import click
import pytest

from orgmap.config.settings import OrgmapSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("ORGMAP_CONFIG", "ORGMAP_DATASET", "ORGMAP_STORE__DATASET", "ORGMAP_JSON_OUTPUT"):
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = OrgmapSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.active_dataset == "default"
        assert settings.db_path == tmp_path / ".orgmap" / "orgmap.db"
        assert settings.hierarchy.containment_labels == ["ownedby"]

    def test_frozen(self, tmp_path: Path) -> None:
        settings = OrgmapSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "orgmap.toml").write_text(
            '[store]\ndataset = "prod"\n[hierarchy]\npromote_orphan_subgroups = false\n'
        )
        settings = OrgmapSettings.from_cli(root=tmp_path)
        assert settings.config_path == tmp_path / "orgmap.toml"
        assert settings.active_dataset == "prod"
        assert settings.hierarchy.promote_orphan_subgroups is False
        assert settings.hierarchy.containment_labels == ["ownedby"]

    def test_root_defaults_to_config_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "orgmap.toml").write_text("")
        child = tmp_path / "sub"
        child.mkdir()
        monkeypatch.chdir(child)
        settings = OrgmapSettings.from_cli()
        assert settings.root == tmp_path.resolve()
        assert settings.db_path == tmp_path.resolve() / ".orgmap" / "orgmap.db"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "conf" / "my.toml"
        custom.parent.mkdir()
        custom.write_text('[store]\npath = "/var/lib/orgmap/graph.db"\n')
        settings = OrgmapSettings.from_cli(config_path=str(custom), root=tmp_path)
        assert settings.config_path == custom
        assert settings.db_path == Path("/var/lib/orgmap/graph.db")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "orgmap.toml").write_text("[store\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            OrgmapSettings.from_cli(root=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "orgmap.toml").write_text('[store]\ndataset = "prod"\n')
        monkeypatch.setenv("ORGMAP_STORE__DATASET", "staging")
        settings = OrgmapSettings.from_cli(root=tmp_path)
        assert settings.store.dataset == "staging"

    def test_cli_dataset_overrides_everything(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "orgmap.toml").write_text('[store]\ndataset = "prod"\n')
        monkeypatch.setenv("ORGMAP_STORE__DATASET", "staging")
        settings = OrgmapSettings.from_cli(root=tmp_path, dataset="adhoc")
        assert settings.active_dataset == "adhoc"

    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = OrgmapSettings.from_cli(root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True
