"""Tests for PomoSettings source merging."""

from __future__ import annotations

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from pomoctl.config.settings import PomoSettings
from pomoctl.domain.lifecycle import AdvancePolicy, BreakSource


def _write_config(root: Path, body: str) -> Path:
    path = root / "pomoctl.toml"
    path.write_text(body, encoding="utf-8")
    return path


class TestDefaults:
    def test_code_defaults(self, tmp_path: Path) -> None:
        s = PomoSettings.from_cli(state_root=tmp_path)
        assert s.state_root == tmp_path
        assert s.config_path is None
        assert s.timer.work_minutes == 25
        assert s.timer.break_minutes == 5
        assert s.timer.default_flow == "25w 5b 25w 5b 25w 30b"
        assert s.effective_policy == AdvancePolicy.CONTINUOUS
        assert s.sound.muted is True
        assert s.sound.volume == 50
        assert s.state_dir == tmp_path / ".pomoctl"

    def test_frozen(self, tmp_path: Path) -> None:
        s = PomoSettings.from_cli(state_root=tmp_path)
        with pytest.raises(ValidationError):
            s.quiet = True  # type: ignore[misc]


class TestSources:
    def test_toml_overrides_defaults(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path,
            '[timer]\nwork_minutes = 50\nbreak_source = "sequence"\n[sound]\nvolume = 20\n',
        )
        s = PomoSettings.from_cli(config_path=str(path))
        assert s.config_path == path
        assert s.state_root == tmp_path
        assert s.timer.work_minutes == 50
        assert s.timer.break_source == BreakSource.SEQUENCE
        assert s.timer.break_minutes == 5
        assert s.sound.volume == 20

    def test_discovered_by_walk_up(self, tmp_path: Path) -> None:
        _write_config(tmp_path, '[timer]\npolicy = "interactive"\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        s = PomoSettings.from_cli(state_root=nested)
        assert s.effective_policy == AdvancePolicy.INTERACTIVE
        assert s.state_root == nested

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write_config(tmp_path, "[timer]\nwork_minutes = 50\n")
        monkeypatch.setenv("POMOCTL_TIMER__WORK_MINUTES", "40")
        s = PomoSettings.from_cli(config_path=str(path))
        assert s.timer.work_minutes == 40

    def test_cli_policy_overrides_toml(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, '[timer]\npolicy = "interactive"\n')
        s = PomoSettings.from_cli(config_path=str(path), policy="continuous")
        assert s.effective_policy == AdvancePolicy.CONTINUOUS

    def test_none_flags_do_not_mask_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("POMOCTL_QUIET", "true")
        s = PomoSettings.from_cli(state_root=tmp_path, quiet=None)
        assert s.quiet is True

    def test_missing_explicit_config_uses_defaults(self, tmp_path: Path) -> None:
        s = PomoSettings.from_cli(config_path=str(tmp_path / "nope.toml"), state_root=tmp_path)
        assert s.config_path is None
        assert s.timer.work_minutes == 25


class TestInvalidConfig:
    def test_malformed_toml(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "[timer\nwork_minutes = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            PomoSettings.from_cli(config_path=str(path))

    def test_bad_default_flow(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, '[timer]\ndefault_flow = "25x"\n')
        with pytest.raises(ValidationError, match="Invalid flow format"):
            PomoSettings.from_cli(config_path=str(path))

    def test_volume_out_of_range(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "[sound]\nvolume = 101\n")
        with pytest.raises(ValidationError):
            PomoSettings.from_cli(config_path=str(path))
