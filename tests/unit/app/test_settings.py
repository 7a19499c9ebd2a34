"""Tests for StepSettings — environment loading, defaults and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from flutter_step.app.settings import StepSettings
from flutter_step.domain.errors import SdkLocationError

_ENV_NAMES = (
    "version",
    "commands",
    "working_dir",
    "deploy_dir",
    "BITRISE_DEPLOY_DIR",
    "flutter_sdk_dir",
    "apk_file_include_filter",
    "apk_file_exclude_filter",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.upper(), raising=False)
    monkeypatch.chdir(tmp_path)


class TestStepSettings:
    def test_default_values(self, tmp_path: Path) -> None:
        settings = StepSettings(version="1.2.1-stable", commands="build apk")
        assert settings.working_dir == Path(".")
        assert settings.deploy_dir == Path(".")
        assert settings.search_dir == Path(".")
        assert settings.apk_file_include_filter == "*.apk"
        assert settings.apk_file_exclude_filter == "*unaligned.apk\n*Test*.apk"
        assert settings.test_apk_file_include_filter == "*Test*.apk"
        assert settings.test_apk_file_exclude_filter == ""
        assert settings.mapping_file_include_filter == "*/mapping.txt"
        assert settings.mapping_file_exclude_filter == "*/tmp/*"

    def test_reads_inputs_from_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("version", "1.2.1-stable")
        monkeypatch.setenv("commands", "test|build apk")
        monkeypatch.setenv("working_dir", str(tmp_path))
        monkeypatch.setenv("BITRISE_DEPLOY_DIR", "/bitrise/deploy")
        monkeypatch.setenv("apk_file_exclude_filter", "*a.apk\n*b.apk")

        settings = StepSettings()

        assert settings.version == "1.2.1-stable"
        assert settings.command_list == ["test", "build apk"]
        assert settings.working_dir == tmp_path
        assert settings.deploy_dir == Path("/bitrise/deploy")
        assert settings.apk_file_exclude_filter == "*a.apk\n*b.apk"

    def test_deploy_dir_by_field_name(self) -> None:
        settings = StepSettings(version="1.2.1-stable", commands="build apk", deploy_dir=Path("/out"))
        assert settings.deploy_dir == Path("/out")

    def test_command_list_strips_empty_commands(self) -> None:
        settings = StepSettings(version="1.2.1-stable", commands="|test||  | build apk |")
        assert settings.command_list == ["test", "build apk"]

    def test_missing_version_raises(self) -> None:
        with pytest.raises(ValidationError):
            StepSettings(commands="build apk")  # type: ignore[call-arg]

    def test_blank_version_raises(self) -> None:
        with pytest.raises(ValidationError):
            StepSettings(version="  ", commands="build apk")

    def test_missing_commands_raises(self) -> None:
        with pytest.raises(ValidationError):
            StepSettings(version="1.2.1-stable")  # type: ignore[call-arg]

    def test_only_separators_raises(self) -> None:
        with pytest.raises(ValidationError):
            StepSettings(version="1.2.1-stable", commands="| |")

    def test_working_dir_must_exist(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError, match="working_dir"):
            StepSettings(version="1.2.1-stable", commands="build apk", working_dir=tmp_path / "missing")


class TestResolveSdkDir:
    def test_explicit_sdk_dir(self, tmp_path: Path) -> None:
        settings = StepSettings(version="1.2.1-stable", commands="build apk", flutter_sdk_dir=tmp_path / "sdk")
        assert settings.resolve_sdk_dir() == tmp_path / "sdk"

    def test_sdk_dir_expands_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        settings = StepSettings(version="1.2.1-stable", commands="build apk", flutter_sdk_dir=Path("~/flutter"))
        assert settings.resolve_sdk_dir() == tmp_path / "flutter"

    def test_sdk_dir_from_env_expands_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("flutter_sdk_dir", "~/sdks/flutter")
        settings = StepSettings(version="1.2.1-stable", commands="build apk")
        assert settings.flutter_sdk_dir == tmp_path / "sdks" / "flutter"

    def test_defaults_to_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        settings = StepSettings(version="1.2.1-stable", commands="build apk")
        assert settings.resolve_sdk_dir() == tmp_path / "flutter"

    def test_unknown_home_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _no_home(cls: type[Path]) -> Path:
            raise RuntimeError("Could not determine home directory.")

        monkeypatch.setattr(Path, "home", classmethod(_no_home))
        settings = StepSettings(version="1.2.1-stable", commands="build apk")
        with pytest.raises(SdkLocationError):
            settings.resolve_sdk_dir()
