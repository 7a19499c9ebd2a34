"""Tests for bootstrap — composition root wiring."""

from __future__ import annotations

from pathlib import Path

import pytest

from flutter_step.app.bootstrap import create_step
from flutter_step.app.settings import StepSettings
from flutter_step.application.artifact_harvester import ArtifactHarvester
from flutter_step.infrastructure.adapters.flutter_runner import FlutterCommandRunner
from flutter_step.infrastructure.adapters.flutter_sdk import FlutterSdkInstaller
from flutter_step.infrastructure.adapters.system_clock import SystemClock


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> StepSettings:
    monkeypatch.chdir(tmp_path)
    return StepSettings(
        version="1.2.1-stable",
        commands="build apk",
        working_dir=tmp_path,
        flutter_sdk_dir=tmp_path / "sdk" / "flutter",
        apk_file_include_filter="*/outputs/*.apk",
    )


class TestCreateStep:
    def test_wires_components(self, settings: StepSettings) -> None:
        step = create_step(settings)
        assert step.settings is settings
        assert isinstance(step.clock, SystemClock)
        assert isinstance(step.sdk_installer, FlutterSdkInstaller)
        assert isinstance(step.build_runner, FlutterCommandRunner)
        assert isinstance(step.harvester, ArtifactHarvester)

    def test_runner_uses_sdk_executable(self, settings: StepSettings, tmp_path: Path) -> None:
        step = create_step(settings)
        assert step.build_runner.bash_command("doctor") == f"{tmp_path / 'sdk' / 'flutter' / 'bin' / 'flutter'} doctor"

    def test_artifact_classes_follow_settings(self, settings: StepSettings) -> None:
        step = create_step(settings)
        assert [c.name for c in step.artifact_classes] == ["apk", "test_apk", "mapping"]
        assert step.artifact_classes[0].filters.include == "*/outputs/*.apk"

    def test_injected_clock(self, settings: StepSettings, clock) -> None:
        assert create_step(settings, clock=clock).clock is clock
