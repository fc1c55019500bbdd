"""Tests for step discovery and run ordering."""

from __future__ import annotations

import pytest

from vite2next import steps as steps_module
from vite2next.steps import MigrationStep, StepResult, check_run_order, discover_steps


class BannerStep(MigrationStep):
    name = "banner"
    title = "Printing a banner"

    def supports(self, context) -> bool:
        return True

    def apply(self, context) -> StepResult:
        return StepResult(name=self.name)


class FakeEntryPoint:
    def __init__(self, name: str, target: object) -> None:
        self.name = name
        self._target = target

    def load(self) -> object:
        return self._target


def _use_plugins(monkeypatch: pytest.MonkeyPatch, *entries: FakeEntryPoint) -> None:
    monkeypatch.setattr(steps_module, "_iter_entry_points", lambda: list(entries))


def test_discover_steps_returns_builtins_in_run_order() -> None:
    names = [step.name for step in discover_steps()]

    assert names == [
        "entrypoint",
        "next-config",
        "cleanup",
        "dependencies",
        "tsconfig",
        "images",
        "env-vars",
        "package-json",
        "router",
        "static-assets",
    ]


def test_builtin_readers_of_vite_files_precede_cleanup() -> None:
    steps = discover_steps()
    by_name = {step.name: index for index, step in enumerate(steps)}

    for step in steps:
        for later in step.run_before:
            assert by_name[step.name] < by_name[later]
    assert {step.name for step in steps if "cleanup" in step.run_before} == {
        "entrypoint",
        "next-config",
    }


def test_discover_steps_respects_enabled_list() -> None:
    names = [step.name for step in discover_steps(["Cleanup", "entrypoint"])]

    assert names == ["entrypoint", "cleanup"]


def test_discover_steps_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown steps requested: nope"):
        discover_steps(["nope"])


def test_discover_steps_appends_unordered_plugins(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_plugins(monkeypatch, FakeEntryPoint("banner", BannerStep))

    discovered = discover_steps()

    assert isinstance(discovered[-1], BannerStep)


def test_discover_steps_schedules_plugins_before_their_targets(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    class SnapshotStep(BannerStep):
        name = "snapshot"
        run_before = ("cleanup", "dependencies")

    _use_plugins(monkeypatch, FakeEntryPoint("snapshot", SnapshotStep()))

    names = [step.name for step in discover_steps()]

    assert names[:4] == ["entrypoint", "next-config", "snapshot", "cleanup"]


def test_discover_steps_names_unnamed_plugins_after_entry_point(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    class Unnamed(BannerStep):
        name = ""

    _use_plugins(monkeypatch, FakeEntryPoint("audit", Unnamed))

    assert discover_steps(["audit"])[0].name == "audit"


def test_discover_steps_rejects_duplicate_names(monkeypatch: pytest.MonkeyPatch) -> None:
    class Impostor(BannerStep):
        name = "cleanup"

    _use_plugins(monkeypatch, FakeEntryPoint("cleanup", Impostor))

    with pytest.raises(ValueError, match="'cleanup' is already registered"):
        discover_steps()


def test_discover_steps_rejects_non_step_plugins(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_plugins(monkeypatch, FakeEntryPoint("broken", object()))

    with pytest.raises(TypeError, match="Plugin 'broken' must be a MigrationStep"):
        discover_steps()


def test_check_run_order_reports_every_late_target() -> None:
    class Early(BannerStep):
        name = "early"
        run_before = ("banner", "other")

    class Other(BannerStep):
        name = "other"

    with pytest.raises(ValueError, match="'early' has to run before banner, other"):
        check_run_order([BannerStep(), Other(), Early()])
