"""Migration steps and the registry that puts them in run order."""

from __future__ import annotations

from importlib import metadata
from typing import Iterable, Iterator, List, Sequence, Set, Tuple, Type

from .base import MigrationContext, MigrationOptions, MigrationStep, StepResult
from .cleanup import CleanupStep
from .dependencies import DependenciesStep
from .entrypoint import EntrypointStep
from .env_vars import EnvVarsStep
from .images import ImagesStep
from .next_config import NextConfigStep
from .package_json import PackageJsonStep
from .router import RouterStep
from .static_assets import StaticAssetsStep
from .tsconfig import TsConfigStep

_ENTRY_POINT_GROUP = "vite2next.steps"

BUILTIN_STEPS: Tuple[Type[MigrationStep], ...] = (
    EntrypointStep,
    NextConfigStep,
    CleanupStep,
    DependenciesStep,
    TsConfigStep,
    ImagesStep,
    EnvVarsStep,
    PackageJsonStep,
    RouterStep,
    StaticAssetsStep,
)


def discover_steps(enabled: Sequence[str] | None = None) -> List[MigrationStep]:
    """Return the migration steps in run order.

    Plugin steps from the ``vite2next.steps`` entry-point group are placed
    ahead of the earliest step named in their ``run_before``, or appended.
    ``enabled`` narrows the run to the named steps without reordering them.
    """
    steps: List[MigrationStep] = [step_cls() for step_cls in BUILTIN_STEPS]
    for plugin in _load_plugin_steps():
        _schedule(steps, plugin)
    check_run_order(steps)
    if enabled is None:
        return steps
    return _narrow(steps, enabled)


def check_run_order(steps: Sequence[MigrationStep]) -> None:
    """Raise ValueError when a step is scheduled after one it has to precede."""
    seen: Set[str] = set()
    for step in steps:
        late = sorted(name for name in step.run_before if name in seen)
        if late:
            raise ValueError(f"Step '{step.name}' has to run before {', '.join(late)}")
        seen.add(step.name)


def _schedule(steps: List[MigrationStep], plugin: MigrationStep) -> None:
    if any(step.name == plugin.name for step in steps):
        raise ValueError(f"A migration step named '{plugin.name}' is already registered")
    targets = [index for index, step in enumerate(steps) if step.name in plugin.run_before]
    steps.insert(min(targets) if targets else len(steps), plugin)


def _narrow(steps: Sequence[MigrationStep], enabled: Sequence[str]) -> List[MigrationStep]:
    wanted = {name.strip().lower() for name in enabled}
    unknown = wanted - {step.name.lower() for step in steps}
    if unknown:
        raise ValueError(f"Unknown steps requested: {', '.join(sorted(unknown))}")
    return [step for step in steps if step.name.lower() in wanted]


def _load_plugin_steps() -> Iterator[MigrationStep]:
    for entry in _iter_entry_points():
        try:
            loaded = entry.load()
        except (ImportError, AttributeError) as exc:
            raise RuntimeError(f"Could not import migration step plugin '{entry.name}': {exc}") from exc
        step = loaded() if isinstance(loaded, type) and issubclass(loaded, MigrationStep) else loaded
        if not isinstance(step, MigrationStep):
            raise TypeError(
                f"Plugin '{entry.name}' must be a MigrationStep subclass or instance, "
                f"got {type(step).__name__}"
            )
        if not step.name:
            step.name = entry.name
        yield step


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "BUILTIN_STEPS",
    "MigrationContext",
    "MigrationOptions",
    "MigrationStep",
    "StepResult",
    "check_run_order",
    "discover_steps",
]
