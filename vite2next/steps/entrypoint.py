"""Step wrapper around the entry-point synthesis engine."""

from __future__ import annotations

from ..entrypoint import Emitter, synthesize_entrypoint
from .base import MigrationContext, MigrationStep, StepResult


class EntrypointStep(MigrationStep):
    """Creates the root layout, page and client-boundary files."""

    name = "entrypoint"
    title = "Creating root layout and entrypoint page"
    run_before = ("cleanup",)

    def supports(self, context: MigrationContext) -> bool:
        return True

    def apply(self, context: MigrationContext) -> StepResult:
        emitted = synthesize_entrypoint(
            context.root,
            context.setup,
            exclude_paths=context.options.exclude_paths,
            emitter=Emitter(context.env),
        )
        return StepResult(
            name=self.name,
            written=sorted(emitted.written),
            skipped=sorted(emitted.skipped),
            warnings=list(emitted.warnings),
        )
