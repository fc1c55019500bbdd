"""Type declarations for static image imports."""

from __future__ import annotations

from ..manifest import ManifestError, read_json, write_json
from ..templating import render
from .base import MigrationContext, MigrationStep, StepResult, write_new_file
from .tsconfig import TSCONFIG, ensure_list_entries

IMAGE_TYPES = "types/image.d.ts"
TYPES_INCLUDE = "./types/*.d.ts"
IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "svg", "webp")

IMAGE_IMPORT_HINT = (
    "Image imports may need manual updates: Next.js resolves static imports to "
    "objects, so use <img src={logo.src} /> and import files from /public relatively"
)


class ImagesStep(MigrationStep):
    name = "images"
    title = "Updating static image imports"

    def supports(self, context: MigrationContext) -> bool:
        return context.setup.uses_typescript and (context.root / TSCONFIG).exists()

    def apply(self, context: MigrationContext) -> StepResult:
        result = StepResult(name=self.name)
        write_new_file(
            context,
            result,
            context.root / IMAGE_TYPES,
            render(context.env, "support/image.d.ts.j2", extensions=IMAGE_EXTENSIONS),
        )

        tsconfig = context.root / TSCONFIG
        try:
            config = read_json(tsconfig)
        except ManifestError as exc:
            result.warnings.append(f"{exc}; add '{TYPES_INCLUDE}' to its include list manually")
        else:
            if ensure_list_entries(config, "include", (TYPES_INCLUDE,)):
                write_json(tsconfig, config)
                result.updated.append(tsconfig)

        result.warnings.append(IMAGE_IMPORT_HINT)
        return result
