"""CLI entrypoint for vite2next."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import ConfigError, load_config
from .detection import ProjectValidationError, is_vite_project, validate_project_directory
from .logging import configure_logging
from .models import CssFramework, ProjectSetup
from .orchestrator import MigrationReport, Migrator, build_options, next_steps, resolve_setup
from .steps import MigrationContext, MigrationStep


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vite2next",
        description="Migrate a Vite React project to the Next.js App Router.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "project_directory",
        nargs="?",
        default=".",
        help="Directory of the Vite project to migrate (defaults to current directory).",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Skip confirmation prompts.",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Update package.json without installing dependencies.",
    )
    parser.add_argument(
        "--skip-tailwind-check",
        action="store_true",
        help="Do not ask for confirmation when Tailwind CSS is not detected.",
    )
    parser.add_argument(
        "--app-dir",
        default=None,
        help="Directory for the generated App Router files instead of src/app or app.",
    )
    parser.add_argument(
        "--next-version",
        default=None,
        help="Version range of Next.js to add to package.json.",
    )
    parser.add_argument(
        "--force-npm",
        action="store_true",
        help="Use npm regardless of the detected package manager.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def _confirm(message: str, *, default: bool) -> bool:
    suffix = "[Y/n]" if default else "[y/N]"
    try:
        answer = input(f"{message} {suffix} ").strip().lower()
    except EOFError:
        return default
    if not answer:
        return default
    return answer in {"y", "yes"}


def _print_setup(setup: ProjectSetup) -> None:
    print("Detected project configuration:")
    print(f"  - TypeScript: {'Yes' if setup.uses_typescript else 'No'}")
    print(f"  - CSS Framework: {setup.css_framework.value}")
    print(f"  - React Router: {'Yes' if setup.uses_router else 'No'}")
    print(f"  - Package Manager: {setup.package_manager.value}")


def _print_plan(steps: list[MigrationStep]) -> None:
    print("The following steps will be performed:")
    for index, step in enumerate(steps, start=1):
        print(f"  {index}. {step.title}")


def _print_summary(report: MigrationReport) -> None:
    print(f"Migration completed in {report.elapsed:.1f}s")
    for label, paths in (
        ("Created", report.written),
        ("Updated", report.updated),
        ("Removed", report.removed),
        ("Skipped (already present)", report.skipped),
    ):
        if paths:
            print(f"{label}:")
            for path in paths:
                print(f"  - {_relativize(path, report.root)}")
    if report.warnings:
        print("Needs attention:")
        for warning in report.warnings:
            print(f"  ! {warning}")
    print("Next steps:")
    for index, suggestion in enumerate(next_steps(report.setup), start=1):
        print(f"  {index}. {suggestion}")


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for vite2next."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    target = Path(args.project_directory).expanduser().resolve()
    try:
        validate_project_directory(target)
        config = load_config(target)
    except (ProjectValidationError, ConfigError) as exc:
        parser.exit(1, f"{exc}\n")

    if not args.yes and not is_vite_project(target):
        if not _confirm("This does not appear to be a Vite project. Continue anyway?", default=False):
            parser.exit(0, "Migration cancelled\n")

    setup = resolve_setup(target, config, app_dir=args.app_dir, force_npm=args.force_npm)

    if (
        setup.css_framework is not CssFramework.TAILWIND
        and not args.skip_tailwind_check
        and not args.yes
    ):
        if not _confirm(
            "Tailwind CSS not detected in your project. Continue anyway?", default=False
        ):
            parser.exit(0, "Migration cancelled\n")

    _print_setup(setup)

    context = MigrationContext(
        root=target,
        setup=setup,
        options=build_options(
            config,
            skip_install=args.skip_install,
            next_version=args.next_version,
        ),
    )
    migrator = Migrator()
    try:
        steps = migrator.plan(context, config)
    except (TypeError, ValueError, RuntimeError) as exc:
        parser.exit(1, f"{exc}\n")
    _print_plan(steps)

    if not args.yes and not _confirm("Do you want to proceed with the migration?", default=True):
        parser.exit(0, "Migration cancelled\n")

    try:
        report = migrator.run(context, config)
    except OSError as exc:
        parser.exit(1, f"vite2next migration failed: {exc}\nRun with --verbose for more details.\n")
    except Exception as exc:  # pragma: no cover - unexpected failure surface
        if args.verbose:
            raise
        parser.exit(1, f"vite2next migration failed: {exc}\nRun with --verbose for more details.\n")

    _print_summary(report)


def _relativize(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
