"""Command line interface for the Parakeet project."""

from __future__ import annotations

import difflib
from copy import deepcopy
from pathlib import Path
from typing import Any, Iterable, Mapping

import click
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from parakeet.config import (
    ConfigError,
    ConfigManager,
    ParakeetConfig,
    resolve_with_precedence,
    set_path,
)
from parakeet.logging_config import configure_logging
from parakeet.naming import DirectoryLister, NamingError, TargetMissingError, normalize_extensions
from parakeet.organization import IdentifierPlanner, OperationExecutor
from parakeet.reporting import (
    describe_record,
    markdown_table,
    report_payload,
    report_problems,
    report_verdicts,
)
from parakeet.tags import (
    RichTagPrompter,
    TagChange,
    TagEditor,
    TagError,
    TagRegistry,
    edit_file_tags,
    load_record,
    set_file_tags,
)
from parakeet.validation import validate_directory

console = Console()

_EXT_HELP = (
    "Only consider these extensions (repeat or comma-separate, e.g. pdf,txt); "
    "overrides scan.extensions."
)
_HIDDEN_HELP = "Include or skip dot-files; overrides scan.include_hidden."


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command appropriately.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(1)

    if isinstance(original, click.ClickException):
        raise original

    raise click.ClickException(message) from original


def _emit_message(message: Any, *, mode: str, quiet: bool, summary_only: bool) -> None:
    """Conditionally print CLI output according to quiet/summary settings.

    Args:
        message: Renderable or string to emit.
        mode: Output mode identifier (`detail`, `summary`, `warning`, or `error`).
        quiet: Whether quiet mode is active.
        summary_only: Whether only summary lines should be emitted.
    """

    if quiet and mode != "error":
        return

    important_modes = {"summary", "warning", "error"}
    if summary_only and mode not in important_modes:
        return

    console.print(message)


def _format_summary_line(command: str, root: Path | str, metrics: dict[str, Any]) -> str:
    """Return a consistent summary line for CLI commands.

    Args:
        command: Command name to include in the summary.
        root: Target root path relevant to the command.
        metrics: Ordered mapping of metric names to values.

    Returns:
        str: Rich-formatted summary string.
    """

    parts = ", ".join(f"{key}={value}" for key, value in metrics.items())
    return f"[green]{command} summary for {escape(str(root))}: {parts}.[/green]"


def _load_config(cli_overrides: Mapping[str, Any] | None = None) -> ParakeetConfig:
    """Load the effective configuration and apply its logging level.

    Args:
        cli_overrides: Settings given as command flags, keyed by dotted path.
    """

    manager = ConfigManager()
    manager.ensure_exists()
    config = manager.load(cli_overrides=cli_overrides)
    configure_logging(config.logging.level)
    return config


def _resolve_output_modes(
    ctx: click.Context,
    config: ParakeetConfig,
    *,
    quiet: bool,
    summary_mode: bool,
    json_output: bool,
) -> tuple[bool, bool]:
    """Combine CLI flags with configured defaults into ``(quiet, summary_only)``.

    Raises:
        click.ClickException: If the requested modes conflict.
    """

    explicit_quiet = ctx.get_parameter_source("quiet") == ParameterSource.COMMANDLINE
    explicit_summary = ctx.get_parameter_source("summary_mode") == ParameterSource.COMMANDLINE

    quiet_enabled = quiet if explicit_quiet else config.cli.quiet_default
    summary_only = summary_mode if explicit_summary else config.cli.summary_default

    if json_output:
        if explicit_quiet and quiet_enabled:
            raise click.ClickException("--json cannot be combined with --quiet.")
        if explicit_summary and summary_only:
            raise click.ClickException("--json cannot be combined with --summary.")
        return False, False

    if quiet_enabled and summary_only:
        raise click.ClickException(
            "Quiet and summary modes cannot both be enabled. Adjust CLI defaults or flags."
        )
    return quiet_enabled, summary_only


def _lister(config: ParakeetConfig) -> DirectoryLister:
    return DirectoryLister(
        include_hidden=config.scan.include_hidden,
        ignore_names=[config.tags.registry_filename],
    )


def _scan_overrides(
    ctx: click.Context, extensions: Iterable[str], include_hidden: bool
) -> dict[str, Any]:
    """Return the `scan.*` settings the user passed explicitly on the command line."""

    overrides: dict[str, Any] = {}
    requested = normalize_extensions(extensions)
    if requested:
        overrides["scan.extensions"] = requested
    if ctx.get_parameter_source("include_hidden") == ParameterSource.COMMANDLINE:
        overrides["scan.include_hidden"] = include_hidden
    return overrides


def _extensions(config: ParakeetConfig) -> list[str]:
    return normalize_extensions(config.scan.extensions)


def _split_values(values: Iterable[str]) -> list[str]:
    """Flatten repeated and comma-separated option values."""
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


def _registry_path(registry: str | None, directory: Path, config: ParakeetConfig) -> Path:
    if registry:
        return Path(registry).expanduser()
    return directory / config.tags.registry_filename


def _emit_change(change: TagChange) -> None:
    if change.changed:
        console.print(
            f"[green]✓ Renamed: {escape(change.source.name)} → "
            f"{escape(change.destination.name)}[/green]"
        )
    else:
        console.print("[green]✓ No changes made[/green]")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="parakeet")
def cli() -> None:
    """Parakeet keeps flat directories self-describing with timestamped file names.

    Names follow `{timestamp}--{comment}__{tag1}_{tag2}.{extension}`.
    """


@cli.command()
@click.argument("path", default=".", type=click.Path(file_okay=False, path_type=str))
@click.option("-e", "--ext", "extensions", multiple=True, help=_EXT_HELP)
@click.option("--hidden/--no-hidden", "include_hidden", default=False, help=_HIDDEN_HELP)
@click.option("-n", "--dry-run", is_flag=True, help="Preview renames without modifying files.")
@click.option("-v", "--verbose", is_flag=True, help="List every renamed and skipped file.")
@click.option("--json", "json_output", is_flag=True, help="Emit JSON describing the renames.")
@click.option("--summary", "summary_mode", is_flag=True, help="Only emit summary lines.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def generate(
    ctx: click.Context,
    path: str,
    extensions: tuple[str, ...],
    include_hidden: bool,
    dry_run: bool,
    verbose: bool,
    json_output: bool,
    summary_mode: bool,
    quiet: bool,
) -> None:
    """Give every unformatted file in PATH a unique timestamped name.

    Args:
        ctx: Click context used for parameter source inspection.
        path: Directory whose files should be renamed.
        extensions: Extension filters.
        include_hidden: Whether dot-files are renamed too.
        dry_run: If True, skip making filesystem mutations.
        verbose: If True, list renamed and skipped files.
        json_output: If True, emit JSON describing planned or applied renames.
        summary_mode: When True, limit output to summary lines and warnings.
        quiet: When True, suppress non-error CLI output entirely.
    """

    json_enabled = json_output
    try:
        config = _load_config(_scan_overrides(ctx, extensions, include_hidden))
        quiet_enabled, summary_only = _resolve_output_modes(
            ctx, config, quiet=quiet, summary_mode=summary_mode, json_output=json_output
        )

        root = Path(path).expanduser()
        entries = _lister(config).snapshot(root)
        plan = IdentifierPlanner().build_plan(root, entries, extensions=_extensions(config))
        result = OperationExecutor().apply(plan, dry_run=dry_run)

        counts = {
            "processed": len(result.applied),
            "skipped": len(plan.skipped),
            "failed": len(result.failed),
        }
        if json_output:
            console.print_json(
                data={
                    "context": {"root": str(root), "dry_run": dry_run},
                    "renames": [op.model_dump(mode="json") for op in result.applied],
                    "skipped": [entry.model_dump(mode="json") for entry in plan.skipped],
                    "failed": [failure.model_dump(mode="json") for failure in result.failed],
                    "counts": counts,
                }
            )
            return

        if dry_run:
            _emit_message(
                "[yellow]Dry run: no files were renamed.[/yellow]",
                mode="warning",
                quiet=quiet_enabled,
                summary_only=summary_only,
            )

        if dry_run or verbose:
            label = "Would rename" if dry_run else "Renamed"
            for operation in result.applied:
                _emit_message(
                    f"{label}: {escape(operation.source.name)} -> "
                    f"{escape(operation.destination.name)}",
                    mode="detail",
                    quiet=quiet_enabled,
                    summary_only=summary_only,
                )
        if verbose:
            for skipped in plan.skipped:
                _emit_message(
                    f"[yellow]Skipped ({escape(skipped.reason)}): {escape(skipped.name)}[/yellow]",
                    mode="detail",
                    quiet=quiet_enabled,
                    summary_only=summary_only,
                )

        for failure in result.failed:
            _emit_message(
                f"[red]Error renaming {escape(failure.operation.source.name)}: "
                f"{escape(failure.error)}[/red]",
                mode="error",
                quiet=quiet_enabled,
                summary_only=summary_only,
            )

        summary_metrics: dict[str, Any] = dict(counts)
        if dry_run:
            summary_metrics["dry_run"] = True
        _emit_message(
            _format_summary_line("Generate", root, summary_metrics),
            mode="summary",
            quiet=quiet_enabled,
            summary_only=summary_only,
        )
    except TargetMissingError as exc:
        _handle_cli_error(str(exc), code="target_missing", json_output=json_enabled, original=exc)
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_enabled, original=exc)
    except click.ClickException as exc:
        _handle_cli_error(str(exc), code="cli_error", json_output=json_enabled, original=exc)
    except Exception as exc:
        _handle_cli_error(
            f"Unexpected error while generating names: {exc}",
            code="internal_error",
            json_output=json_enabled,
            details={"exception": type(exc).__name__},
            original=exc,
        )


@cli.command()
@click.argument("path", default=".", type=click.Path(file_okay=False, path_type=str))
@click.option("-e", "--ext", "extensions", multiple=True, help=_EXT_HELP)
@click.option("--hidden/--no-hidden", "include_hidden", default=False, help=_HIDDEN_HELP)
@click.option(
    "--registry",
    type=click.Path(dir_okay=False, path_type=str),
    help="Tag registry file (defaults to the configured file name inside PATH).",
)
@click.option("--json", "json_output", is_flag=True, help="Emit the validation report as JSON.")
@click.option("--summary", "summary_mode", is_flag=True, help="Only emit summary lines.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def validate(
    ctx: click.Context,
    path: str,
    extensions: tuple[str, ...],
    include_hidden: bool,
    registry: str | None,
    json_output: bool,
    summary_mode: bool,
    quiet: bool,
) -> None:
    """Check PATH for malformed names, duplicate IDs, and undefined tags.

    Exits with status 1 when any file name is malformed.

    Args:
        ctx: Click context used for parameter source inspection.
        path: Directory to validate.
        extensions: Extension filters.
        include_hidden: Whether dot-files are checked too.
        registry: Optional explicit tag registry path.
        json_output: If True, emit the report as JSON.
        summary_mode: When True, limit output to summary lines and warnings.
        quiet: When True, suppress non-error CLI output entirely.
    """

    json_enabled = json_output
    exit_code = 0
    try:
        config = _load_config(_scan_overrides(ctx, extensions, include_hidden))
        quiet_enabled, summary_only = _resolve_output_modes(
            ctx, config, quiet=quiet, summary_mode=summary_mode, json_output=json_output
        )

        root = Path(path).expanduser()
        report = validate_directory(
            root,
            lister=_lister(config),
            registry_path=_registry_path(registry, root, config),
            extensions=_extensions(config),
        )
        if report.has_malformed:
            exit_code = 1

        if json_output:
            console.print_json(data=report_payload(report, str(root)))
        else:
            for mode, message in report_problems(report):
                style = "red" if mode == "error" else "yellow"
                _emit_message(
                    f"[{style}]{escape(message)}[/{style}]",
                    mode=mode,
                    quiet=quiet_enabled,
                    summary_only=summary_only,
                )
            _emit_message(
                _format_summary_line("Validation", root, report.counts()),
                mode="summary",
                quiet=quiet_enabled,
                summary_only=summary_only,
            )
            for mode, message in report_verdicts(report):
                style = {"error": "red", "warning": "yellow"}.get(mode, "green")
                _emit_message(
                    f"[{style}]{escape(message)}[/{style}]",
                    mode=mode,
                    quiet=quiet_enabled,
                    summary_only=summary_only,
                )
    except TargetMissingError as exc:
        _handle_cli_error(str(exc), code="target_missing", json_output=json_enabled, original=exc)
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_enabled, original=exc)
    except click.ClickException as exc:
        _handle_cli_error(str(exc), code="cli_error", json_output=json_enabled, original=exc)
    except Exception as exc:
        _handle_cli_error(
            f"Unexpected error while validating files: {exc}",
            code="internal_error",
            json_output=json_enabled,
            details={"exception": type(exc).__name__},
            original=exc,
        )

    if exit_code:
        ctx.exit(exit_code)


@cli.command()
@click.argument("file", type=click.Path(path_type=str))
@click.option("-s", "--show", is_flag=True, help="Show the current tags and exit.")
@click.option(
    "-t",
    "--set",
    "set_values",
    multiple=True,
    help="Replace the tags directly (repeat or comma-separate, e.g. --set a --set b).",
)
@click.option(
    "--registry",
    type=click.Path(dir_okay=False, path_type=str),
    help="Tag registry file (defaults to the configured file name beside FILE).",
)
def tag(file: str, show: bool, set_values: tuple[str, ...], registry: str | None) -> None:
    """Show, set, or interactively edit the tags of FILE.

    Args:
        file: Path to a formatted file.
        show: If True, print the decoded name instead of editing.
        set_values: Tags to assign without prompting.
        registry: Optional explicit tag registry path.

    Raises:
        click.ClickException: If the file is missing, malformed, or cannot be renamed.
    """

    try:
        config = _load_config()
        path = Path(file).expanduser()

        if show:
            record = load_record(path)
            for line in describe_record(path.name, record):
                console.print(line, markup=False, highlight=False)
            return

        if set_values:
            change = set_file_tags(path, _split_values(set_values))
        else:
            registry_path = _registry_path(registry, path.parent, config)
            editor = TagEditor(TagRegistry.load_or_empty(registry_path), RichTagPrompter(console))
            change = edit_file_tags(path, editor)
        _emit_change(change)
    except (ConfigError, NamingError, TagError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
@click.argument("identifier")
@click.argument("path", default=".", type=click.Path(file_okay=False, path_type=str))
def find(identifier: str, path: str) -> None:
    """Print the file in PATH whose timestamp ID is IDENTIFIER.

    Args:
        identifier: Timestamp identifier such as 20250101T000000.
        path: Directory to search.

    Raises:
        click.ClickException: If no file or several files carry the identifier.
    """

    try:
        config = _load_config()
        match = _lister(config).find_by_identifier(Path(path).expanduser(), identifier)
    except (ConfigError, NamingError) as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(str(match), markup=False, highlight=False, soft_wrap=True)


@cli.command("list")
@click.argument("path", default=".", type=click.Path(file_okay=False, path_type=str))
@click.option("-e", "--ext", "extensions", multiple=True, help=_EXT_HELP)
@click.option("--hidden/--no-hidden", "include_hidden", default=False, help=_HIDDEN_HELP)
@click.pass_context
def list_files(
    ctx: click.Context, path: str, extensions: tuple[str, ...], include_hidden: bool
) -> None:
    """Print the formatted files in PATH as a Markdown table.

    Args:
        ctx: Click context used for parameter source inspection.
        path: Directory to list.
        extensions: Extension filters.
        include_hidden: Whether dot-files are listed too.

    Raises:
        click.ClickException: If PATH does not exist.
    """

    try:
        config = _load_config(_scan_overrides(ctx, extensions, include_hidden))
        records = _lister(config).records(Path(path).expanduser(), _extensions(config))
    except (ConfigError, NamingError) as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(
        markdown_table(record for _, record in records),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


@cli.group()
def config() -> None:
    """Manage Parakeet configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        effective = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(effective.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Args:
        key: Dotted path describing the configuration field to update.
        value: YAML-literal value to write into the configuration file.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        before = manager.read_text().splitlines()
        file_data = manager.file_overrides()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException(
            "KEY must specify a dotted path such as 'tags.registry_filename'."
        )

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    original = deepcopy(file_data)
    try:
        set_path(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=ParakeetConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if file_data == original:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    manager.write(file_data)
    after = manager.read_text().splitlines()

    diff = difflib.unified_diff(
        before,
        after,
        fromfile="config.yaml (before)",
        tofile="config.yaml (after)",
        lineterm="",
    )
    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point.

    Returns:
        None: This function is invoked for its side effects.
    """
    cli()


if __name__ == "__main__":
    main()
