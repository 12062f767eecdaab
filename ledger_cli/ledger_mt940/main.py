"""ledger-mt940 CLI entrypoint."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

import click

from ledger_cli.shared.cli import CLIContext, common_cli_options, handle_cli_errors, pass_cli_context
from ledger_cli.shared.exceptions import DecodeError, StatementFormatError
from ledger_cli.shared.utils import compute_file_sha256

from .decoder import DecodeOptions, read_mt940
from .ledger import Ledger
from .render import render_statement, write_csv, write_json
from .types import Statement
from .validator import validate_statement


class DecodeDefaultGroup(click.Group):
    """Click group that falls back to a default command when none is provided."""

    def __init__(self, *args, default_command: str | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._default_command = default_command

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if self._default_command is None or not args:
            return super().resolve_command(ctx, args)

        cmd = super().get_command(ctx, args[0])
        if cmd is not None:
            return super().resolve_command(ctx, args)

        return super().resolve_command(ctx, [self._default_command] + args)


@click.group(
    help="Decode MT940 bank statements into a de-duplicated ledger.",
    cls=DecodeDefaultGroup,
    default_command="decode",
)
@common_cli_options
def main(cli_ctx: CLIContext) -> None:
    return


@main.command("decode")
@click.argument(
    "statement_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--output", "output_path", type=click.Path(dir_okay=False, path_type=Path), help="Write the ledger to this file.")
@click.option("--stdout", is_flag=True, help="Write the ledger to stdout.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["csv", "json"], case_sensitive=False),
    help="Output format (default: from config or 'csv').",
)
@handle_cli_errors
@pass_cli_context
def decode_command(
    cli_ctx: CLIContext,
    statement_files: tuple[Path, ...],
    output_path: Path | None,
    stdout: bool,
    output_format: str | None,
) -> None:
    """Decode one or more statement files, dropping repeated transactions."""

    if output_path and stdout:
        raise click.UsageError("Cannot use both --output and --stdout simultaneously.")

    fmt = (output_format or cli_ctx.config.output.format).lower()
    options = DecodeOptions.from_config(cli_ctx.config)
    ledger = Ledger()
    decoded: list[tuple[Statement, str]] = []

    for path in statement_files:
        statement = _decode_file(path, options)
        result = ledger.add(statement)
        decoded.append((statement, compute_file_sha256(path)))
        cli_ctx.logger.info(
            f"{path.name}: {statement.label()} | Transactions: {len(statement.transactions)}"
        )
        if result.duplicates:
            cli_ctx.logger.warning(
                f"{path.name}: skipped {result.duplicates} transaction(s) already in the ledger."
            )

    if cli_ctx.dry_run:
        _emit_dry_run_summary(cli_ctx, decoded, ledger)
        return

    if stdout:
        buffer = StringIO()
        _write_ledger(fmt, decoded, ledger, buffer)
        click.echo(buffer.getvalue().rstrip("\n"))
        cli_ctx.logger.success("Decoding complete. Output sent to stdout.")
        return

    if output_path is None:
        output_path = cli_ctx.config.output.directory / f"{statement_files[0].stem}.{fmt}"
        cli_ctx.logger.info(f"No --output provided; defaulting to {output_path}.")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding="utf-8") as handle:
        _write_ledger(fmt, decoded, ledger, handle)
    cli_ctx.logger.success(f"Decoding complete. Output written to {output_path}.")


@main.command("inspect")
@click.argument("statement_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--check-balances",
    is_flag=True,
    help="Fail when opening balance plus movements does not equal the closing balance.",
)
@handle_cli_errors
@pass_cli_context
def inspect_command(cli_ctx: CLIContext, statement_file: Path, check_balances: bool) -> None:
    """Show balances, transactions and diagnostics for one statement."""

    statement = _decode_file(statement_file, DecodeOptions.from_config(cli_ctx.config))
    report = validate_statement(statement, check_balances=check_balances)
    render_statement(statement, report)
    if not report.ok:
        errors = sum(1 for issue in report.issues if issue.severity == "error")
        raise click.ClickException(f"Validation failed with {errors} error(s).")


def _decode_file(path: Path, options: DecodeOptions) -> Statement:
    try:
        return read_mt940(path, options=options)
    except StatementFormatError as exc:
        raise DecodeError(f"{path}: {exc}") from exc


def _write_ledger(
    fmt: str,
    decoded: list[tuple[Statement, str]],
    ledger: Ledger,
    handle,
) -> None:
    if fmt == "json":
        write_json(decoded, ledger, handle)
    else:
        write_csv(ledger, handle)


def _emit_dry_run_summary(
    cli_ctx: CLIContext,
    decoded: list[tuple[Statement, str]],
    ledger: Ledger,
) -> None:
    cli_ctx.logger.info("Dry run summary:")
    cli_ctx.logger.info(f"  Statements: {len(decoded)}")
    for statement, _ in decoded:
        cli_ctx.logger.info(f"  {statement.label()}")
    cli_ctx.logger.info(f"  Ledger transactions: {len(ledger)}")
    flagged = sum(1 for entry in ledger if entry.transaction.issues)
    if flagged:
        cli_ctx.logger.warning(f"  Transactions with diagnostics: {flagged}")


if __name__ == "__main__":  # pragma: no cover
    main()
