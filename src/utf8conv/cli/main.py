"""Typer-based command line interface for utf8conv."""
from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import NoReturn, Optional

import click
import typer

from ..config import AppConfig, dump_default_config, load_config
from ..converter import Converter
from ..errors import ERROR_NO_UNICODE_TRANSLATION, ConversionError, hresult_from_win32
from ..logging import configure_logging
from ..models import ByteOrder, Encoding, ValidationReport
from ..selftest import run_selftest
from ..utils.text import units_from_bytes, units_to_bytes

app = typer.Typer(help="Strict UTF-8 / UTF-16 conversion")


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", metavar="PATH"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the configured log level"),
) -> None:
    try:
        ctx.obj = load_config(config)
    except ValueError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    configure_logging(log_level or ctx.obj.logging.normalized_level())


def _config() -> AppConfig:
    ctx = click.get_current_context()
    return ctx.obj


def _converter() -> Converter:
    try:
        return Converter.from_config(_config())
    except ValueError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2) from exc


def _byte_order(requested: Optional[ByteOrder]) -> ByteOrder:
    return requested or _config().cli.byte_order


def _fail(exc: ConversionError) -> NoReturn:
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1) from exc


def _read_utf16(path: Path, byte_order: ByteOrder):
    data = path.read_bytes()
    try:
        return units_from_bytes(data, byte_order)
    except ValueError as exc:
        _fail(ConversionError(str(exc), ERROR_NO_UNICODE_TRANSLATION))


@app.command("to-utf16")
def to_utf16(
    input_path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    output: Path = typer.Option(..., "-o", "--output", help="Write UTF-16 output here"),
    byte_order: Optional[ByteOrder] = typer.Option(None, "--byte-order", case_sensitive=False),
) -> None:
    """Convert a UTF-8 file to UTF-16."""
    try:
        units = _converter().utf16_from_utf8(input_path.read_bytes())
    except ConversionError as exc:
        _fail(exc)
    output.write_bytes(units_to_bytes(units, _byte_order(byte_order)))
    typer.echo(f"Wrote {len(units)} UTF-16 code units to {output}")


@app.command("to-utf8")
def to_utf8(
    input_path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    output: Path = typer.Option(..., "-o", "--output", help="Write UTF-8 output here"),
    byte_order: Optional[ByteOrder] = typer.Option(None, "--byte-order", case_sensitive=False),
) -> None:
    """Convert a UTF-16 file to UTF-8."""
    units = _read_utf16(input_path, _byte_order(byte_order))
    try:
        data = _converter().utf8_from_utf16(units)
    except ConversionError as exc:
        _fail(exc)
    output.write_bytes(data)
    typer.echo(f"Wrote {len(data)} UTF-8 bytes to {output}")


@app.command()
def check(
    input_path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    encoding: Encoding = typer.Option(Encoding.UTF8, "--encoding", case_sensitive=False),
    byte_order: Optional[ByteOrder] = typer.Option(None, "--byte-order", case_sensitive=False),
) -> None:
    """Validate a file strictly and print a JSON report."""
    converter = _converter()
    if encoding is Encoding.UTF8:
        source = input_path.read_bytes()
        validate = converter.validate_utf8
    else:
        source = _read_utf16(input_path, _byte_order(byte_order))
        validate = converter.validate_utf16
    report = ValidationReport(encoding=encoding, valid=True, source_units=len(source))
    try:
        report.destination_units = validate(source)
    except ConversionError as exc:
        report.valid = False
        report.code = exc.code
        report.hresult = hresult_from_win32(exc.code)
        report.message = exc.message
    typer.echo(json.dumps(asdict(report), ensure_ascii=False, indent=2))
    if not report.valid:
        raise typer.Exit(code=1)


@app.command()
def selftest() -> None:
    """Run the built-in conversion checks."""
    converter = _converter()
    typer.echo(f"Testing UTF-8/UTF-16 conversions with the '{converter.transcoder.name}' transcoder")
    errors = 0
    for result in run_selftest(converter):
        for message in result.errors:
            typer.echo(f"[ERROR] {result.name}: {message}")
        errors += len(result.errors)
    if errors:
        typer.echo(f"*** {errors} error(s) detected.")
        raise typer.Exit(code=1)
    typer.echo("*** No errors detected! ***")


@app.command("config-show")
def config_show() -> None:
    typer.echo(_config().model_dump_json(indent=2))


@app.command("config-init")
def config_init(
    target: Path = typer.Argument(..., help="Where to write the default configuration"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    if target.exists() and not force:
        typer.echo(f"{target} already exists; use --force to overwrite", err=True)
        raise typer.Exit(code=2)
    dump_default_config(target)
    typer.echo(f"Default configuration written to {target}")


@app.command()
def version() -> None:
    from ..version import __version__

    typer.echo(__version__)


if __name__ == "__main__":  # pragma: no cover
    app()
