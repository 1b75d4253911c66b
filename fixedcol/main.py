from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional

import typer

from fixedcol.columns.decoder import ColumnDecoder
from fixedcol.columns.policy import Backend, ColumnEncoding, encoding_for
from fixedcol.config import get_settings, mask_url
from fixedcol.domain.fixed_bytes import Address, FixedBytes
from fixedcol.domain.models import IdentifierRecord
from fixedcol.errors import FixedBytesError
from fixedcol.infrastructure.db_factory import DRIVER_ERRORS, backend_for_url, connect
from fixedcol.infrastructure.identifier_table import IdentifierTable
from fixedcol.reporter import print_check_results, print_encodings
from fixedcol.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Fixed-length identifier column codec CLI.")

log = get_logger(__name__)

CHECK_TABLE = "fixedcol_check"

SPECIAL_VALUES = [
    ("Zero", Address.zero()),
    ("Max", Address.from_hex("0x" + "ff" * 20)),
    ("Dead", Address.from_hex("0xdead000000000000000000000000000000000000")),
]


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _width(size: Optional[int]) -> type:
    return FixedBytes[size or get_settings().identifier_size]


@app.callback()
def _setup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(f"sqlite={mask_url(settings.sqlite_database_url)}")
    typer.echo(f"mysql={mask_url(settings.mysql_database_url)}")
    typer.echo(f"postgres={mask_url(settings.postgres_database_url)}")
    typer.echo(
        f"identifier_size={settings.identifier_size} "
        f"connect_attempts={settings.db_connect_attempts} log_level={settings.log_level}"
    )


@app.command()
def encode(
    value: str = typer.Argument(..., help="Identifier as hex, with or without 0x."),
    size: Optional[int] = typer.Option(None, "--size", "-n", help="Width in bytes (default from settings)."),
) -> None:
    """
    Show the bound parameter for every backend / column type.
    """
    try:
        fixed = _width(size).from_hex(value)
    except FixedBytesError as exc:
        _fail(f"Invalid identifier: {exc}")
    print_encodings(fixed)


@app.command()
def decode(
    raw: str = typer.Argument(..., help="Raw column value. Binary values are given as hex."),
    backend: str = typer.Option(..., "--backend", "-b", help="sqlite, mysql or postgres."),
    column_type: str = typer.Option(..., "--column-type", "-t", help="Declared SQL type, e.g. BYTEA."),
    size: Optional[int] = typer.Option(None, "--size", "-n", help="Width in bytes (default from settings)."),
) -> None:
    """
    Decode a raw column value and print its canonical form.
    """
    try:
        target = Backend.parse(backend)
        encoding = encoding_for(target, column_type)
        raw_value: Any = raw
        if encoding is ColumnEncoding.NATIVE_BINARY:
            digits = raw[2:] if raw[:2] in ("0x", "0X") else raw
            try:
                raw_value = bytes.fromhex(digits)
            except ValueError:
                _fail(f"Binary values must be given as hex: {raw!r}")
        value = ColumnDecoder(_width(size)).decode(target, column_type, raw_value)
    except (FixedBytesError, TypeError, ValueError) as exc:
        _fail(f"Decode failed: {exc}")
    typer.echo(value.to_hex())


def run_check(url: str, column_type: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Insert the zero, max and dead identifiers, read them back and compare.

    The check table is dropped afterwards.
    """
    backend = backend_for_url(url)
    conn = connect(url)
    results: List[Dict[str, Any]] = []
    try:
        table = IdentifierTable(conn, backend, CHECK_TABLE, column_type)
        table.create()
        try:
            table.insert_many(IdentifierRecord(identifier=value, label=label) for label, value in SPECIAL_VALUES)
            stored = {record.label: record.identifier for record in table.all()}
            for label, value in SPECIAL_VALUES:
                actual = stored.get(label)
                results.append(
                    {
                        "label": label,
                        "expected": value.to_hex(),
                        "actual": actual.to_hex() if actual is not None else None,
                        "ok": actual == value,
                    }
                )
        finally:
            table.drop()
    finally:
        conn.close()
    log.info(
        "round-trip check finished",
        extra={"backend": str(backend), "failures": sum(1 for r in results if not r["ok"])},
    )
    return results


@app.command()
def check(
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Database URL (default: SQLite URL from settings)."),
    column_type: Optional[str] = typer.Option(None, "--column-type", "-t", help="Declared identifier column type."),
) -> None:
    """
    Round-trip the zero/max/dead identifiers through a real database.
    """
    target = url or get_settings().sqlite_database_url
    typer.echo(f"Checking {mask_url(target)}")
    try:
        results = run_check(target, column_type)
    except (ValueError, *DRIVER_ERRORS) as exc:
        _fail(f"Check failed: {exc}")
    print_check_results(results)
    if not all(r["ok"] for r in results):
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
