"""
Identifier generation and loading script for fixedcol.

Implements deterministic pseudo-random identifier generation, CSV emission, and
loading into any supported backend through IdentifierTable (so rows go through
the same binder as application code).
"""

from __future__ import annotations

import csv
import random
import sys
import tempfile
import time
from pathlib import Path
from typing import Iterator, Optional

import typer

from fixedcol.config import get_settings, mask_url
from fixedcol.domain.fixed_bytes import Address
from fixedcol.domain.models import IdentifierRecord
from fixedcol.infrastructure.db_factory import backend_for_url, connect, parse_url
from fixedcol.infrastructure.identifier_table import IdentifierTable

app = typer.Typer(help="Generate synthetic identifiers (CSV) and optionally load them into a database.")

CSV_HEADER = ["identifier", "label"]


def _generate_identifiers(rows: int, seed: int) -> Iterator[Address]:
    rng = random.Random(seed)
    for _ in range(rows):
        yield Address(rng.randbytes(Address.SIZE))


def _generate_rows_csv(csv_path: Path, rows: int, batch_size: int, seed: int) -> None:
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)

        buffer: list[list[str]] = []
        for i, value in enumerate(_generate_identifiers(rows, seed)):
            buffer.append([value.to_hex(), f"generated {i + 1}"])
            if len(buffer) >= batch_size:
                writer.writerows(buffer)
                buffer.clear()
        if buffer:
            writer.writerows(buffer)


def _read_records(csv_path: Path) -> Iterator[IdentifierRecord]:
    with csv_path.open("r", newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            yield IdentifierRecord(identifier=row["identifier"], label=row["label"])


def _load_target(url: Optional[str], default_url: str, csv_path: Path) -> str:
    """
    Pick the database to load into.

    An in-memory SQLite default is swapped for a file next to the CSV, since
    rows loaded into memory vanish when the connection closes. An explicit
    in-memory URL is refused.
    """
    if url is None:
        if _in_memory(default_url):
            db_path = (csv_path.parent / "identifiers.db").resolve()
            return f"sqlite://{db_path}"
        return default_url
    if _in_memory(url):
        raise typer.BadParameter("an in-memory database would discard the loaded rows", param_hint="--url")
    return url


def _in_memory(url: str) -> bool:
    target = parse_url(url)
    return target.database == ":memory:"


def _load_into_db(url: str, csv_path: Path, table_name: str, column_type: Optional[str]) -> int:
    conn = connect(url)
    try:
        table = IdentifierTable(conn, backend_for_url(url), table_name, column_type)
        table.create()
        return table.insert_many(_read_records(csv_path))
    finally:
        conn.close()


@app.command()
def main(
    rows: int = typer.Option(
        1_000,
        "--rows",
        "-r",
        help="Number of identifiers to generate.",
    ),
    batch_size: int = typer.Option(
        500,
        "--batch-size",
        "-b",
        help="Batch size for CSV buffering during generation.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Optional CSV output path (if omitted, a temp file will be used).",
    ),
    url: Optional[str] = typer.Option(
        None,
        "--url",
        help="Database URL to load into (default: SQLite URL from settings, or a file beside the CSV when that is in-memory).",
    ),
    table: str = typer.Option(
        "generated_identifiers",
        "--table",
        help="Target table name (recreated on load).",
    ),
    column_type: Optional[str] = typer.Option(
        None,
        "--column-type",
        help="Declared identifier column type (default per backend).",
    ),
    no_load: bool = typer.Option(
        False,
        "--no-load",
        help="Only generate CSV; skip loading into the database.",
    ),
) -> None:
    """
    Generate identifiers and optionally load them into a database.
    """
    settings = get_settings()
    start = time.perf_counter()
    if output:
        csv_path = output
        csv_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        tmpdir = Path(tempfile.mkdtemp(prefix="fixedcol_csv_"))
        csv_path = tmpdir / "identifiers.csv"

    typer.echo(f"Generating {rows:,} identifiers -> {csv_path} (batch={batch_size}, seed={seed})")
    _generate_rows_csv(csv_path, rows=rows, batch_size=batch_size, seed=seed)
    typer.echo(f"CSV generation completed in {time.perf_counter() - start:.2f}s")

    if no_load:
        typer.echo("Skipping load (no-load flag set).")
        return

    load_start = time.perf_counter()
    target = _load_target(url, settings.sqlite_database_url, csv_path)
    typer.echo(f"Loading into {mask_url(target)}")
    loaded = _load_into_db(target, csv_path, table, column_type)
    typer.echo(f"Loaded {loaded:,} rows in {time.perf_counter() - load_start:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
