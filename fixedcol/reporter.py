from __future__ import annotations

from typing import Any, Dict, List

from rich import box
from rich.console import Console
from rich.table import Table

from fixedcol.columns.binder import ColumnBinder
from fixedcol.columns.policy import policy_table
from fixedcol.domain.fixed_bytes import FixedBytes


def _render_parameter(parameter: Any) -> str:
    if isinstance(parameter, bytes):
        return f"bytes[{len(parameter)}] {parameter.hex()}"
    return repr(parameter)


def encoding_rows(value: FixedBytes) -> List[Dict[str, str]]:
    """
    Bound parameter for `value` under every row of the policy table.
    """
    binder = ColumnBinder()
    rows = []
    for backend, column_type, encoding in policy_table():
        declared = column_type.replace("(2+2N)", f"({2 + 2 * value.SIZE})").replace("(N)", f"({value.SIZE})")
        parameter = binder.bind(backend, value, declared)
        rows.append(
            {
                "backend": backend.value,
                "column_type": declared,
                "encoding": encoding.value,
                "parameter": _render_parameter(parameter),
            }
        )
    return rows


def print_encodings(value: FixedBytes, console: Console | None = None) -> None:
    """
    Render the per-backend bound parameters of `value` as a rich table.
    """
    console = console or Console()
    table = Table(
        title=f"{type(value).__name__} {value.to_hex()}",
        box=box.ROUNDED,
    )
    table.add_column("Backend", style="cyan", no_wrap=True)
    table.add_column("Column type", style="magenta")
    table.add_column("Encoding", style="green")
    table.add_column("Bound parameter", style="yellow")

    for row in encoding_rows(value):
        table.add_row(row["backend"], row["column_type"], row["encoding"], row["parameter"])

    console.print(table)


def print_check_results(results: List[Dict[str, Any]], console: Console | None = None) -> None:
    """
    Render round-trip check results as a rich table.

    Each result carries `label`, `expected`, `actual` and `ok`.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    failures = sum(1 for r in results if not r["ok"])
    caption = "[green]all values round-tripped[/green]" if not failures else f"[red]{failures} failed[/red]"
    table = Table(title="Identifier round-trip", box=box.ROUNDED, caption=caption)
    table.add_column("Label", style="cyan", no_wrap=True)
    table.add_column("Inserted", style="magenta")
    table.add_column("Read back", style="green")
    table.add_column("OK", justify="center")

    for res in results:
        status = "[bold green]✓[/bold green]" if res["ok"] else "[bold red]✗[/bold red]"
        table.add_row(res["label"], res["expected"], res.get("actual") or "-", status)

    console.print(table)


__all__ = ["encoding_rows", "print_check_results", "print_encodings"]
