"""``fluxdispatch demo`` — run the flight destination stores.

Dispatches a country update and then a city update through a
``FlightDestinationForm`` and shows, for each payload, the order the
stores handled it in and the resulting store values.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fluxdispatch.contrib.flight import FlightDestinationForm
from fluxdispatch.core.dispatcher import DispatcherError

console = Console()


def demo_cmd(
    country: str = typer.Option(
        "australia",
        "--country",
        "-c",
        help="Country to select first.",
    ),
    city: str = typer.Option(
        None,
        "--city",
        help="City to select after the country (skipped if omitted).",
    ),
) -> None:
    """Run the flight destination demo."""
    form = FlightDestinationForm()

    console.print()
    console.print(
        Panel(
            "[bold]Flight destination demo[/bold]\n\n"
            "Stores register in the order price, city, country.\n"
            "wait_for() makes every country update run country -> city -> price.",
            border_style="cyan",
            padding=(1, 2),
        )
    )

    table = Table(title="Dispatches")
    table.add_column("Action", style="cyan")
    table.add_column("Handled order")
    table.add_column("Country")
    table.add_column("City")
    table.add_column("Price", justify="right")

    steps = [("country-update", country, form.select_country)]
    if city:
        steps.append(("city-update", city, form.select_city))

    for action, value, select in steps:
        try:
            select(value)
        except DispatcherError as exc:
            console.print(f"[red]Dispatch failed:[/red] {exc}")
            raise typer.Exit(code=1) from exc
        table.add_row(
            f"{action} ({value})",
            " -> ".join(form.handled_log) or "[dim]none[/dim]",
            form.country_store.country or "-",
            form.city_store.city or "-",
            str(form.price_store.price) if form.price_store.price is not None else "-",
        )

    console.print(table)
