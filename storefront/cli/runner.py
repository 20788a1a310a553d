# storefront/cli/runner.py

"""Headless login + product listing, reusing the session state machine."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from storefront.clients.base_client import load_client
from storefront.models.product import Product
from storefront.services.presenter import to_summary
from storefront.services.session import AuthFailed, LoggedIn, Session

logger = logging.getLogger("storefront.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _products_to_dicts(products: tuple[Product, ...]) -> list[dict[str, object]]:
    """Serialise products to plain dicts for JSON output."""
    return [
        {
            "id": p.id,
            "title": p.title,
            "price": p.price,
            "description": p.description,
            "category": {
                "id": p.category.id,
                "name": p.category.name,
                "image": p.category.image,
            },
            "summary": to_summary(p),
        }
        for p in products
    ]


def _print_table(products: tuple[Product, ...]) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title="Lista de Productos",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Título", max_width=40)
    table.add_column("Precio", justify="right", style="green")
    table.add_column("Categoría", style="magenta")
    table.add_column("Descripción", overflow="fold", style="dim")

    for idx, p in enumerate(products, 1):
        table.add_row(
            str(idx),
            p.title,
            f"{p.price} USD",
            p.category.name,
            p.description,
        )

    Console().print(table)


async def cli_login(
    email: str,
    password: str,
    backend: str | None,
    output_format: str,
) -> int:
    """Log in, fetch products and print them. Returns 0 on success, 1 on failure."""
    try:
        client = load_client(backend)
    except ValueError as exc:
        _err.print(f"[red]{exc}[/red]")
        return 1

    # Headless runs fail fast instead of showing an empty list
    session = Session(client, fetch_failure_policy="logout")
    _err.print(
        f"[bold]Iniciando sesión:[/bold] {email}  [dim]backend={client.backend_name}[/dim]"
    )
    try:
        state = await session.login(email, password)
    finally:
        session.close()
        client.close()

    if isinstance(state, AuthFailed):
        _err.print(f"[red]Error: {state.message}[/red]")
        return 1
    if not isinstance(state, LoggedIn):
        logger.error("Login ended in unexpected state %r", state)
        _err.print("[red]El inicio de sesión no se completó[/red]")
        return 1

    _err.print(f"[green]✓ {len(state.products)} productos[/green]")
    if output_format == "table":
        _print_table(state.products)
    else:
        json.dump(
            _products_to_dicts(state.products),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    return 0
