# main.py

"""Entry point for the storefront client (TUI or headless CLI)."""

import argparse
import asyncio
import getpass
import logging
import sys

from storefront.config.logging_config import setup_logging
from storefront.config.settings import Settings

logger = logging.getLogger("storefront.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    valid_ids = ", ".join(b["id"] for b in Settings.AVAILABLE_BACKENDS)

    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Explora el catálogo de la tienda tras iniciar sesión.",
        epilog=f"Backends disponibles: {valid_ids}",
    )
    parser.add_argument(
        "-u",
        "--email",
        default=None,
        help="Inicia sesión sin interfaz con este email. Omítelo para abrir la TUI.",
    )
    parser.add_argument(
        "-p",
        "--password",
        default=None,
        help="Contraseña para --email (se pide si se omite).",
    )
    parser.add_argument(
        "-b",
        "--backend",
        choices=[b["id"] for b in Settings.AVAILABLE_BACKENDS],
        default=None,
        help=f"Backend del cliente (por defecto: {Settings.DEFAULT_BACKEND}).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Formato de salida sin interfaz (por defecto: json).",
    )
    return parser


def _run_tui(backend: str | None) -> None:
    """Launch the interactive Textual TUI."""
    from storefront.clients.base_client import load_client
    from storefront.ui.app import StorefrontApp

    try:
        app = StorefrontApp(client=load_client(backend))
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("storefront TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run a headless login and exit."""
    from storefront.cli.runner import cli_login

    password = args.password
    if password is None:
        password = getpass.getpass("Contraseña: ")

    exit_code = asyncio.run(
        cli_login(
            email=args.email,
            password=password,
            backend=args.backend,
            output_format=args.output_format,
        )
    )
    sys.exit(exit_code)


def main() -> None:
    """Route to TUI (no email) or headless CLI (email provided)."""
    log_file = setup_logging()
    logger.info("storefront starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.email is None:
        _run_tui(args.backend)
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
