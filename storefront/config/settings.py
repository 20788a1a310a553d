# storefront/config/settings.py

"""Central configuration for the storefront client."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag such as ``1``/``0`` or ``true``/``false``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Central configuration for the storefront client."""

    # --- API ---
    API_BASE_URL: str = os.getenv(
        "STOREFRONT_API_URL", "https://api.escuelajs.co/api/v1"
    ).rstrip("/")
    LOGIN_PATH: str = "/auth/login"
    REGISTER_PATH: str = "/users/"
    PRODUCTS_PATH: str = "/products"
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out

    # --- Session ---
    FETCH_FAILURE_POLICY: str = os.getenv(
        "STOREFRONT_FETCH_FAILURE_POLICY", "keep"
    )
    REGISTRATION_ENABLED: bool = _env_flag(
        "STOREFRONT_REGISTRATION_ENABLED", True
    )
    DEFAULT_AVATAR: str = "https://picsum.photos/800"

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "es-ES,es;q=0.9,en;q=0.8",
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Backends (registry of swappable client implementations) ---
    DEFAULT_BACKEND: str = os.getenv("STOREFRONT_BACKEND", "http")
    AVAILABLE_BACKENDS: list[dict[str, str]] = [
        {
            "id": "http",
            "label": "EscuelaJS API",
            "client": "storefront.clients.http_client.HttpStoreClient",
        },
        {
            "id": "mock",
            "label": "Mock data",
            "client": "storefront.clients.mock_client.MockStoreClient",
        },
    ]
