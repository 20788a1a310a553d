# storefront/clients/base_client.py

"""Abstract base class for store API clients."""

import importlib
import logging
from abc import ABC, abstractmethod
from typing import Any

from storefront.clients.errors import StoreError
from storefront.config.settings import Settings
from storefront.models.auth import AuthToken, Credentials, Registration
from storefront.models.product import Product
from storefront.models.result import Result


class BaseStoreClient(ABC):
    """Common interface for the real HTTP client and the mock backend.

    Implementations never raise :class:`StoreError`; every failure is
    returned inside an ``Err`` so callers keep errors apart from data.
    """

    def __init__(self, backend_name: str) -> None:
        self.backend_name = backend_name
        self.logger = logging.getLogger(
            f"storefront.client.{backend_name}"
        )
        self.settings = Settings()

    @abstractmethod
    def authenticate(
        self, credentials: Credentials,
    ) -> Result[AuthToken, StoreError]:
        """Exchange credentials for a bearer token."""
        ...

    @abstractmethod
    def fetch_products(
        self, token: AuthToken,
    ) -> Result[tuple[Product, ...], StoreError]:
        """Fetch the full product catalogue using a bearer token."""
        ...

    @abstractmethod
    def register(
        self, registration: Registration,
    ) -> Result[AuthToken | None, StoreError]:
        """Create an account.

        Returns ``Ok(token)`` when the server hands back a token, or
        ``Ok(None)`` when it only returns the created user record and the
        caller has to log in separately.
        """
        ...

    def close(self) -> None:
        """Release any network resources held by the client."""


def _load_client_class(dotted_path: str) -> type[Any]:
    """Dynamically import a client class from its dotted module path."""
    module_path, class_name = dotted_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls: type[Any] = getattr(module, class_name)
    return cls


def load_client(backend_id: str | None = None) -> BaseStoreClient:
    """Instantiate the client registered under *backend_id*.

    Falls back to ``Settings.DEFAULT_BACKEND`` when no id is given.
    Raises ``ValueError`` for unknown ids.
    """
    wanted = backend_id or Settings.DEFAULT_BACKEND
    available = {b["id"]: b for b in Settings.AVAILABLE_BACKENDS}
    if wanted not in available:
        valid = ", ".join(sorted(available))
        raise ValueError(
            f"Unknown backend '{wanted}' (available: {valid})"
        )
    client_cls = _load_client_class(available[wanted]["client"])
    client: BaseStoreClient = client_cls()
    return client
