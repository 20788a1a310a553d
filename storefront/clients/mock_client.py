# storefront/clients/mock_client.py

"""In-memory backend with canned users and products (no network)."""

import itertools

from storefront.clients.base_client import BaseStoreClient
from storefront.clients.errors import (
    AuthRejected,
    FetchRejected,
    RegistrationRejected,
    StoreError,
)
from storefront.models.auth import AuthToken, Credentials, Registration
from storefront.models.product import Category, Product
from storefront.models.result import Err, Ok, Result

_CLOTHES = Category(id=1, name="Clothes", image="https://i.imgur.com/QkIa5tT.jpeg")
_ELECTRONICS = Category(id=2, name="Electronics", image="https://i.imgur.com/ZANVnHE.jpeg")
_SHOES = Category(id=4, name="Shoes", image="https://i.imgur.com/qNOjJje.jpeg")

DEFAULT_PRODUCTS: tuple[Product, ...] = (
    Product(
        id=1,
        title="Classic Red Pullover Hoodie",
        price=10.0,
        description="Soft cotton-blend hoodie with a roomy front pocket.",
        category=_CLOTHES,
    ),
    Product(
        id=2,
        title="Sleek Wireless Headphone",
        price=58.5,
        description="Over-ear headphones with 30 hours of battery life.",
        category=_ELECTRONICS,
    ),
    Product(
        id=3,
        title="Stylish Red & White Sneakers",
        price=79.0,
        description="Lightweight everyday sneakers with a cushioned sole.",
        category=_SHOES,
    ),
)

DEFAULT_USERS: dict[str, str] = {
    "john@mail.com": "changeme",
}


class MockStoreClient(BaseStoreClient):
    """Serves fixed data so the app can run offline and in tests."""

    def __init__(
        self,
        users: dict[str, str] | None = None,
        products: tuple[Product, ...] | None = None,
    ) -> None:
        super().__init__("mock")
        self.users: dict[str, str] = dict(
            DEFAULT_USERS if users is None else users
        )
        self.products: tuple[Product, ...] = (
            DEFAULT_PRODUCTS if products is None else products
        )
        self._issued: set[str] = set()
        self._counter = itertools.count(1)

    def _issue_token(self) -> AuthToken:
        token = AuthToken(access_token=f"mock-token-{next(self._counter)}")
        self._issued.add(token.access_token)
        return token

    def authenticate(
        self, credentials: Credentials,
    ) -> Result[AuthToken, StoreError]:
        if self.users.get(credentials.email) != credentials.password:
            self.logger.info("[mock] Rejected login for %s", credentials.email)
            return Err(AuthRejected("Unauthorized", 401))
        return Ok(self._issue_token())

    def fetch_products(
        self, token: AuthToken,
    ) -> Result[tuple[Product, ...], StoreError]:
        if token.access_token not in self._issued:
            return Err(FetchRejected("Unauthorized", 401))
        return Ok(self.products)

    def register(
        self, registration: Registration,
    ) -> Result[AuthToken | None, StoreError]:
        if registration.email in self.users:
            return Err(
                RegistrationRejected("El email ya está registrado", 400)
            )
        self.users[registration.email] = registration.password
        self.logger.info("[mock] Registered %s", registration.email)
        return Ok(None)
