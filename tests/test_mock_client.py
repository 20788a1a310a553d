# tests/test_mock_client.py

"""Tests for the in-memory mock backend and the client loader."""

import unittest

from storefront.clients.base_client import load_client
from storefront.clients.errors import AuthRejected, FetchRejected, RegistrationRejected
from storefront.clients.http_client import HttpStoreClient
from storefront.clients.mock_client import DEFAULT_PRODUCTS, MockStoreClient
from storefront.models.auth import AuthToken, Credentials, Registration
from storefront.models.result import Err, Ok


class TestMockStoreClient(unittest.TestCase):
    """Canned users and products."""

    def test_known_user_gets_token_and_products(self) -> None:
        client = MockStoreClient()
        login = client.authenticate(Credentials("john@mail.com", "changeme"))
        assert isinstance(login, Ok)

        fetched = client.fetch_products(login.value)
        assert isinstance(fetched, Ok)
        self.assertEqual(fetched.value, DEFAULT_PRODUCTS)

    def test_wrong_password_is_unauthorized(self) -> None:
        client = MockStoreClient()
        result = client.authenticate(Credentials("john@mail.com", "nope"))
        assert isinstance(result, Err)
        self.assertIsInstance(result.error, AuthRejected)
        self.assertEqual(result.message, "Unauthorized")

    def test_foreign_token_is_rejected(self) -> None:
        client = MockStoreClient()
        result = client.fetch_products(AuthToken("forged"))
        assert isinstance(result, Err)
        self.assertIsInstance(result.error, FetchRejected)

    def test_registration_allows_login(self) -> None:
        client = MockStoreClient(users={})
        registered = client.register(
            Registration("Ana", "ana@mail.com", "pw", "https://x/a.png")
        )
        assert isinstance(registered, Ok)
        self.assertIsNone(registered.value)
        login = client.authenticate(Credentials("ana@mail.com", "pw"))
        self.assertIsInstance(login, Ok)

    def test_duplicate_registration_rejected(self) -> None:
        client = MockStoreClient()
        result = client.register(
            Registration("John", "john@mail.com", "pw", "https://x/a.png")
        )
        assert isinstance(result, Err)
        self.assertIsInstance(result.error, RegistrationRejected)


class TestLoadClient(unittest.TestCase):
    """Backend registry lookup."""

    def test_loads_mock(self) -> None:
        self.assertIsInstance(load_client("mock"), MockStoreClient)

    def test_loads_http(self) -> None:
        client = load_client("http")
        try:
            self.assertIsInstance(client, HttpStoreClient)
        finally:
            client.close()

    def test_unknown_backend_raises(self) -> None:
        with self.assertRaises(ValueError):
            load_client("carrier-pigeon")


if __name__ == "__main__":
    unittest.main()
