# tests/test_cli_runner.py

"""Tests for the headless CLI login runner."""

import io
import json
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from storefront.cli.runner import cli_login
from storefront.clients.errors import FetchRejected
from storefront.clients.mock_client import DEFAULT_PRODUCTS, MockStoreClient
from storefront.models.result import Err
from storefront.services.presenter import to_summary


class TestCliLogin(unittest.IsolatedAsyncioTestCase):
    """Exit codes and stdout of the headless runner."""

    async def test_json_output_on_success(self) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = await cli_login(
                "john@mail.com", "changeme", backend="mock", output_format="json"
            )

        self.assertEqual(code, 0)
        data = json.loads(buffer.getvalue())
        self.assertEqual(len(data), len(DEFAULT_PRODUCTS))
        self.assertEqual(data[0]["summary"], to_summary(DEFAULT_PRODUCTS[0]))
        self.assertEqual(data[0]["category"]["name"], "Clothes")

    async def test_bad_password_exits_one(self) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = await cli_login(
                "john@mail.com", "wrong", backend="mock", output_format="json"
            )

        self.assertEqual(code, 1)
        self.assertEqual(buffer.getvalue(), "")

    async def test_fetch_failure_exits_one(self) -> None:
        client = MockStoreClient()
        client.fetch_products = (  # type: ignore[method-assign]
            lambda token: Err(FetchRejected("Invalid token", 401))
        )
        with patch("storefront.cli.runner.load_client", return_value=client):
            code = await cli_login(
                "john@mail.com", "changeme", backend=None, output_format="json"
            )
        self.assertEqual(code, 1)

    async def test_unknown_backend_exits_one(self) -> None:
        code = await cli_login(
            "john@mail.com", "changeme", backend="nope", output_format="json"
        )
        self.assertEqual(code, 1)

    async def test_table_output(self) -> None:
        with patch("storefront.cli.runner._print_table") as mock_table:
            code = await cli_login(
                "john@mail.com", "changeme", backend="mock", output_format="table"
            )
        self.assertEqual(code, 0)
        mock_table.assert_called_once_with(DEFAULT_PRODUCTS)


if __name__ == "__main__":
    unittest.main()
