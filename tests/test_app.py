# tests/test_app.py

"""Smoke tests for the TUI application using Textual's Pilot."""

import unittest

from textual.containers import VerticalScroll
from textual.widgets import Button, ContentSwitcher, Input, Static

from storefront.clients.errors import NetworkError
from storefront.clients.mock_client import DEFAULT_PRODUCTS, MockStoreClient
from storefront.models.result import Err
from storefront.services.session import AuthFailed, LoggedIn, LoggedOut, Session
from storefront.ui.app import (
    LOGIN_VIEW,
    PRODUCTS_VIEW,
    REGISTER_VIEW,
    StorefrontApp,
)

SIZE = (100, 50)


def _make_app(
    client: MockStoreClient | None = None,
    policy: str = "keep",
    registration_enabled: bool = True,
) -> StorefrontApp:
    """Build the app on top of the mock backend."""
    session = Session(
        client or MockStoreClient(),
        fetch_failure_policy=policy,
        registration_enabled=registration_enabled,
    )
    return StorefrontApp(session=session)


class TestStorefrontApp(unittest.IsolatedAsyncioTestCase):
    """Smoke tests for the Textual TUI."""

    def _current_view(self, app: StorefrontApp) -> str | None:
        return app.query_one("#views", ContentSwitcher).current

    async def test_app_composes_without_crash(self) -> None:
        """The login view is shown first with all its widgets."""
        app = _make_app()
        async with app.run_test(size=SIZE) as pilot:
            app.query_one("#login_email", Input)
            app.query_one("#login_password", Input)
            app.query_one("#login_btn", Button)
            app.query_one("#product_list", VerticalScroll)
            self.assertEqual(self._current_view(app), LOGIN_VIEW)
            await pilot.pause()

    async def test_labels_are_spanish(self) -> None:
        """Every visible label uses the same language as the titles."""
        app = _make_app()
        async with app.run_test(size=SIZE) as pilot:
            labels = {
                button.id: str(button.label) for button in app.query(Button)
            }
            self.assertEqual(labels["login_btn"], "Iniciar Sesión")
            self.assertEqual(labels["register_btn"], "Registrarse")
            self.assertEqual(
                app.query_one("#login_password", Input).placeholder,
                "Contraseña",
            )
            self.assertEqual(
                [b.description for b in StorefrontApp.BINDINGS],  # type: ignore[union-attr]
                ["Salir", "Recargar", "Cerrar sesión"],
            )
            await pilot.pause()

    async def test_login_shows_products(self) -> None:
        """A good login switches to the product list with one card each."""
        app = _make_app()
        async with app.run_test(size=SIZE) as pilot:
            app.query_one("#login_email", Input).value = "john@mail.com"
            app.query_one("#login_password", Input).value = "changeme"
            await pilot.click("#login_btn")
            await app.session.wait()
            await pilot.pause()

            self.assertIsInstance(app.session.state, LoggedIn)
            self.assertEqual(self._current_view(app), PRODUCTS_VIEW)
            cards = app.query(".product_card")
            self.assertEqual(len(cards), len(DEFAULT_PRODUCTS))
            self.assertEqual(
                app.products_status, f"{len(DEFAULT_PRODUCTS)} productos"
            )

    async def test_wrong_password_shows_error(self) -> None:
        """A rejected login stays on the form with the server message."""
        app = _make_app()
        async with app.run_test(size=SIZE) as pilot:
            app.query_one("#login_email", Input).value = "john@mail.com"
            app.query_one("#login_password", Input).value = "nope"
            await pilot.click("#login_btn")
            await app.session.wait()
            await pilot.pause()

            self.assertEqual(app.session.state, AuthFailed("Unauthorized"))
            self.assertEqual(self._current_view(app), LOGIN_VIEW)
            self.assertEqual(len(app.query(".product_card")), 0)

    async def test_empty_form_does_not_log_in(self) -> None:
        app = _make_app()
        async with app.run_test(size=SIZE) as pilot:
            await pilot.click("#login_btn")
            await pilot.pause()
            self.assertIsInstance(app.session.state, AuthFailed)
            self.assertEqual(self._current_view(app), LOGIN_VIEW)

    async def test_toggle_to_register_and_back(self) -> None:
        app = _make_app()
        async with app.run_test(size=SIZE) as pilot:
            await pilot.click("#show_register_btn")
            await pilot.pause()
            self.assertEqual(self._current_view(app), REGISTER_VIEW)

            await pilot.click("#show_login_btn")
            await pilot.pause()
            self.assertEqual(self._current_view(app), LOGIN_VIEW)

    async def test_register_logs_in(self) -> None:
        client = MockStoreClient(users={})
        app = _make_app(client)
        async with app.run_test(size=SIZE) as pilot:
            app.show_auth_view(REGISTER_VIEW)
            app.query_one("#register_name", Input).value = "Ana"
            app.query_one("#register_email", Input).value = "ana@mail.com"
            app.query_one("#register_password", Input).value = "pw"
            app.submit_registration()
            await app.session.wait()
            await pilot.pause()

            self.assertIsInstance(app.session.state, LoggedIn)
            self.assertEqual(self._current_view(app), PRODUCTS_VIEW)
            self.assertIn("ana@mail.com", client.users)

    async def test_disabled_registration_message(self) -> None:
        app = _make_app(registration_enabled=False)
        async with app.run_test(size=SIZE) as pilot:
            app.show_auth_view(REGISTER_VIEW)
            app.submit_registration()
            await pilot.pause()

            self.assertIsInstance(app.session.state, AuthFailed)
            self.assertEqual(self._current_view(app), REGISTER_VIEW)

    async def test_fetch_error_shown_in_status_not_list(self) -> None:
        """Fetch errors go to the status line, never into the list."""
        client = MockStoreClient()
        client.fetch_products = (  # type: ignore[method-assign]
            lambda token: Err(NetworkError("timed out"))
        )
        app = _make_app(client)
        async with app.run_test(size=SIZE) as pilot:
            app.query_one("#login_email", Input).value = "john@mail.com"
            app.query_one("#login_password", Input).value = "changeme"
            app.submit_login()
            await app.session.wait()
            await pilot.pause()

            self.assertEqual(self._current_view(app), PRODUCTS_VIEW)
            self.assertEqual(len(app.query(".product_card")), 0)
            app.query_one("#products_status", Static)
            self.assertIn("timed out", app.products_status)

    async def test_logout_returns_to_login(self) -> None:
        app = _make_app()
        async with app.run_test(size=SIZE) as pilot:
            app.query_one("#login_email", Input).value = "john@mail.com"
            app.query_one("#login_password", Input).value = "changeme"
            app.submit_login()
            await app.session.wait()
            await pilot.pause()

            await pilot.press("escape")
            await pilot.pause()

            self.assertIsInstance(app.session.state, LoggedOut)
            self.assertEqual(self._current_view(app), LOGIN_VIEW)
            self.assertEqual(app.query_one("#login_password", Input).value, "")


if __name__ == "__main__":
    unittest.main()
