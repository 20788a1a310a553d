# storefront/ui/app.py

"""Terminal UI: login, registration and product list views."""

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.widgets import (
    Button,
    ContentSwitcher,
    Footer,
    Header,
    Input,
    Static,
)

from storefront.clients.base_client import BaseStoreClient, load_client
from storefront.services.presenter import to_summary
from storefront.services.session import (
    AuthFailed,
    Authenticating,
    LoggedIn,
    LoggedOut,
    Session,
    SessionState,
)

logger = logging.getLogger("storefront.ui")

LOGIN_VIEW = "login_view"
REGISTER_VIEW = "register_view"
PRODUCTS_VIEW = "products_view"


class StorefrontApp(App[object]):
    """Terminal UI for browsing the store catalogue after logging in."""

    CSS_PATH = "styles.css"
    TITLE = "Storefront"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Salir"),
        Binding("r", "reload", "Recargar"),
        Binding("escape", "logout", "Cerrar sesión"),
    ]

    def __init__(
        self,
        client: BaseStoreClient | None = None,
        session: Session | None = None,
    ) -> None:
        super().__init__()
        if session is None:
            session = Session(client or load_client())
        self.session = session
        self.session.subscribe(self._on_session_state)
        # Which auth form to show while logged out
        self.auth_view: str = LOGIN_VIEW
        self.products_status: str = ""

    def compose(self) -> ComposeResult:
        """Build the widget tree for the three views."""
        yield Header()
        with ContentSwitcher(initial=LOGIN_VIEW, id="views"):
            with Vertical(id=LOGIN_VIEW, classes="auth_form"):
                yield Static("Iniciar sesión", classes="form_title")
                yield Input(placeholder="Email", id="login_email")
                yield Input(
                    placeholder="Contraseña", password=True, id="login_password"
                )
                yield Button("Iniciar Sesión", variant="primary", id="login_btn")
                yield Button(
                    "¿No tienes cuenta? Regístrate", variant="default", id="show_register_btn"
                )
                yield Static("", id="login_error", classes="error", markup=False)
            with Vertical(id=REGISTER_VIEW, classes="auth_form"):
                yield Static("Registro", classes="form_title")
                yield Input(placeholder="Nombre", id="register_name")
                yield Input(placeholder="Email", id="register_email")
                yield Input(
                    placeholder="Contraseña", password=True, id="register_password"
                )
                yield Button("Registrarse", variant="primary", id="register_btn")
                yield Button(
                    "¿Ya tienes cuenta? Inicia sesión", variant="default", id="show_login_btn"
                )
                yield Static("", id="register_error", classes="error", markup=False)
            with Vertical(id=PRODUCTS_VIEW):
                yield Static("Lista de Productos:", classes="form_title")
                yield Static("", id="products_status", markup=False)
                yield VerticalScroll(id="product_list")
        yield Footer()

    def on_unmount(self) -> None:
        """Cancel in-flight requests so they never touch a dead view."""
        self.session.close()
        self.session.client.close()

    # ── Input events ─────────────────────────────────────

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Route button clicks to session actions or view toggles."""
        button_id = event.button.id
        if button_id == "login_btn":
            self.submit_login()
        elif button_id == "register_btn":
            self.submit_registration()
        elif button_id == "show_register_btn":
            self.show_auth_view(REGISTER_VIEW)
        elif button_id == "show_login_btn":
            self.show_auth_view(LOGIN_VIEW)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in a form field submits that form."""
        input_id = event.input.id or ""
        if input_id.startswith("login_"):
            self.submit_login()
        elif input_id.startswith("register_"):
            self.submit_registration()

    def submit_login(self) -> None:
        """Send the login form to the session."""
        email = self.query_one("#login_email", Input).value
        password = self.query_one("#login_password", Input).value
        self.session.submit_login(email, password)

    def submit_registration(self) -> None:
        """Send the registration form to the session."""
        self.session.submit_registration(
            self.query_one("#register_name", Input).value,
            self.query_one("#register_email", Input).value,
            self.query_one("#register_password", Input).value,
        )

    def show_auth_view(self, view_id: str) -> None:
        """Switch between the login and registration forms."""
        self.auth_view = view_id
        self.query_one("#login_error", Static).update("")
        self.query_one("#register_error", Static).update("")
        if not isinstance(self.session.state, LoggedIn):
            self.query_one("#views", ContentSwitcher).current = view_id

    def action_reload(self) -> None:
        """Re-fetch products with the current token."""
        if self.session.reload_products() is None:
            self.notify("Primero inicia sesión", severity="warning")

    def action_logout(self) -> None:
        """Drop the session and go back to the login form."""
        if isinstance(self.session.state, LoggedIn):
            self.session.logout()

    # ── Rendering ────────────────────────────────────────

    def _on_session_state(self, state: SessionState) -> None:
        if not self.is_running:
            return
        self.render_state(state)

    def render_state(self, state: SessionState) -> None:
        """Show the view matching *state*."""
        logger.debug("Rendering %s", type(state).__name__)
        switcher = self.query_one("#views", ContentSwitcher)
        busy = isinstance(state, Authenticating)
        for button_id in ("#login_btn", "#register_btn"):
            self.query_one(button_id, Button).disabled = busy

        if isinstance(state, LoggedIn):
            switcher.current = PRODUCTS_VIEW
            self.set_focus(self.query_one("#product_list", VerticalScroll))
            self._render_products(state)
            return

        switcher.current = self.auth_view
        error_id = (
            "#register_error" if self.auth_view == REGISTER_VIEW else "#login_error"
        )
        error = self.query_one(error_id, Static)
        if isinstance(state, AuthFailed):
            error.update(state.message)
        elif isinstance(state, Authenticating):
            error.update(f"Iniciando sesión como {state.email}...")
        elif isinstance(state, LoggedOut):
            error.update("")
            self._clear_products()
            self.query_one("#login_password", Input).value = ""
            self.query_one("#register_password", Input).value = ""

    def _render_products(self, state: LoggedIn) -> None:
        if state.loading:
            self.products_status = "Cargando productos..."
        elif state.fetch_error is not None:
            self.products_status = (
                f"Error al cargar productos: {state.fetch_error} (pulsa r para reintentar)"
            )
        else:
            self.products_status = f"{len(state.products)} productos"
        self.query_one("#products_status", Static).update(self.products_status)

        if state.loading and state.products:
            # Keep the previous list visible while reloading
            return
        self._clear_products()
        product_list = self.query_one("#product_list", VerticalScroll)
        product_list.mount_all(
            Static(to_summary(p), classes="product_card", markup=False)
            for p in state.products
        )

    def _clear_products(self) -> None:
        self.query_one("#product_list", VerticalScroll).remove_children()
