# storefront/services/session.py

"""Session state machine: login or register, then load the catalogue.

The session is always in exactly one of four states::

    LoggedOut ──submit──▶ Authenticating ──token──▶ LoggedIn(loading)
        ▲                      │                        │
        │                   error                   products / error
        │                      ▼                        ▼
        └──────logout──── AuthFailed           LoggedIn(products)

Every user action runs as a single asyncio task. Starting a new action,
logging out or closing the session cancels the task in flight, and an
attempt counter keeps results of superseded tasks out of the state.
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from storefront.clients.base_client import BaseStoreClient
from storefront.config.settings import Settings
from storefront.models.auth import AuthToken, Credentials, Registration
from storefront.models.product import Product
from storefront.models.result import Err, Ok

logger = logging.getLogger("storefront.session")


@dataclass(frozen=True)
class LoggedOut:
    """No token; the login view is shown."""


@dataclass(frozen=True)
class Authenticating:
    """Credentials submitted, waiting for the server."""

    email: str


@dataclass(frozen=True)
class LoggedIn:
    """Token held; products loaded, loading, or failed to load."""

    token: AuthToken
    products: tuple[Product, ...] = ()
    loading: bool = False
    fetch_error: str | None = None


@dataclass(frozen=True)
class AuthFailed:
    """Last login or registration attempt failed."""

    message: str


SessionState = Union[LoggedOut, Authenticating, LoggedIn, AuthFailed]

StateListener = Callable[[SessionState], None]


class FetchFailurePolicy(str, Enum):
    """What happens when the product fetch fails after a good login."""

    KEEP = "keep"       # stay logged in with an empty list and the error
    LOGOUT = "logout"   # drop the token and report the error as AuthFailed


def resolve_fetch_failure_policy(
    value: FetchFailurePolicy | str,
) -> FetchFailurePolicy:
    """Parse a policy name case-insensitively, falling back to ``keep``."""
    if isinstance(value, FetchFailurePolicy):
        return value
    try:
        return FetchFailurePolicy(value.strip().lower())
    except ValueError:
        logger.warning(
            "Unknown fetch failure policy %r, using %r",
            value,
            FetchFailurePolicy.KEEP.value,
        )
        return FetchFailurePolicy.KEEP


class Session:
    """Owns the token, the product list and the task running for them."""

    def __init__(
        self,
        client: BaseStoreClient,
        fetch_failure_policy: FetchFailurePolicy | str | None = None,
        registration_enabled: bool | None = None,
    ) -> None:
        self.client = client
        self.fetch_failure_policy = resolve_fetch_failure_policy(
            fetch_failure_policy or Settings.FETCH_FAILURE_POLICY
        )
        self.registration_enabled = (
            Settings.REGISTRATION_ENABLED
            if registration_enabled is None
            else registration_enabled
        )
        self.state: SessionState = LoggedOut()
        self._listeners: list[StateListener] = []
        self._task: asyncio.Task[None] | None = None
        self._attempt: int = 0

    # ── State plumbing ───────────────────────────────────

    def subscribe(self, listener: StateListener) -> None:
        """Call *listener* with the new state after every transition."""
        self._listeners.append(listener)

    def _set_state(self, state: SessionState, attempt: int) -> bool:
        """Apply *state* unless *attempt* has been superseded."""
        if attempt != self._attempt:
            logger.debug(
                "Dropping %s from stale attempt %d (current %d)",
                type(state).__name__,
                attempt,
                self._attempt,
            )
            return False
        logger.debug(
            "Session %s -> %s",
            type(self.state).__name__,
            type(state).__name__,
        )
        self.state = state
        for listener in self._listeners:
            listener(state)
        return True

    def _begin(self) -> int:
        """Cancel whatever is running and open a new attempt."""
        self._cancel_current()
        self._attempt += 1
        return self._attempt

    def _spawn(
        self, flow: Coroutine[Any, Any, None], attempt: int,
    ) -> asyncio.Task[None]:
        self._task = asyncio.create_task(self._guarded(flow, attempt))
        self._task.add_done_callback(self._on_task_done)
        return self._task

    async def _guarded(
        self, flow: Coroutine[Any, Any, None], attempt: int,
    ) -> None:
        """Run *flow*; a crash ends the attempt in an error state."""
        try:
            await flow
        except Exception as exc:
            logger.error("Session flow crashed: %s", exc, exc_info=True)
            message = f"Error inesperado: {exc}"
            current = self.state
            if isinstance(current, LoggedIn):
                self._fetch_failed(current.token, message, attempt)
            else:
                self._set_state(AuthFailed(message), attempt)

    def _cancel_current(self) -> None:
        if self._task is not None and not self._task.done():
            logger.info("Cancelling in-flight session task")
            self._task.cancel()
        self._task = None

    @staticmethod
    def _on_task_done(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Session task crashed: %s", exc, exc_info=exc
            )

    # ── User actions ─────────────────────────────────────

    def submit_login(
        self, email: str, password: str,
    ) -> asyncio.Task[None] | None:
        """Start a login attempt and return the task running it.

        Returns ``None`` when the input is rejected locally (empty email
        or password); the state is then already ``AuthFailed``.
        """
        attempt = self._begin()
        email = email.strip()
        if not email or not password:
            self._set_state(
                AuthFailed("El email y la contraseña son obligatorios"), attempt
            )
            return None
        self._set_state(Authenticating(email), attempt)
        return self._spawn(
            self._login_flow(Credentials(email, password), attempt), attempt
        )

    def submit_registration(
        self,
        name: str,
        email: str,
        password: str,
        avatar: str | None = None,
    ) -> asyncio.Task[None] | None:
        """Start a registration attempt followed by the product load."""
        attempt = self._begin()
        if not self.registration_enabled:
            self._set_state(
                AuthFailed("El registro no está implementado aún"), attempt
            )
            return None
        name, email = name.strip(), email.strip()
        if not name or not email or not password:
            self._set_state(
                AuthFailed("El nombre, el email y la contraseña son obligatorios"),
                attempt,
            )
            return None
        registration = Registration(
            name=name,
            email=email,
            password=password,
            avatar=avatar or Settings.DEFAULT_AVATAR,
        )
        self._set_state(Authenticating(email), attempt)
        return self._spawn(self._register_flow(registration, attempt), attempt)

    def reload_products(self) -> asyncio.Task[None] | None:
        """Re-fetch the catalogue with the current token.

        Returns ``None`` when there is no logged-in session.
        """
        current = self.state
        if not isinstance(current, LoggedIn):
            return None
        attempt = self._begin()
        self._set_state(
            LoggedIn(current.token, current.products, loading=True),
            attempt,
        )
        return self._spawn(
            self._load_products(current.token, attempt), attempt
        )

    def logout(self) -> None:
        """Forget the token and products and return to the login view."""
        attempt = self._begin()
        if isinstance(self.state, LoggedIn):
            logger.info("Logged out")
        self._set_state(LoggedOut(), attempt)

    def close(self) -> None:
        """Cancel any in-flight work; later results are discarded."""
        self._begin()

    async def login(self, email: str, password: str) -> SessionState:
        """Run a full login + product load and return the final state."""
        self.submit_login(email, password)
        await self.wait()
        return self.state

    async def register(
        self, name: str, email: str, password: str,
    ) -> SessionState:
        """Run a full registration + product load and return the final state."""
        self.submit_registration(name, email, password)
        await self.wait()
        return self.state

    async def wait(self) -> None:
        """Wait for the current task, if any, to finish or be cancelled."""
        task = self._task
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    # ── Flows ────────────────────────────────────────────

    async def _login_flow(
        self, credentials: Credentials, attempt: int,
    ) -> None:
        result = await asyncio.to_thread(
            self.client.authenticate, credentials
        )
        if isinstance(result, Err):
            logger.warning(
                "Login failed for %s: %s", credentials.email, result.message
            )
            self._set_state(AuthFailed(result.message), attempt)
            return
        await self._enter(result.value, attempt)

    async def _register_flow(
        self, registration: Registration, attempt: int,
    ) -> None:
        result = await asyncio.to_thread(
            self.client.register, registration
        )
        if isinstance(result, Err):
            logger.warning(
                "Registration failed for %s: %s",
                registration.email,
                result.message,
            )
            self._set_state(AuthFailed(result.message), attempt)
            return
        if result.value is not None:
            await self._enter(result.value, attempt)
            return
        await self._login_flow(registration.credentials, attempt)

    async def _enter(self, token: AuthToken, attempt: int) -> None:
        """Show the (still empty) product view, then load products."""
        if self._set_state(LoggedIn(token, loading=True), attempt):
            await self._load_products(token, attempt)

    async def _load_products(self, token: AuthToken, attempt: int) -> None:
        result = await asyncio.to_thread(self.client.fetch_products, token)
        if isinstance(result, Ok):
            self._set_state(LoggedIn(token, result.value), attempt)
            return

        self._fetch_failed(token, result.message, attempt)

    def _fetch_failed(self, token: AuthToken, message: str, attempt: int) -> None:
        """Apply the fetch failure policy."""
        logger.warning(
            "Product fetch failed (policy=%s): %s",
            self.fetch_failure_policy.value,
            message,
        )
        if self.fetch_failure_policy is FetchFailurePolicy.LOGOUT:
            self._set_state(AuthFailed(message), attempt)
        else:
            self._set_state(LoggedIn(token, (), fetch_error=message), attempt)
