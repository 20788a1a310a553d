# storefront/clients/http_client.py

"""Client for the EscuelaJS fake-store REST API over curl_cffi."""

import json
from typing import Any

from curl_cffi import requests as curl_requests

from storefront.clients.base_client import BaseStoreClient
from storefront.clients.errors import (
    AuthRejected,
    FetchRejected,
    MalformedResponse,
    NetworkError,
    RegistrationRejected,
    StoreError,
)
from storefront.models.auth import AuthToken, Credentials, Registration
from storefront.models.product import Product
from storefront.models.result import Err, Ok, Result

_MAX_ERROR_TEXT = 300


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def extract_error_message(resp: curl_requests.Response) -> str:
    """Pull a human-readable message out of an error response.

    Prefers the JSON ``message`` field (joined with ``"; "`` when the
    API returns a list of validation messages), then the raw body, then
    the bare status code.
    """
    text = (resp.text or "").strip()
    try:
        data: Any = json.loads(text) if text else None
    except ValueError:
        data = None

    if isinstance(data, dict) and data.get("message"):
        message = data["message"]
        if isinstance(message, list):
            return "; ".join(str(m) for m in message)
        return str(message)
    if text:
        return text[:_MAX_ERROR_TEXT]
    return f"HTTP {resp.status_code}"


def _parse_token(body: Any) -> AuthToken:
    """Build an AuthToken from a token-shaped response body."""
    if not isinstance(body, dict):
        raise MalformedResponse("La respuesta de login no es un objeto JSON")
    access_token = body.get("access_token")
    if not isinstance(access_token, str) or not access_token:
        raise MalformedResponse("La respuesta de login no incluye access_token")
    refresh_token = body.get("refresh_token")
    return AuthToken(
        access_token=access_token,
        refresh_token=refresh_token if isinstance(refresh_token, str) else "",
    )


def _parse_products(body: Any) -> tuple[Product, ...]:
    """Parse a products array, keeping the server's order."""
    if not isinstance(body, list):
        raise MalformedResponse("La respuesta de productos no es un array JSON")
    products: list[Product] = []
    for index, item in enumerate(body):
        try:
            products.append(Product.from_dict(item))
        except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
            raise MalformedResponse(
                f"El producto #{index} no es válido: {exc}"
            ) from exc
    return tuple(products)


class HttpStoreClient(BaseStoreClient):
    """Talks to the real API: login, registration and product listing."""

    def __init__(self, base_url: str | None = None) -> None:
        super().__init__("http")
        self.base_url = (base_url or self.settings.API_BASE_URL).rstrip("/")
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _send(
        self,
        method: str,
        path: str,
        headers: dict[str, str] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> curl_requests.Response:
        """Perform one request, mapping transport failures to NetworkError."""
        url = self._url(path)
        merged: dict[str, str] = {
            **self.settings.DEFAULT_HEADERS,
            **(headers or {}),
        }
        try:
            if method == "POST":
                return self.session.post(
                    url,
                    headers={**merged, "Content-Type": "application/json"},
                    json=payload,
                    timeout=self._request_timeout,
                )
            return self.session.get(
                url,
                headers=merged,
                timeout=self._request_timeout,
            )
        except Exception as exc:
            self.logger.warning(
                "[%s] %s %s failed: %s",
                self.backend_name,
                method,
                path,
                exc,
                exc_info=True,
            )
            raise NetworkError(f"Error de red: {exc}") from exc

    def _json_body(self, resp: curl_requests.Response, what: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise MalformedResponse(f"La respuesta de {what} no es JSON válido") from exc

    def authenticate(
        self, credentials: Credentials,
    ) -> Result[AuthToken, StoreError]:
        """POST the credentials to the login endpoint."""
        try:
            resp = self._send(
                "POST",
                self.settings.LOGIN_PATH,
                payload={
                    "email": credentials.email,
                    "password": credentials.password,
                },
            )
            if not _is_success(resp.status_code):
                message = extract_error_message(resp)
                self.logger.warning(
                    "[%s] Login rejected for %s: HTTP %d %s",
                    self.backend_name,
                    credentials.email,
                    resp.status_code,
                    message,
                )
                return Err(AuthRejected(message, resp.status_code))
            token = _parse_token(self._json_body(resp, "login"))
        except StoreError as exc:
            return Err(exc)

        self.logger.info(
            "[%s] Authenticated %s", self.backend_name, credentials.email
        )
        return Ok(token)

    def fetch_products(
        self, token: AuthToken,
    ) -> Result[tuple[Product, ...], StoreError]:
        """GET the product catalogue with the bearer token."""
        try:
            resp = self._send(
                "GET",
                self.settings.PRODUCTS_PATH,
                headers={"Authorization": token.authorization},
            )
            if not _is_success(resp.status_code):
                message = extract_error_message(resp)
                self.logger.warning(
                    "[%s] Product fetch rejected: HTTP %d %s",
                    self.backend_name,
                    resp.status_code,
                    message,
                )
                return Err(FetchRejected(message, resp.status_code))
            products = _parse_products(self._json_body(resp, "productos"))
        except StoreError as exc:
            return Err(exc)

        self.logger.info(
            "[%s] Fetched %d products", self.backend_name, len(products)
        )
        return Ok(products)

    def register(
        self, registration: Registration,
    ) -> Result[AuthToken | None, StoreError]:
        """POST a new account to the users endpoint."""
        try:
            resp = self._send(
                "POST",
                self.settings.REGISTER_PATH,
                payload={
                    "name": registration.name,
                    "email": registration.email,
                    "password": registration.password,
                    "avatar": registration.avatar,
                },
            )
            if not _is_success(resp.status_code):
                message = extract_error_message(resp)
                self.logger.warning(
                    "[%s] Registration rejected for %s: HTTP %d %s",
                    self.backend_name,
                    registration.email,
                    resp.status_code,
                    message,
                )
                return Err(RegistrationRejected(message, resp.status_code))
            body = self._json_body(resp, "registro")
            if isinstance(body, dict) and "access_token" in body:
                token: AuthToken | None = _parse_token(body)
            elif isinstance(body, dict) and "id" in body:
                # User record only; caller logs in with the same credentials
                token = None
            else:
                raise MalformedResponse(
                    "La respuesta de registro no incluye token ni usuario"
                )
        except StoreError as exc:
            return Err(exc)

        self.logger.info(
            "[%s] Registered %s", self.backend_name, registration.email
        )
        return Ok(token)

    def close(self) -> None:
        self.session.close()
