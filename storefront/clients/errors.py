# storefront/clients/errors.py

"""Error taxonomy for calls against the store API."""


class StoreError(Exception):
    """Base class for every failure surfaced by a store client.

    ``message`` is always non-empty and safe to show to the user.
    """

    default_message = "Error inesperado de la tienda"

    def __init__(self, message: str = "", status_code: int | None = None) -> None:
        self.message = message.strip() or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class NetworkError(StoreError):
    """Transport failure: timeout, DNS, refused connection, TLS."""

    default_message = "Error de red, comprueba tu conexión"


class AuthRejected(StoreError):
    """Login endpoint answered with a non-2xx status."""

    default_message = "Inicio de sesión rechazado"


class RegistrationRejected(StoreError):
    """Registration endpoint answered with a non-2xx status."""

    default_message = "Registro rechazado"


class FetchRejected(StoreError):
    """Products endpoint answered with a non-2xx status."""

    default_message = "No se pudieron cargar los productos"


class MalformedResponse(StoreError):
    """Response body did not have the expected shape."""

    default_message = "Respuesta inesperada del servidor"
