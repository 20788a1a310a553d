# storefront/models/auth.py

"""Credential and token records for the authentication flow."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    """Email/password pair for a single login attempt."""

    email: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='***')"


@dataclass(frozen=True)
class Registration:
    """Payload for creating a new account."""

    name: str
    email: str
    password: str
    avatar: str

    def __repr__(self) -> str:
        return (
            f"Registration(name={self.name!r}, email={self.email!r}, "
            f"password='***', avatar={self.avatar!r})"
        )

    @property
    def credentials(self) -> Credentials:
        """Credentials to log in as the newly created account."""
        return Credentials(email=self.email, password=self.password)


@dataclass(frozen=True)
class AuthToken:
    """Bearer token held in memory for the current session only."""

    access_token: str
    refresh_token: str = ""

    def __repr__(self) -> str:
        return "AuthToken(access_token='***')"

    @property
    def authorization(self) -> str:
        """Value for the ``Authorization`` request header."""
        return f"Bearer {self.access_token}"
