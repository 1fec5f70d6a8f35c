"""
Sign-in session: POST /login, role check, bearer token on the shared client.
"""

from __future__ import annotations

from typing import Any

from school_client.domains.roles import ROLES, role_of
from school_client.errors import ApiError, AuthError, PermissionDeniedError, ValidationError
from school_client.infrastructure.api.client import ApiClient
from school_client.utils.logger import get_logger

logger = get_logger(__name__)

EMPTY_CREDENTIALS_MESSAGE = "Please enter your details."
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."


class AuthSession:
    """Holds the signed-in user and token; the token is pushed onto the ApiClient."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api
        self._user: dict[str, Any] | None = None
        self._token: str | None = None

    @property
    def api(self) -> ApiClient:
        return self._api

    @property
    def user(self) -> dict[str, Any] | None:
        return self._user

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def role(self) -> str:
        return role_of(self._user)

    @property
    def user_id(self) -> Any:
        return self._user.get("id") if self._user else None

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def require_user(self) -> dict[str, Any]:
        if self._user is None:
            raise PermissionDeniedError("Please sign in first.")
        return self._user

    def login(self, username: str, password: str, expected_role: str) -> dict[str, Any]:
        """
        Sign in and check the account's role against the portal the user picked.

        Args:
            username: Login name.
            password: Password.
            expected_role: One of admin, teacher, student, others.

        Returns:
            The user dict from the server.

        Raises:
            ValidationError: Username or password is blank.
            AuthError: Server rejected the credentials or the role does not match.
        """
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError(EMPTY_CREDENTIALS_MESSAGE)
        expected = (expected_role or "").strip().lower()
        if expected not in ROLES:
            raise ValidationError(f"Unknown role: {expected_role}")

        try:
            body = self._api.post(
                "/login",
                json={"username": username, "password": password},
                error_message=INVALID_CREDENTIALS_MESSAGE,
            )
        except ApiError as e:
            raise AuthError(e.message, status_code=e.status_code, payload=e.payload, original=e) from e

        user = (body or {}).get("user") or {}
        token = (body or {}).get("token")
        if not user or not token:
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)
        if role_of(user) != expected:
            logger.info("Login for %s refused: role %s, wanted %s", username, role_of(user), expected)
            raise AuthError(f"You are not registered as a {expected}.")

        self._user = user
        self._token = token
        self._api.set_token(token)
        logger.info("Signed in %s as %s", username, expected)
        return user

    def logout(self) -> None:
        self._user = None
        self._token = None
        self._api.clear_token()

    def update_user(self, **changes: Any) -> None:
        """Merge profile edits into the cached user."""
        if self._user is not None:
            self._user = {**self._user, **changes}
