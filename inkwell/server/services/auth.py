"""
Authentication Service.

Sign-up, sign-in and session resolution against the backend's auth API, plus
the ``users``/``roles``/``authors`` rows that make up an Inkwell account.
"""

from __future__ import annotations

from typing import Optional

from supabase import AsyncClient, AuthError

from inkwell.core.backend import SessionClientFactory
from inkwell.core.backend.repositories import BackendRepos
from inkwell.core.errors import AuthenticationError, BackendError, InkwellError, NotFoundError
from inkwell.core.logging_config import get_logger
from inkwell.core.models.domain import LoginResult, Role, SessionUser

logger = get_logger(__name__)


def _auth_message(error: AuthError) -> str:
    return getattr(error, "message", None) or str(error)


class AuthService:
    """
    Service layer for accounts and sessions.

    Password flows run on a fresh client from ``session_clients``; the shared
    ``client`` only validates tokens and revokes sessions with the service key.
    """

    def __init__(self, client: AsyncClient, repos: BackendRepos, session_clients: SessionClientFactory) -> None:
        self.client = client
        self.repos = repos
        self.session_clients = session_clients

    async def _role_id(self, role: Role):
        row = await self.repos.roles.first({"name": role.value}, columns="id")
        if not row:
            logger.error(f"Role '{role.value}' is missing from the roles table")
            raise BackendError(f"Role '{role.value}' is not configured")
        return row["id"]

    async def _role_name(self, role_id) -> Optional[Role]:
        row = await self.repos.roles.first({"id": role_id}, columns="name")
        if not row:
            return None
        try:
            return Role(row["name"])
        except ValueError:
            logger.warning(f"Unknown role name '{row['name']}' for role_id={role_id}")
            return None

    async def sign_up(self, email: str, password: str, full_name: str, role: Role) -> LoginResult:
        """
        Register an account.

        Creates the auth user, its ``users`` row and, for authors, an empty
        ``authors`` row named after the user.

        Raises:
            AuthenticationError: When the auth API refuses the registration
            BackendError: When the role is unknown or a row cannot be written
        """
        auth_client = await self.session_clients()
        try:
            response = await auth_client.auth.sign_up({"email": email, "password": password})
        except AuthError as e:
            logger.error(f"Registration failed for {email}: {_auth_message(e)}")
            raise AuthenticationError(f"Registration failed: {_auth_message(e)}") from e

        user = response.user
        if user is None:
            logger.error(f"Registration for {email} returned no user")
            raise AuthenticationError("Registration failed")

        role_id = await self._role_id(role)
        await self.repos.users.insert(
            {
                "id": user.id,
                "email": user.email,
                "full_name": full_name,
                "role_id": role_id,
            }
        )

        if role == Role.author:
            await self.repos.authors.insert(
                {
                    "id": user.id,
                    "bio": "",
                    "avatar_url": "",
                    "banner_url": "",
                    "achievements": [],
                    "stats": {},
                    "author_name": full_name,
                }
            )

        token = response.session.access_token if response.session else ""
        logger.info(f"Registered {role.value} {user.id}")
        return LoginResult(uid=user.id, name=full_name, role=role, token=token)

    async def sign_in(self, email: str, password: str) -> LoginResult:
        """
        Password sign-in.

        Raises:
            AuthenticationError: On bad credentials
            NotFoundError: When the auth user has no ``users`` row
            BackendError: When the user's role cannot be resolved
        """
        auth_client = await self.session_clients()
        try:
            response = await auth_client.auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as e:
            logger.error(f"Sign-in failed for {email}: {_auth_message(e)}")
            raise AuthenticationError(_auth_message(e) or "Sign-in failed") from e

        if response.user is None or response.session is None:
            raise AuthenticationError("Sign-in failed")

        user = response.user
        profile = await self.repos.users.first({"id": user.id}, columns="full_name, role_id")
        if not profile:
            raise NotFoundError("User not found in the users table")

        role = await self._role_name(profile.get("role_id"))
        if role is None:
            raise BackendError("Failed to resolve the user's role")

        return LoginResult(
            uid=user.id,
            name=profile.get("full_name") or "",
            role=role,
            token=response.session.access_token,
        )

    async def check_session(self, token: Optional[str]) -> Optional[SessionUser]:
        """
        Resolve an access token to the signed-in user.

        Never raises: every failure is logged and reported as "no session".
        """
        if not token:
            return None

        try:
            response = await self.client.auth.get_user(token)
        except AuthError as e:
            logger.info(f"Session rejected: {_auth_message(e)}")
            return None

        user = response.user if response else None
        if user is None:
            logger.debug("No active session")
            return None

        try:
            profile = await self.repos.users.first({"id": user.id}, columns="full_name, role_id, avatar_url")
            if not profile:
                logger.error(f"User data missing for session user {user.id}")
                return None
            if not profile.get("role_id"):
                logger.error(f"No role_id in user data for {user.id}")
                return None
            role = await self._role_name(profile["role_id"])
        except InkwellError as e:
            logger.error(f"Failed to resolve session user {user.id}: {e.message}")
            return None

        if role is None:
            logger.error(f"Role data missing for session user {user.id}")
            return None

        return SessionUser(
            uid=user.id,
            name=profile.get("full_name") or "",
            role=role,
            token=token,
            email=user.email,
            avatar_url=profile.get("avatar_url"),
        )

    async def sign_out(self, token: str) -> None:
        """Revoke the session behind ``token``."""
        try:
            await self.client.auth.admin.sign_out(token)
        except AuthError as e:
            logger.error(f"Sign-out failed: {_auth_message(e)}")
            raise AuthenticationError(f"Sign-out failed: {_auth_message(e)}") from e
