"""
Authentication Endpoints.

Account registration, password sign-in, session lookup and sign-out. Clients
authenticate later requests with the returned access token as a bearer token.
"""

from fastapi import APIRouter, status

from inkwell.core.errors import AuthenticationError
from inkwell.core.logging_config import get_logger
from inkwell.core.models.domain import LoginResult, SessionUser
from inkwell.core.models.io import Acknowledgement, SignInRequest, SignUpRequest
from inkwell.server.services.deps import AuthServiceDep, BearerTokenDep, CurrentUserDep

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/sign-up",
    response_model=LoginResult,
    status_code=status.HTTP_201_CREATED,
    summary="Sign Up",
    description="Register a reader or author account.",
    response_description="The new account's id, name, role and access token.",
    responses={
        201: {"description": "Account created"},
        401: {"description": "Registration refused by the auth provider"},
    },
)
async def sign_up(body: SignUpRequest, auth: AuthServiceDep) -> LoginResult:
    """
    Register an account.

    Authors also get an empty author profile named after them. The token is
    empty while the e-mail address awaits confirmation.
    """
    return await auth.sign_up(body.email, body.password, body.full_name, body.role)


@router.post(
    "/sign-in",
    response_model=LoginResult,
    summary="Sign In",
    description="Sign in with e-mail and password.",
    responses={401: {"description": "Invalid credentials"}},
)
async def sign_in(body: SignInRequest, auth: AuthServiceDep) -> LoginResult:
    return await auth.sign_in(body.email, body.password)


@router.get(
    "/session",
    response_model=SessionUser,
    summary="Current Session",
    description="Resolve the bearer token to the signed-in user.",
    responses={401: {"description": "No valid session"}},
)
async def get_session(user: CurrentUserDep) -> SessionUser:
    return user


@router.post(
    "/sign-out",
    response_model=Acknowledgement,
    summary="Sign Out",
    description="Revoke the session behind the bearer token.",
)
async def sign_out(token: BearerTokenDep, auth: AuthServiceDep) -> Acknowledgement:
    if not token:
        raise AuthenticationError("User is not authenticated")
    await auth.sign_out(token)
    return Acknowledgement(detail="Signed out")
