"""
API endpoints for account registration and login.

Access tokens are stateless JWTs; clients send them back as
``Authorization: Bearer <token>`` on protected endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from abroadly.core.models.io import AuthResponse, LoginRequest, MeResponse, MessageResponse, RegisterRequest, UserSummary
from abroadly.server.core.i18n import translate
from abroadly.server.services.auth import AuthService
from abroadly.server.services.deps import CurrentUserIdDep, LanguageDep, SessionDep

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create an account and receive an access token.",
    response_description="The created account and its access token.",
    responses={
        201: {"description": "Account created"},
        400: {"description": "Missing or invalid fields"},
        409: {"description": "E-mail already registered"},
    },
)
async def register(body: RegisterRequest, session: SessionDep) -> AuthResponse:
    """
    Register a new account.

    - **fullName**: Display name, at least 2 characters.
    - **email**: Login e-mail, must be unused.
    - **password**: At least 6 characters.
    """
    user, token = await AuthService(session).register(body.full_name, body.email, body.password)
    return AuthResponse(message="User registered successfully", user=UserSummary.model_validate(user), token=token)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login",
    description="Authenticate with e-mail and password.",
    response_description="The account and a fresh access token.",
    responses={
        200: {"description": "Login successful"},
        400: {"description": "Missing e-mail or password"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(body: LoginRequest, session: SessionDep) -> AuthResponse:
    user, token = await AuthService(session).login(body.email, body.password)
    return AuthResponse(message="Login successful", user=UserSummary.model_validate(user), token=token)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout",
    description="Tokens are stateless; the client discards its token.",
)
async def logout(lang: LanguageDep) -> MessageResponse:
    return MessageResponse(message=translate("logoutSuccessful", lang))


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Current User",
    description="Retrieve the account of the authenticated caller.",
    responses={
        200: {"description": "Account found"},
        401: {"description": "Missing or invalid token"},
        404: {"description": "Account no longer exists"},
    },
)
async def me(user_id: CurrentUserIdDep, session: SessionDep, lang: LanguageDep) -> MeResponse:
    user = await AuthService(session).get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=translate("userNotFound", lang))
    return MeResponse(user=UserSummary.model_validate(user))
