"""Authentication API routes.

Provides endpoints for member signup and login.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from praytogether.domain.services.auth_service import AuthService
from praytogether.infrastructure.api.dependencies import RequestCtx, get_token_manager
from praytogether.infrastructure.api.schemas import (
    ErrorResponseSchema,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
)
from praytogether.infrastructure.auth import TokenManager
from praytogether.infrastructure.persistence.database import get_db_session

router = APIRouter()


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=SignupResponse,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Validation error"},
        409: {"model": ErrorResponseSchema, "description": "Email already registered"},
    },
)
async def signup(
    request: SignupRequest,
    ctx: RequestCtx,
    session: AsyncSession = Depends(get_db_session),
    token_manager: TokenManager = Depends(get_token_manager),
) -> SignupResponse:
    """Register a new member.

    The password is stored as an Argon2 hash. Responds with an empty body.
    """
    await AuthService(session, token_manager).signup(ctx, request)
    return SignupResponse()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Validation error or incorrect credentials"},
    },
)
async def login(
    request: LoginRequest,
    ctx: RequestCtx,
    session: AsyncSession = Depends(get_db_session),
    token_manager: TokenManager = Depends(get_token_manager),
) -> LoginResponse:
    """Authenticate a member and return an access and refresh token.

    An unknown email and a wrong password produce the same response.
    """
    result = await AuthService(session, token_manager).login(ctx, request)
    return LoginResponse(access_token=result.access_token, refresh_token=result.refresh_token)
