"""Member API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from praytogether.domain.services.member_service import MemberService
from praytogether.infrastructure.api.dependencies import CurrentMember, RequestCtx
from praytogether.infrastructure.api.schemas import ErrorResponseSchema, MemberProfileResponse
from praytogether.infrastructure.persistence.database import get_db_session

router = APIRouter()


@router.get(
    "/me",
    response_model=MemberProfileResponse,
    responses={
        401: {"model": ErrorResponseSchema, "description": "Missing or invalid access token"},
        404: {"model": ErrorResponseSchema, "description": "Member not found"},
    },
)
async def get_my_profile(
    current_member: CurrentMember,
    ctx: RequestCtx,
    session: AsyncSession = Depends(get_db_session),
) -> MemberProfileResponse:
    """Get the profile of the authenticated member."""
    return await MemberService(session).get_profile(ctx, current_member.member_id)
