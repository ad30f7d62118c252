from fastapi import APIRouter, Depends

from qrmenu.auth.models import Profile
from qrmenu.auth.schemas import ProfileResponse
from qrmenu.auth.dependencies import get_current_user

router = APIRouter()


@router.get("/me", response_model=ProfileResponse)
async def read_current_profile(current_user: Profile = Depends(get_current_user)):
    """
    The caller's profile and role, as resolved from their bearer token.
    """
    return current_user
