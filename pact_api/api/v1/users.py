"""Current-user endpoint."""

from fastapi import APIRouter, Depends

from pact_api.api.deps import get_current_user
from pact_api.models.user import User
from pact_api.schemas.user import UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """
    Get current authenticated user information.

    Returns:
        User information (excludes password)
    """
    return current_user
