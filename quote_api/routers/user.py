from fastapi import APIRouter, Depends
from quote_api.auth.deps import get_current_user
from quote_api.schemas.responses import ApiResponse, UserInfo


router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("", response_model=ApiResponse[UserInfo])
async def me(user: UserInfo = Depends(get_current_user)) -> ApiResponse[UserInfo]:
    return ApiResponse(data=user)
