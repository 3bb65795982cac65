from typing import Optional
from fastapi import Request
from quote_api.auth.identity import IDENTITY_HEADERS, user_from_identity
from quote_api.schemas.responses import UserInfo


def _identity_header(request: Request) -> Optional[str]:
    for name in IDENTITY_HEADERS:
        value = request.headers.get(name)
        if value:
            return value
    return None


async def get_current_user(request: Request) -> UserInfo:
    return user_from_identity(_identity_header(request))


async def get_current_username(request: Request) -> Optional[str]:
    user = await get_current_user(request)
    return user.email or user.name
