from typing import Optional

from quote_api.core.config import settings
from quote_api.schemas.responses import UserInfo


IDENTITY_HEADERS = ("x-forwarded-email", "gap-auth", "x-forwarded-user")


def user_from_identity(identity: Optional[str]) -> UserInfo:
    """
    Name and email from the proxy identity header.

    "jane.doe@corp.com" gives name "Jane"; a bare "jane" gives "Jane" and no
    email. Without a header, dev gets the configured test user.
    """
    value = (identity or "").strip()
    if not value:
        if settings.ENVIRONMENT == "dev":
            return UserInfo(name=settings.DEV_USER_NAME, email=settings.DEV_USER_EMAIL)
        return UserInfo(name=None, email=None)

    if "@" in value:
        first = value.split("@", 1)[0].split(".")[0]
        return UserInfo(name=first[:1].upper() + first[1:], email=value)
    return UserInfo(name=value[:1].upper() + value[1:], email=None)
