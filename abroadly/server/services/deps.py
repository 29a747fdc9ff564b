"""
Request Dependencies.

Annotated FastAPI dependencies shared by the API routers: the database
session, the authenticated user, the response language and the AI service.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from abroadly.core.database import get_session
from abroadly.server.core.i18n import get_language
from abroadly.server.core.security import decode_access_token
from abroadly.server.services.ai_service import AIService, get_ai_service

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> int:
    """
    Resolve the authenticated user from the bearer token.

    Raises:
        HTTPException: 401 when the header is missing or the token is invalid
    """
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No token provided")

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
    return user_id


SessionDep = Annotated[AsyncSession, Depends(get_session)]
CurrentUserIdDep = Annotated[int, Depends(get_current_user_id)]
LanguageDep = Annotated[str, Depends(get_language)]
AIServiceDep = Annotated[AIService, Depends(get_ai_service)]
