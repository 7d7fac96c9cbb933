"""
API dependencies resolving the acting principal.
Authentication happens upstream; the gateway forwards the user id in a header.
"""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from geomonitor.core.config import settings
from geomonitor.db.session import get_db
from geomonitor.schemas.principal import Principal
from geomonitor.services.principal_service import PrincipalService


async def require_principal(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Principal:
    """
    Resolve the principal of the current request.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(
            principal: Principal = Depends(require_principal)
        ):
            ...

    Raises:
        HTTPException: 401 when the header is missing, malformed or names an unknown user
    """
    raw_user_id = request.headers.get(settings.PRINCIPAL_HEADER)
    if not raw_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {settings.PRINCIPAL_HEADER} header",
        )

    try:
        user_id = UUID(raw_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user ID in principal header",
        )

    principal = await PrincipalService(db).resolve(user_id)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    request.state.principal = principal
    return principal
