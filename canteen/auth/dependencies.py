# canteen/auth/dependencies.py
from fastapi import Request, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.core.context import RequestContext
from canteen.crud import user as user_crud
from canteen.db import get_db
from canteen.models.user import User, UserRole


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> User:
    user_id = request.session.get("user_id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = await user_crud.get_user(db, user_id)
    if not user:
        request.session.clear()
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


async def get_current_admin_user(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.admin:
        raise HTTPException(status_code=403, detail="Admin access only")
    return user


async def get_request_context(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> RequestContext:
    return RequestContext(db=db, user_id=user.id, role=user.role)


async def get_admin_context(
    user: User = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> RequestContext:
    return RequestContext(db=db, user_id=user.id, role=user.role)
