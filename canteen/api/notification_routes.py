from fastapi import APIRouter, Depends
from typing import List, Optional

from canteen.auth.dependencies import get_request_context
from canteen.core.context import RequestContext
from canteen.crud import notification as notifications
from canteen.schemas.menu_item import AffectedRows
from canteen.schemas.notification import MarkRead, NotificationRead, UnreadCount

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationRead])
async def feed(ctx: RequestContext = Depends(get_request_context)):
    return await notifications.list_notifications(ctx.db, ctx.user_id)


@router.get("/unread-count", response_model=UnreadCount)
async def unread_count(ctx: RequestContext = Depends(get_request_context)):
    return UnreadCount(unread=await notifications.count_unread(ctx.db, ctx.user_id))


@router.post("/read", response_model=AffectedRows)
async def mark_read(
    payload: Optional[MarkRead] = None,
    ctx: RequestContext = Depends(get_request_context),
):
    notification_id = payload.notification_id if payload else None
    affected = await notifications.mark_read(ctx.db, ctx.user_id, notification_id)
    return AffectedRows(affected_rows=affected)
