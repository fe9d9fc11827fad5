import logging
from typing import List, Optional

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import contains_eager

from canteen.core.config import settings
from canteen.db import atomic
from canteen.models.notification import Notification

log = logging.getLogger(__name__)


def add_notification(db: AsyncSession, user_id: int, order_id: int, message: str) -> Notification:
    """Stage a notification inside the caller's open transaction."""
    notification = Notification(user_id=user_id, order_id=order_id, message=message, is_read=False)
    db.add(notification)
    return notification


async def create_notification(db: AsyncSession, user_id: int, order_id: int, message: str) -> None:
    async with atomic(db):
        add_notification(db, user_id, order_id, message)
    log.info("notification created: user=%s order=%s", user_id, order_id)


async def list_notifications(
    db: AsyncSession, user_id: int, limit: Optional[int] = None
) -> List[Notification]:
    """Newest-first feed for one user, each entry carrying its order's current status."""
    result = await db.execute(
        select(Notification)
        .join(Notification.order)
        .options(contains_eager(Notification.order))
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit if limit is not None else settings.notification_feed_limit)
    )
    return result.scalars().all()


async def count_unread(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(
        select(func.count(Notification.id)).where(
            Notification.user_id == user_id,
            Notification.is_read == False,  # noqa: E712
        )
    )
    return result.scalar_one()


async def mark_read(db: AsyncSession, user_id: int, notification_id: Optional[int] = None) -> int:
    """
    Marks one notification, or all of them when no id is given, as read.
    Only rows owned by ``user_id`` are ever touched.
    """
    stmt = update(Notification).where(Notification.user_id == user_id)
    if notification_id is not None:
        stmt = stmt.where(Notification.id == notification_id)

    async with atomic(db):
        result = await db.execute(
            stmt.values(is_read=True).execution_options(synchronize_session="fetch")
        )

    log.info("notifications read: user=%s id=%s affected=%s", user_id, notification_id, result.rowcount)
    return result.rowcount
