from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from canteen.models.order.order import OrderStatus


class NotificationRead(BaseModel):
    id: int
    order_id: int
    message: str
    is_read: bool
    created_at: Optional[datetime] = None
    order_status: Optional[OrderStatus] = None

    class Config:
        from_attributes = True


class MarkRead(BaseModel):
    notification_id: Optional[int] = None


class UnreadCount(BaseModel):
    unread: int
