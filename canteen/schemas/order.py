from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from canteen.models.order.order import OrderStatus, OrderType


# ---------- Line items ----------
class OrderLineCreate(BaseModel):
    menu_item_id: int
    quantity: int = Field(1, gt=0)


class OrderItemRead(BaseModel):
    id: int
    menu_item_id: Optional[int] = None
    item_name: str
    quantity: int
    price_each: Decimal

    class Config:
        from_attributes = True


# ---------- Orders ----------
class OrderCreate(BaseModel):
    order_type: OrderType = OrderType.immediate
    scheduled_for: Optional[datetime] = None
    items: List[OrderLineCreate]


class OrderRead(BaseModel):
    id: int
    user_id: int
    order_type: OrderType
    scheduled_for: Optional[datetime] = None
    status: OrderStatus
    total_amount: Decimal
    created_at: Optional[datetime] = None
    items: List[OrderItemRead] = []

    class Config:
        from_attributes = True


class OrderOwner(BaseModel):
    full_name: str
    email: str

    class Config:
        from_attributes = True


class OrderWithOwnerRead(OrderRead):
    user: OrderOwner


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
