from sqlalchemy import (
    Column, String, Integer, ForeignKey, DateTime, Enum, Numeric, CheckConstraint, func,
)
from sqlalchemy.orm import relationship
from canteen.models.base import Base
import enum


class OrderType(str, enum.Enum):
    immediate = "immediate"
    preorder = "preorder"


class OrderStatus(str, enum.Enum):
    pending = "pending"
    preparing = "preparing"
    ready = "ready"
    completed = "completed"
    cancelled = "cancelled"


class Order(Base):
    __tablename__ = "orders"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    order_type = Column(Enum(OrderType, name="order_type"), nullable=False, default=OrderType.immediate)
    scheduled_for = Column(DateTime(timezone=True), nullable=True)
    status = Column(Enum(OrderStatus, name="order_status"), nullable=False, default=OrderStatus.pending)

    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItem.id",
    )
    notifications = relationship(
        "Notification", back_populates="order", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_orders_total_non_negative"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)

    # Snapshot pricing and name at time of order
    price_each = Column(Numeric(10, 2), nullable=False)
    item_name = Column(String(120), nullable=False)

    order = relationship("Order", back_populates="items")
    menu_item = relationship("MenuItem", back_populates="order_items")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
        CheckConstraint("price_each >= 0", name="ck_order_items_price_non_negative"),
    )

    @property
    def line_total(self):
        return self.price_each * self.quantity
