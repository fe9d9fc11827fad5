from sqlalchemy import Column, Integer, Boolean, ForeignKey, DateTime, Text, func
from sqlalchemy.orm import relationship
from canteen.models.base import Base


class Notification(Base):
    __tablename__ = "notifications"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="notifications")
    order = relationship("Order", back_populates="notifications")

    @property
    def order_status(self):
        return self.order.status if self.order is not None else None
