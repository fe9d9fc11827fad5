from sqlalchemy import (
    Column, String, Integer, Boolean, DateTime, Text, Numeric, Enum, Index, CheckConstraint, func,
)
from sqlalchemy.orm import relationship
from canteen.models.base import Base
import enum


class MenuCategory(str, enum.Enum):
    Food = "Food"
    Drink = "Drink"
    Dessert = "Dessert"


class MenuItem(Base):
    __tablename__ = "menu_items"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(Enum(MenuCategory, name="menu_category"), nullable=False, default=MenuCategory.Food)

    image_url = Column(String(255), nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Line items keep their own name/price snapshot; deleting an item only unlinks them
    order_items = relationship("OrderItem", back_populates="menu_item", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_menu_items_price_non_negative"),
        Index("idx_search", "name", "description", mysql_prefix="FULLTEXT"),
    )
