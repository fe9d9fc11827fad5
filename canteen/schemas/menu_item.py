from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from decimal import Decimal

from canteen.models.menu.menu_item import MenuCategory


class MenuItemRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    category: MenuCategory
    image_url: Optional[str] = None
    is_available: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AvailabilityRead(BaseModel):
    id: int
    name: str
    is_available: bool

    class Config:
        from_attributes = True


class MenuItemDeleted(BaseModel):
    deleted_image_url: Optional[str] = None
    affected_rows: int


class AffectedRows(BaseModel):
    affected_rows: int
