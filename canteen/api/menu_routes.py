from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from canteen.crud import menu_item as catalog
from canteen.db import get_db
from canteen.models.menu.menu_item import MenuCategory
from canteen.schemas.menu_item import MenuItemRead

router = APIRouter(prefix="/menu", tags=["menu"])


@router.get("", response_model=List[MenuItemRead])
async def list_menu(
    include_unavailable: bool = False,
    db: AsyncSession = Depends(get_db),
):
    return await catalog.list_menu_items(db, include_unavailable)


@router.get("/search", response_model=List[MenuItemRead])
async def search_menu(
    q: str = Query("", max_length=255),
    db: AsyncSession = Depends(get_db),
):
    return await catalog.search_menu_items(db, q)


@router.get("/category/{category}", response_model=List[MenuItemRead])
async def list_menu_category(
    category: MenuCategory,
    include_unavailable: bool = False,
    db: AsyncSession = Depends(get_db),
):
    return await catalog.list_by_category(db, category, include_unavailable)


@router.get("/{item_id}", response_model=MenuItemRead)
async def get_menu_item(item_id: int, db: AsyncSession = Depends(get_db)):
    return await catalog.get_menu_item(db, item_id)
