import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, File, Form, UploadFile

from canteen.auth.dependencies import get_admin_context
from canteen.core.context import RequestContext
from canteen.core.errors import CanteenError, NotFound
from canteen.crud import menu_item as catalog
from canteen.schemas.menu_item import (
    AffectedRows,
    AvailabilityRead,
    MenuItemDeleted,
    MenuItemRead,
)
from canteen.utils.images import delete_image, save_uploaded_photo

log = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/menu-items", tags=["admin: menu"])


def _validate_fields(name: str, price: str, category: str) -> None:
    catalog.parse_name(name)
    catalog.parse_price(price)
    catalog.parse_category(category)


@router.get("", response_model=List[MenuItemRead])
async def list_all_menu_items(ctx: RequestContext = Depends(get_admin_context)):
    return await catalog.list_menu_items(ctx.db, include_unavailable=True)


# ----- Create Menu Item
@router.post("", response_model=MenuItemRead, status_code=201)
async def create_menu_item(
    name: str = Form(...),
    description: str = Form(""),
    price: str = Form(...),
    category: str = Form(...),
    is_available: bool = Form(True),
    photo: Optional[UploadFile] = File(None),
    ctx: RequestContext = Depends(get_admin_context),
):
    # Validate before the photo touches disk
    _validate_fields(name, price, category)

    image_url = None
    if photo and photo.filename:
        image_url = await save_uploaded_photo(photo)

    try:
        new_id = await catalog.add_menu_item(
            ctx.db, name, description, price, category, image_url=image_url, is_available=is_available
        )
    except CanteenError:
        delete_image(image_url)
        raise
    return await catalog.get_menu_item(ctx.db, new_id)


# ----- Update Menu Item (omitted photo keeps the current one)
@router.put("/{item_id}", response_model=Union[MenuItemRead, AffectedRows])
async def update_menu_item(
    item_id: int,
    name: str = Form(...),
    description: str = Form(""),
    price: str = Form(...),
    category: str = Form(...),
    is_available: bool = Form(True),
    clear_image: bool = Form(False),
    photo: Optional[UploadFile] = File(None),
    ctx: RequestContext = Depends(get_admin_context),
):
    try:
        existing = await catalog.get_menu_item(ctx.db, item_id)
    except NotFound:
        return AffectedRows(affected_rows=0)
    previous_image = existing.image_url

    _validate_fields(name, price, category)

    image_url = catalog.UNSET
    saved_url = None
    if photo and photo.filename:
        image_url = saved_url = await save_uploaded_photo(photo)
    elif clear_image:
        image_url = None

    try:
        affected = await catalog.update_menu_item(
            ctx.db, item_id, name, description, price, category,
            image_url=image_url, is_available=is_available,
        )
    except CanteenError:
        delete_image(saved_url)
        raise
    if not affected:
        delete_image(saved_url)
        return AffectedRows(affected_rows=0)

    if image_url is not catalog.UNSET and previous_image != image_url:
        delete_image(previous_image)

    return MenuItemRead.model_validate(await catalog.get_menu_item(ctx.db, item_id))


# ----- Delete Menu Item
@router.delete("/{item_id}", response_model=MenuItemDeleted)
async def delete_menu_item(item_id: int, ctx: RequestContext = Depends(get_admin_context)):
    image_url, affected = await catalog.delete_menu_item(ctx.db, item_id)
    if affected:
        delete_image(image_url)
    return MenuItemDeleted(deleted_image_url=image_url, affected_rows=affected)


# ----- Toggle availability
@router.post("/{item_id}/toggle", response_model=Union[AvailabilityRead, AffectedRows])
async def toggle_menu_item(item_id: int, ctx: RequestContext = Depends(get_admin_context)):
    row = await catalog.toggle_availability(ctx.db, item_id)
    if row is None:
        return AffectedRows(affected_rows=0)
    return AvailabilityRead(id=row.id, name=row.name, is_available=row.is_available)
