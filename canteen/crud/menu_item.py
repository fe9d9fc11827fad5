import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple

from sqlalchemy import case, delete, func, not_, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from canteen.core.constants import MIN_SEARCH_TOKEN_LENGTH
from canteen.core.errors import NotFound, ValidationError
from canteen.db import atomic
from canteen.models.menu.menu_item import MenuCategory, MenuItem

log = logging.getLogger(__name__)

CENT = Decimal("0.01")


class _Unset:
    def __repr__(self):
        return "UNSET"


# Marks an optional argument the caller did not pass (distinct from None)
UNSET = _Unset()


def parse_price(price) -> Decimal:
    try:
        value = Decimal(str(price)).quantize(CENT)
    except (InvalidOperation, ValueError):
        raise ValidationError("Price must be a number")
    if not value.is_finite() or value < 0:
        raise ValidationError("Price must not be negative")
    return value


def parse_category(category) -> MenuCategory:
    if isinstance(category, MenuCategory):
        return category
    try:
        return MenuCategory(category)
    except ValueError:
        allowed = ", ".join(c.value for c in MenuCategory)
        raise ValidationError(f"Category must be one of: {allowed}")


def parse_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name is required")
    if len(name) > 120:
        raise ValidationError("Name must be at most 120 characters")
    return name


# Enum declaration order, as MySQL sorts ENUM columns
CATEGORY_ORDER = case(
    {category: position for position, category in enumerate(MenuCategory)},
    value=MenuItem.category,
)


# --------- Listing ---------
async def list_menu_items(db: AsyncSession, include_unavailable: bool = False) -> List[MenuItem]:
    query = select(MenuItem)
    if not include_unavailable:
        query = query.where(MenuItem.is_available == True)  # noqa: E712
    result = await db.execute(query.order_by(CATEGORY_ORDER, MenuItem.name))
    return result.scalars().all()


async def list_by_category(db: AsyncSession, category, include_unavailable: bool = False) -> List[MenuItem]:
    category = parse_category(category)
    query = select(MenuItem).where(MenuItem.category == category)
    if not include_unavailable:
        query = query.where(MenuItem.is_available == True)  # noqa: E712
    result = await db.execute(query.order_by(MenuItem.name))
    return result.scalars().all()


async def get_menu_item(db: AsyncSession, item_id: int) -> MenuItem:
    result = await db.execute(
        select(MenuItem).where(MenuItem.id == item_id).execution_options(populate_existing=True)
    )
    item = result.scalar_one_or_none()
    if not item:
        raise NotFound("Menu item not found")
    return item


# --------- Mutations ---------
async def add_menu_item(
    db: AsyncSession,
    name: str,
    description: Optional[str],
    price,
    category,
    image_url: Optional[str] = None,
    is_available: bool = True,
) -> int:
    item = MenuItem(
        name=parse_name(name),
        description=(description or "").strip(),
        price=parse_price(price),
        category=parse_category(category),
        image_url=image_url or None,
        is_available=bool(is_available),
    )
    async with atomic(db):
        db.add(item)
        await db.flush()
        new_id = item.id

    log.info("menu item added: id=%s name=%r", new_id, item.name)
    return new_id


async def update_menu_item(
    db: AsyncSession,
    item_id: int,
    name: str,
    description: Optional[str],
    price,
    category,
    image_url=UNSET,
    is_available: bool = True,
) -> int:
    """
    Overwrites every field of a menu item. ``image_url`` is the exception:
    leave it out to keep the stored image, pass None (or "") to clear it.
    Returns the number of rows changed, 0 when the id does not exist.
    """
    values = {
        "name": parse_name(name),
        "description": (description or "").strip(),
        "price": parse_price(price),
        "category": parse_category(category),
        "is_available": bool(is_available),
        "updated_at": func.now(),
    }
    if image_url is not UNSET:
        values["image_url"] = image_url or None

    stmt = (
        update(MenuItem)
        .where(MenuItem.id == item_id)
        .values(**values)
        .execution_options(synchronize_session="fetch")
    )
    async with atomic(db):
        result = await db.execute(stmt)

    log.info("menu item updated: id=%s affected=%s", item_id, result.rowcount)
    return result.rowcount


async def delete_menu_item(db: AsyncSession, item_id: int) -> Tuple[Optional[str], int]:
    """
    Deletes a menu item and hands back its image URL so the caller can
    remove the file. Existing order lines keep their snapshot and lose
    only the link.
    """
    async with atomic(db):
        res = await db.execute(
            select(MenuItem.image_url).where(MenuItem.id == item_id).with_for_update()
        )
        image_url = res.scalar_one_or_none()
        result = await db.execute(
            delete(MenuItem)
            .where(MenuItem.id == item_id)
            .execution_options(synchronize_session="fetch")
        )

    log.info("menu item deleted: id=%s affected=%s", item_id, result.rowcount)
    return image_url, result.rowcount


async def toggle_availability(db: AsyncSession, item_id: int):
    """Flips is_available. Returns (id, name, is_available), or None if the id is unknown."""
    async with atomic(db):
        await db.execute(
            update(MenuItem)
            .where(MenuItem.id == item_id)
            .values(is_available=not_(MenuItem.is_available), updated_at=func.now())
            .execution_options(synchronize_session="fetch")
        )
        res = await db.execute(
            select(MenuItem.id, MenuItem.name, MenuItem.is_available).where(MenuItem.id == item_id)
        )
        row = res.one_or_none()

    if row is None:
        log.warning("toggle availability on unknown menu item %s", item_id)
        return None
    log.info("menu item %s availability -> %s", row.id, row.is_available)
    return row


# --------- Search ---------
WORD_SEPARATORS = (" ", "-", "(", "/")


def search_tokens(term: Optional[str]) -> List[str]:
    """Splits a search term into words long enough to be matched."""
    tokens = []
    for raw in (term or "").split():
        token = raw.strip("*+-<>()~\"'@")
        if len(token) >= MIN_SEARCH_TOKEN_LENGTH:
            tokens.append(token)
    return tokens


def _word_prefix(column, token: str):
    """True when some word in the column starts with token (case-insensitive)."""
    return or_(
        column.istartswith(token, autoescape=True),
        *(column.icontains(sep + token, autoescape=True) for sep in WORD_SEPARATORS),
    )


async def search_menu_items(
    db: AsyncSession, term: Optional[str], include_unavailable: bool = True
) -> List[MenuItem]:
    """
    Word-prefix match of every search word against name and description.
    Name hits rank above description-only hits, then by how many words matched,
    then alphabetically.
    """
    tokens = search_tokens(term)
    if not tokens:
        return []

    name_hits = [_word_prefix(MenuItem.name, t) for t in tokens]
    desc_hits = [_word_prefix(MenuItem.description, t) for t in tokens]

    name_score = sum(case((hit, 1), else_=0) for hit in name_hits)
    desc_score = sum(case((hit, 1), else_=0) for hit in desc_hits)

    query = select(MenuItem).where(or_(*name_hits, *desc_hits))
    if not include_unavailable:
        query = query.where(MenuItem.is_available == True)  # noqa: E712

    query = query.order_by(
        case((name_score > 0, 1), else_=0).desc(),
        (name_score + desc_score).desc(),
        MenuItem.name,
    )
    result = await db.execute(query)
    return result.scalars().all()
