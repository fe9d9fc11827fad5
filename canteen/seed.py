# canteen/seed.py
import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from canteen.models.menu.menu_item import MenuCategory, MenuItem

log = logging.getLogger(__name__)

# 🍱 Sample catalog
MENU_TO_SEED = [
    {
        "name": "Chicken Teriyaki Bowl",
        "description": "Grilled chicken with teriyaki glaze over steamed rice.",
        "price": Decimal("5.50"),
        "category": MenuCategory.Food,
        "image_url": "assets/img/chicken-teriyaki.jpg",
    },
    {
        "name": "Veggie Wrap",
        "description": "Tortilla wrap with roasted veggies and hummus.",
        "price": Decimal("4.25"),
        "category": MenuCategory.Food,
        "image_url": "assets/img/veggie-wrap.jpg",
    },
    {
        "name": "Iced Milk Tea",
        "description": "Classic sweet milk tea with tapioca pearls.",
        "price": Decimal("2.50"),
        "category": MenuCategory.Drink,
        "image_url": "assets/img/iced-milk-tea.jpg",
    },
    {
        "name": "Fresh Lemonade",
        "description": "Refreshing lemonade squeezed daily.",
        "price": Decimal("1.75"),
        "category": MenuCategory.Drink,
        "image_url": "assets/img/fresh-lemonade.jpg",
    },
]


async def seed_menu(db: AsyncSession) -> dict:
    """Inserts the sample catalog where missing. Returns {name: id}."""
    ids = {}
    for data in MENU_TO_SEED:
        result = await db.execute(select(MenuItem).where(MenuItem.name == data["name"]))
        item = result.scalar_one_or_none()
        if item:
            log.info("'%s' already on the menu, skipping", data["name"])
        else:
            item = MenuItem(is_available=True, **data)
            db.add(item)
            await db.flush()
            log.info("seeded %s (%s) %s", item.name, item.category.value, item.price)
        ids[item.name] = item.id

    await db.commit()
    return ids
