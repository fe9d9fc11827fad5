import logging
from collections import OrderedDict
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from canteen.core.errors import ItemUnavailable, NotFound, ValidationError
from canteen.crud.notification import add_notification
from canteen.db import atomic
from canteen.models.menu.menu_item import MenuItem
from canteen.models.order.order import Order, OrderItem, OrderStatus, OrderType
from canteen.models.user import User
from canteen.services.order_lifecycle import (
    can_transition,
    ensure_transition,
    parse_status,
    status_message,
)
from canteen.utils import clock

log = logging.getLogger(__name__)

CENT = Decimal("0.01")


def parse_order_type(value) -> OrderType:
    if isinstance(value, OrderType):
        return value
    try:
        return OrderType(value)
    except ValueError:
        raise ValidationError(f"Unknown order type: {value!r}")


def resolve_schedule(
    order_type: OrderType, scheduled_for: Optional[datetime], now: Optional[datetime] = None
) -> Optional[datetime]:
    """Preorders need a pickup time in the future; immediate orders never carry one."""
    if order_type == OrderType.immediate:
        return None

    if scheduled_for is None:
        raise ValidationError("Preorders need a scheduled pickup time")

    scheduled_for = clock.to_local(scheduled_for)
    if scheduled_for <= clock.to_local(now or clock.now()):
        raise ValidationError("Scheduled pickup time must be in the future")
    return scheduled_for


def merge_line_items(line_items: Iterable[Tuple[int, int]]) -> "OrderedDict[int, int]":
    quantities: "OrderedDict[int, int]" = OrderedDict()
    for menu_item_id, quantity in line_items or []:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("Quantity must be a positive whole number")
        quantities[menu_item_id] = quantities.get(menu_item_id, 0) + quantity

    if not quantities:
        raise ValidationError("An order needs at least one item")
    return quantities


def _order_query():
    return select(Order).options(
        selectinload(Order.user),
        selectinload(Order.items),
    )


# --------- Create ---------
async def create_order(
    db: AsyncSession,
    user_id: int,
    order_type,
    line_items: Iterable[Tuple[int, int]],
    scheduled_for: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Order:
    """
    Places an order. Every line item snapshots the current menu price and
    name; the order row, its lines, the total and the "received"
    notification are written together or not at all.
    """
    order_type = parse_order_type(order_type)
    scheduled_for = resolve_schedule(order_type, scheduled_for, now)
    quantities = merge_line_items(line_items)

    async with atomic(db):
        if await db.get(User, user_id) is None:
            raise NotFound("User not found")

        res = await db.execute(
            select(MenuItem).where(MenuItem.id.in_(list(quantities))).with_for_update(read=True)
        )
        menu_items = {m.id: m for m in res.scalars().all()}

        order_lines = []
        total = Decimal("0.00")
        for menu_item_id, quantity in quantities.items():
            menu_item = menu_items.get(menu_item_id)
            if menu_item is None or not menu_item.is_available:
                log.warning("order rejected: user=%s menu_item=%s unavailable", user_id, menu_item_id)
                raise ItemUnavailable(f"Menu item {menu_item_id} is not available")

            price_each = Decimal(str(menu_item.price)).quantize(CENT)
            order_lines.append(
                OrderItem(
                    menu_item_id=menu_item.id,
                    quantity=quantity,
                    price_each=price_each,
                    item_name=menu_item.name,
                )
            )
            total += price_each * quantity

        order = Order(
            user_id=user_id,
            order_type=order_type,
            scheduled_for=scheduled_for,
            status=OrderStatus.pending,
            total_amount=total.quantize(CENT),
            items=order_lines,
        )
        db.add(order)
        await db.flush()  # populate order.id

        add_notification(db, user_id, order.id, status_message(order.id, OrderStatus.pending))
        order_id = order.id

    log.info(
        "order created: id=%s user=%s type=%s lines=%s total=%s",
        order_id, user_id, order_type.value, len(order_lines), total,
    )
    return await read_order(db, order_id)


# --------- Read ---------
async def read_order(db: AsyncSession, order_id: int) -> Order:
    result = await db.execute(
        _order_query().where(Order.id == order_id).execution_options(populate_existing=True)
    )
    order = result.scalar_one_or_none()
    if not order:
        raise NotFound("Order not found")
    return order


async def get_order_items(db: AsyncSession, order_id: int) -> List[OrderItem]:
    result = await db.execute(
        select(OrderItem)
        .where(OrderItem.order_id == order_id)
        .order_by(OrderItem.id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().all()


async def list_orders_for_user(db: AsyncSession, user_id: int) -> List[Order]:
    result = await db.execute(
        _order_query()
        .where(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
    )
    return result.scalars().all()


async def list_orders(db: AsyncSession, status=None) -> List[Order]:
    query = _order_query()
    if status is not None:
        query = query.where(Order.status == parse_status(status))
    result = await db.execute(query.order_by(Order.created_at.desc(), Order.id.desc()))
    return result.scalars().all()


# --------- Status ---------
async def update_order_status(db: AsyncSession, order_id: int, new_status) -> Optional[Order]:
    """
    Moves an order one step along the state machine and notifies its owner.
    Returns None when the order does not exist; an illegal move raises
    InvalidTransition and leaves the order untouched.
    """
    new_status = parse_status(new_status)

    async with atomic(db):
        res = await db.execute(
            select(Order)
            .where(Order.id == order_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        order = res.scalar_one_or_none()
        if order is None:
            log.warning("status update on unknown order %s", order_id)
            return None

        previous = order.status
        allowed = can_transition(previous, new_status)
        if allowed:
            order.status = new_status
            add_notification(db, order.user_id, order.id, status_message(order.id, new_status))

    # Rejected outside atomic(): nothing was written, and the caller's
    # objects must not be expired by a rollback
    if not allowed:
        log.warning("order %s: rejected %s -> %s", order_id, previous.value, new_status.value)
        ensure_transition(previous, new_status)

    log.info("order %s status %s -> %s", order_id, previous.value, new_status.value)
    return await read_order(db, order_id)


# --------- Delete ---------
async def delete_order(db: AsyncSession, order_id: int) -> int:
    """Administrative removal; line items and notifications go with it."""
    async with atomic(db):
        result = await db.execute(
            delete(Order)
            .where(Order.id == order_id)
            .execution_options(synchronize_session="fetch")
        )

    log.info("order deleted: id=%s affected=%s", order_id, result.rowcount)
    return result.rowcount
