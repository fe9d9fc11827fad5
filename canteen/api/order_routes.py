from fastapi import APIRouter, Depends
from typing import List, Union

from canteen.auth.dependencies import get_request_context
from canteen.core.context import RequestContext
from canteen.core.errors import Forbidden
from canteen.crud import order as ledger
from canteen.models.order.order import OrderStatus
from canteen.schemas.menu_item import AffectedRows
from canteen.schemas.order import OrderCreate, OrderRead

router = APIRouter(prefix="/orders", tags=["orders"])


async def _load_owned_order(ctx: RequestContext, order_id: int):
    order = await ledger.read_order(ctx.db, order_id)
    if not ctx.can_access(order.user_id):
        raise Forbidden("This order belongs to another account")
    return order


@router.post("", response_model=OrderRead, status_code=201)
async def place_order(payload: OrderCreate, ctx: RequestContext = Depends(get_request_context)):
    return await ledger.create_order(
        ctx.db,
        ctx.user_id,
        payload.order_type,
        [(line.menu_item_id, line.quantity) for line in payload.items],
        scheduled_for=payload.scheduled_for,
    )


@router.get("", response_model=List[OrderRead])
async def my_orders(ctx: RequestContext = Depends(get_request_context)):
    return await ledger.list_orders_for_user(ctx.db, ctx.user_id)


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(order_id: int, ctx: RequestContext = Depends(get_request_context)):
    return await _load_owned_order(ctx, order_id)


@router.post("/{order_id}/cancel", response_model=Union[OrderRead, AffectedRows])
async def cancel_order(order_id: int, ctx: RequestContext = Depends(get_request_context)):
    await _load_owned_order(ctx, order_id)
    order = await ledger.update_order_status(ctx.db, order_id, OrderStatus.cancelled)
    if order is None:
        return AffectedRows(affected_rows=0)
    return OrderRead.model_validate(order)
