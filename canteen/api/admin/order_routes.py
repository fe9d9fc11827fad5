from fastapi import APIRouter, Depends
from typing import List, Optional, Union

from canteen.auth.dependencies import get_admin_context
from canteen.core.context import RequestContext
from canteen.crud import order as ledger
from canteen.models.order.order import OrderStatus
from canteen.schemas.menu_item import AffectedRows
from canteen.schemas.order import OrderStatusUpdate, OrderWithOwnerRead

router = APIRouter(prefix="/admin/orders", tags=["admin: orders"])


@router.get("", response_model=List[OrderWithOwnerRead])
async def order_board(
    status: Optional[OrderStatus] = None,
    ctx: RequestContext = Depends(get_admin_context),
):
    return await ledger.list_orders(ctx.db, status)


@router.get("/{order_id}", response_model=OrderWithOwnerRead)
async def get_order(order_id: int, ctx: RequestContext = Depends(get_admin_context)):
    return await ledger.read_order(ctx.db, order_id)


@router.post("/{order_id}/status", response_model=Union[OrderWithOwnerRead, AffectedRows])
async def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    ctx: RequestContext = Depends(get_admin_context),
):
    order = await ledger.update_order_status(ctx.db, order_id, payload.status)
    if order is None:
        return AffectedRows(affected_rows=0)
    return OrderWithOwnerRead.model_validate(order)


@router.delete("/{order_id}", response_model=AffectedRows)
async def delete_order(order_id: int, ctx: RequestContext = Depends(get_admin_context)):
    return AffectedRows(affected_rows=await ledger.delete_order(ctx.db, order_id))
