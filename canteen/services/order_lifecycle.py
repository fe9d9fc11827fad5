"""
Order status state machine.

    pending -> preparing -> ready -> completed
       |           |
       +-----------+--> cancelled

Nothing moves backward and nothing skips a step; cancellation is only
possible before the order is ready.
"""
from typing import Dict, FrozenSet

from canteen.core.errors import InvalidTransition, ValidationError
from canteen.models.order.order import OrderStatus

ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.pending: frozenset({OrderStatus.preparing, OrderStatus.cancelled}),
    OrderStatus.preparing: frozenset({OrderStatus.ready, OrderStatus.cancelled}),
    OrderStatus.ready: frozenset({OrderStatus.completed}),
    OrderStatus.completed: frozenset(),
    OrderStatus.cancelled: frozenset(),
}

_STATUS_MESSAGES = {
    OrderStatus.pending: "Your order #{order_id} has been received.",
    OrderStatus.preparing: "Your order #{order_id} is now being prepared.",
    OrderStatus.ready: "Your order #{order_id} is ready for pickup.",
    OrderStatus.completed: "Your order #{order_id} has been completed. Enjoy!",
    OrderStatus.cancelled: "Your order #{order_id} has been cancelled.",
}


def parse_status(value) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown order status: {value!r}")


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


def ensure_transition(current: OrderStatus, new: OrderStatus) -> None:
    if not can_transition(current, new):
        raise InvalidTransition(
            f"Cannot change order status from {current.value} to {new.value}"
        )


def status_message(order_id: int, status: OrderStatus) -> str:
    return _STATUS_MESSAGES[status].format(order_id=order_id)
