from .base import Base
from .user import User, UserRole
from .menu.menu_item import MenuItem, MenuCategory
from .order.order import Order, OrderItem, OrderStatus, OrderType
from .notification import Notification
