from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from canteen.models.user import UserRole


@dataclass
class RequestContext:
    """Per-request identity plus the session that carries its transaction."""

    db: AsyncSession
    user_id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    def can_access(self, owner_id: int) -> bool:
        return self.is_admin or owner_id == self.user_id
