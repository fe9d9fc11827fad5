from pydantic import BaseModel, EmailStr

from canteen.models.user import UserRole


class UserRead(BaseModel):
    id: int
    full_name: str
    email: str
    role: UserRole

    class Config:
        from_attributes = True


class UserCreate(BaseModel):
    full_name: str
    email: EmailStr
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str
