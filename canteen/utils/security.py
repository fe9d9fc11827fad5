# canteen/utils/security.py
from typing import Optional

from fastapi_users.password import PasswordHelper

_password_helper = PasswordHelper()


def hash_password(plain: str) -> str:
    return _password_helper.hash(plain)


def verify_password(plain: str, hashed: Optional[str]) -> bool:
    if not plain or not hashed:
        return False
    verified, _updated_hash = _password_helper.verify_and_update(plain, hashed)
    return verified
