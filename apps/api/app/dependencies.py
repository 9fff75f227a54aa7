from fastapi import HTTPException, Header
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from app.database import AsyncSessionLocal

PRIVILEGED_ROLES = ("admin", "manager")


async def get_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


class CurrentUser:
    def __init__(self, user_id: str, role: str):
        self.id = user_id
        self.role = role

    @property
    def is_privileged(self) -> bool:
        return self.role in PRIVILEGED_ROLES


def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> CurrentUser:
    if not x_user_role:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return CurrentUser(user_id=x_user_id or "", role=x_user_role.lower())
