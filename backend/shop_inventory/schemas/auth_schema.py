from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserIdentity(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)
    id: int
    email: str
    name: Optional[str] = None


class MeOut(BaseModel):
    user: Optional[UserIdentity] = None
