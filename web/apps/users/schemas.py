"""Pydantic schemas for users."""

from pydantic import BaseModel, ConfigDict


class UserOut(BaseModel):
    """Public representation of a user, also embedded as an order's client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str = ""
