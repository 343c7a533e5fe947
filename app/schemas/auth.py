"""Typed view of an authenticated session."""
from pydantic import BaseModel, ConfigDict


class SessionInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    user_id: int
    username: str
    expires_at: int  # unix seconds
