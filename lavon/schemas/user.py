from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RemoteUser(BaseModel):
    """The signed-in user as reported by the sales API ``/me`` endpoint."""

    model_config = ConfigDict(extra="allow")

    id: int | str
    name: str | None = None
    email: str | None = None
    role: str | None = None
