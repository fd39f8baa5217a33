from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ..navigation import Role


class MenuItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    url: str


class MenuSectionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    icon: str
    url: str
    is_active: bool
    items: list[MenuItemRead]


class MenuRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    role: Role
    can_create_sales: bool = False
    projects: list[MenuItemRead]
    sections: list[MenuSectionRead]
