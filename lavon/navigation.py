"""Role-aware sidebar menu for the back-office dashboard.

Menus are rebuilt on every call from immutable pieces, so one user's menu
can never leak into another's.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional


class Role(str, Enum):
    ADMIN = "admin"
    FINANCE = "finance"
    SALES = "sales"
    GUEST = "guest"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.GUEST


@dataclass(frozen=True)
class MenuItem:
    title: str
    url: str


@dataclass(frozen=True)
class MenuSection:
    title: str
    icon: str
    items: tuple[MenuItem, ...]
    url: str = "#"
    is_active: bool = False


@dataclass(frozen=True)
class Menu:
    role: Role
    projects: tuple[MenuItem, ...]
    sections: tuple[MenuSection, ...]

    @property
    def can_create_sales(self) -> bool:
        return can_create_sales(self.role)

    def urls(self) -> frozenset[str]:
        return frozenset(
            [item.url for item in self.projects]
            + [item.url for section in self.sections for item in section.items]
        )


CUSTOMERS = "Customers"
CLUSTERS = "Clusters"
FINANCE = "Finance"
HISTORY_PAYMENT = "History Payment"

_PROJECTS = (MenuItem("Dashboard", "/"),)

_BASE_SECTIONS = (
    MenuSection(
        title=CUSTOMERS,
        icon="users",
        is_active=True,
        items=(
            MenuItem("Customer Dashboard", "/customers"),
            MenuItem("Customers Data", "/customers/data"),
            MenuItem("Create Customers", "/customers/create"),
        ),
    ),
    MenuSection(
        title=CLUSTERS,
        icon="house",
        items=(
            MenuItem("Cluster Dashboard", "/clusters"),
            MenuItem("Clusters Data", "/clusters/data"),
            MenuItem("Create Cluster", "/clusters/create"),
        ),
    ),
    MenuSection(
        title=FINANCE,
        icon="hand-coins",
        items=(
            MenuItem("Dashboard Finance", "/sales"),
            MenuItem("Sales Data", "/sales/data"),
            MenuItem("Create New Sales", "/sales/create"),
            MenuItem(HISTORY_PAYMENT, "/sales/payments"),
        ),
    ),
)

_ADMIN_SECTION = MenuSection(
    title="Admin",
    icon="user-star",
    is_active=True,
    items=(
        MenuItem("All Users", "/users"),
        MenuItem("Marketing Rank", "/admin/rank"),
        MenuItem("Commissions", "/commissions"),
    ),
)


def _is_create(item: MenuItem) -> bool:
    return item.title.startswith("Create")


def _filter(
    sections: tuple[MenuSection, ...],
    drop: Callable[[MenuSection, MenuItem], bool],
) -> tuple[MenuSection, ...]:
    return tuple(
        replace(section, items=tuple(item for item in section.items if not drop(section, item)))
        for section in sections
    )


def _drop_for_sales(section: MenuSection, item: MenuItem) -> bool:
    if section.title == CLUSTERS and _is_create(item):
        return True
    return item.title == HISTORY_PAYMENT


def build_menu(role: Optional[str]) -> Menu:
    """Return the sidebar menu a user with ``role`` may see."""
    resolved = Role(role) if role else Role.GUEST

    if resolved is Role.ADMIN:
        sections = _BASE_SECTIONS + (_ADMIN_SECTION,)
    elif resolved is Role.SALES:
        sections = _filter(_BASE_SECTIONS, _drop_for_sales)
    else:
        # Finance and unrecognised roles browse everything but create nothing.
        sections = _filter(_BASE_SECTIONS, lambda _section, item: _is_create(item))

    return Menu(role=resolved, projects=_PROJECTS, sections=sections)


def can_create_sales(role: Optional[str]) -> bool:
    """Admins and marketers (the ``sales`` role) may register new sales."""
    if not role:
        return False
    return Role(role) in (Role.ADMIN, Role.SALES)
