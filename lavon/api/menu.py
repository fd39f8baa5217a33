from fastapi import APIRouter

from ..navigation import build_menu
from ..schemas.menu import MenuRead
from .dependencies import CurrentUser

router = APIRouter()


def _menu_response(role: str | None) -> MenuRead:
    menu = build_menu(role)
    return MenuRead.model_validate(menu)


@router.get("", response_model=MenuRead)
async def current_menu_endpoint(current_user: CurrentUser) -> MenuRead:
    """Sidebar menu for the signed-in user."""
    return _menu_response(current_user.role)


@router.get("/{role}", response_model=MenuRead)
async def role_menu_endpoint(role: str) -> MenuRead:
    return _menu_response(role)
