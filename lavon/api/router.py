from fastapi import APIRouter

from . import installments, menu, reports, sales

api_router = APIRouter()
api_router.include_router(installments.router, prefix="/installments", tags=["installments"])
api_router.include_router(sales.router, prefix="/sales", tags=["sales"])
api_router.include_router(menu.router, prefix="/menu", tags=["menu"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
