from fastapi import APIRouter

from app.api.v1.portfolio import router as portfolio_router

api_router = APIRouter(prefix="/api")
api_router.include_router(portfolio_router)
