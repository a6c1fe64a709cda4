from fastapi import APIRouter
from . import accounts, health

router = APIRouter()
router.include_router(health.router)
router.include_router(accounts.router)
