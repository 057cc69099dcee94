# API v1 routes
from fastapi import APIRouter

from docgate.api.v1 import access, admin

router = APIRouter()

router.include_router(access.router, prefix="/access", tags=["Access"])
router.include_router(admin.router, prefix="/admin", tags=["Administration"])
