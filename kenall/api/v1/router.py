from fastapi import APIRouter

from kenall.api.v1 import export, postal_codes

api_router = APIRouter()

api_router.include_router(postal_codes.router, prefix="/postal-codes", tags=["postal-codes"])
api_router.include_router(export.router, prefix="/export", tags=["export"])
