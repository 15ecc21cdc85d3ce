"""
API router

Aggregates the domain routers under the versioned API prefix.
"""

from fastapi import APIRouter

from storefront.domains.checkout.api.routes import router as checkout_router

api_router = APIRouter()

api_router.include_router(checkout_router)
