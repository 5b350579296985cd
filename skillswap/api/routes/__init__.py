
from fastapi import FastAPI

from . import health, ratings, reviews, users

API_PREFIX = "/api/v1"


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the FastAPI application."""
    app.include_router(health.router)
    app.include_router(users.router, prefix=API_PREFIX)
    app.include_router(ratings.router, prefix=API_PREFIX)
    app.include_router(reviews.router, prefix=API_PREFIX)
