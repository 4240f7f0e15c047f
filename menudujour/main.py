### menu-du-jour/menudujour/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from sqlalchemy.orm import configure_mappers

import menudujour.models  # registers all models via models/__init__.py
from menudujour.api import (
    catalog_routes,
    daily_menu_routes,
    dashboard_routes,
    public_routes,
    restaurant_routes,
)
from menudujour.core.config import get_settings
from menudujour.core.logging_config import configure_logging
from menudujour.db import create_db_and_tables

configure_mappers()

settings = get_settings()
configure_logging(settings.log_level)
log = logging.getLogger(__name__)

# Create the FastAPI app
app = FastAPI(title="Menu du jour API", version="1.0.0")

# ✅ Session middleware (current user lives in the signed session cookie)
app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In prod, restrict this!
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    log.info("🔧 Starting DB setup...")
    await create_db_and_tables()
    log.info("✅ DB schema created.")


@app.get("/health")
async def health():
    return {"status": "ok"}


# ✅ Routers
app.include_router(public_routes.router)
app.include_router(dashboard_routes.router, prefix="/dashboard", tags=["dashboard"])
app.include_router(catalog_routes.router, prefix="/catalog", tags=["catalog"])
app.include_router(daily_menu_routes.router, prefix="/daily-menus", tags=["daily-menus"])
app.include_router(restaurant_routes.router, tags=["restaurant"])
