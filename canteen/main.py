### canteen/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from canteen.api import menu_routes, notification_routes, order_routes
from canteen.api.admin import menu_item_routes as admin_menu_item_routes
from canteen.api.admin import order_routes as admin_order_routes
from canteen.api.errors import register_exception_handlers
from canteen.auth import routes as auth_routes
from canteen.core.config import settings
from canteen.core.constants import STATIC_DIR
from canteen.core.logging import configure_logging
from canteen.db import create_db_and_tables
import canteen.models  # noqa: F401  registers all models via models/__init__.py
from sqlalchemy.orm import configure_mappers

configure_mappers()
configure_logging()

log = logging.getLogger(__name__)

# Create the FastAPI app
app = FastAPI(
    title="Canteen Portal API",
    version="1.0.0",
    description="Menu browsing, immediate and scheduled orders, and order notifications.",
)

# ✅ Session middleware carries the signed-in identity
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    same_site="lax",
)

# ✅ Allow frontend dev (CORS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ Uploaded menu photos
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

register_exception_handlers(app)


@app.on_event("startup")
async def on_startup():
    if settings.session_secret == "change-me":
        log.warning("SESSION_SECRET is not set; sessions are signed with the default key")
    log.info("Starting DB setup...")
    await create_db_and_tables()
    log.info("DB schema ready.")


# ✅ Routers
app.include_router(auth_routes.router)
app.include_router(menu_routes.router)
app.include_router(order_routes.router)
app.include_router(notification_routes.router)
app.include_router(admin_menu_item_routes.router)
app.include_router(admin_order_routes.router)
