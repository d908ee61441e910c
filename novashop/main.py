# novashop/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from novashop.core.config import Settings, get_settings
from novashop.core.errors import register_error_handlers
from novashop.core.security import PasswordHasher
from novashop.core.supabase_client import create_image_storage
from novashop.core.tokens import TokenService
from novashop.database import build_engine, create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from novashop.models import user as _user_models  # noqa: F401
from novashop.models import product as _product_models  # noqa: F401
from novashop.models import cart as _cart_models  # noqa: F401
from novashop.models import order as _order_models  # noqa: F401


# Routers
from novashop.routers.auth import router as auth_router
from novashop.routers.users import router as users_router
from novashop.routers.products import router as products_router
from novashop.routers.wishlist import router as wishlist_router
from novashop.routers.cart import router as cart_router
from novashop.routers.orders import router as orders_router
from novashop.routers.orders import checkout_router

logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.

    Shutdown:
      - Dispose of the connection pool.
    """
    logger.info("Startup: connecting to database...")
    try:
        create_db_and_tables(app.state.engine)
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    yield
    app.state.engine.dispose()
    logger.info("Shutdown: connection pool disposed.")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application and its process-wide resources.

    The engine (connection pool), password hasher, token service and
    image storage are created once here and exposed to request handlers
    through app.state.
    """
    settings = settings or get_settings()

    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.tokens = TokenService(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )
    app.state.storage = create_image_storage(settings)
    if app.state.storage is None:
        logger.warning("Supabase Storage not configured; image uploads are disabled.")

    # --- CORS configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    prefix = settings.API_PREFIX
    app.include_router(auth_router, prefix=prefix)
    app.include_router(users_router, prefix=prefix)
    app.include_router(products_router, prefix=prefix)
    app.include_router(wishlist_router, prefix=prefix)
    app.include_router(cart_router, prefix=prefix)
    app.include_router(orders_router, prefix=prefix)
    app.include_router(checkout_router, prefix=prefix)

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "novashop-backend"}

    return app
