import os
from contextlib import asynccontextmanager
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from shop_inventory import __version__
from shop_inventory.api import errors
from shop_inventory.api.deps import require_auth
from shop_inventory.api.health import router as health_router
from shop_inventory.api.routes_auth import router as auth_router
from shop_inventory.api.routes_products import router as products_router
from shop_inventory.config import Settings, settings as default_settings
from shop_inventory.db import init_db, make_engine, make_session_factory
from shop_inventory.services.auth_service import SessionStore
from shop_inventory.utils.log import get_logger, set_level

log = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg: Settings = app.state.settings
    seed_user = None
    if cfg.AUTH_ENABLED:
        seed_user = {
            "email": cfg.SEED_USER_EMAIL,
            "password": cfg.SEED_USER_PASSWORD,
            "name": cfg.SEED_USER_NAME,
        }
    init_db(app.state.engine, auth_enabled=cfg.AUTH_ENABLED, seed_user=seed_user)

    scheduler = None
    if cfg.AUTH_ENABLED:
        # sweep expired sessions; reads already ignore them
        scheduler = BackgroundScheduler()

        def expire_job():
            removed = app.state.sessions.purge_expired()
            if removed:
                log.info("expired %d session(s)", removed)

        scheduler.add_job(
            expire_job, "interval", seconds=cfg.SESSION_SWEEP_SECONDS, id="expire_sessions"
        )
        scheduler.start()

    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=False)
        app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    cfg = settings or default_settings
    set_level(cfg.LOG_LEVEL)

    app = FastAPI(title="Clothing Shop Inventory", version=__version__, lifespan=lifespan)
    app.state.settings = cfg
    app.state.engine = make_engine(cfg.DATABASE_URL)
    app.state.session_factory = make_session_factory(app.state.engine)
    app.state.sessions = SessionStore(cfg.SESSION_TTL_SECONDS)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.FRONTEND_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    errors.install(app)

    app.include_router(health_router, prefix="/api", tags=["health"])

    product_deps = []
    if cfg.AUTH_ENABLED:
        product_deps.append(Depends(require_auth))
        app.include_router(auth_router)
    app.include_router(
        products_router, prefix="/api/products", tags=["products"], dependencies=product_deps
    )

    # after every router: only unmatched paths reach the static files
    if cfg.STATIC_DIR and os.path.isdir(cfg.STATIC_DIR):
        app.mount("/", StaticFiles(directory=cfg.STATIC_DIR, html=True), name="static")

    return app


app = create_app()
