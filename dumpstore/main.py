"""
dumpstore example API
A small posts service backed by a Store: list, add, get by id.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dumpstore.api.routes import health_router, posts_router
from dumpstore.config import Settings, get_settings
from dumpstore.errors import StoreError, StoreIOError
from dumpstore.schemas import POST_TYPE
from dumpstore.store import Store

logger = logging.getLogger(__name__)


def open_store(settings: Settings) -> Store:
    """Build the posts store from settings and load the existing file, if any."""
    store = Store(
        settings.DUMPSTORE_PATH,
        settings.DUMPSTORE_PERSIST,
        POST_TYPE,
        interval=settings.DUMPSTORE_INTERVAL,
    )
    try:
        store.load()
    except StoreIOError as e:
        if settings.DUMPSTORE_PATH.exists():
            store.close()
            raise
        logger.info(f"No existing store at {settings.DUMPSTORE_PATH}, starting empty ({e})")
    except StoreError:
        store.close()
        raise
    return store


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = open_store(settings)
        app.state.store = store
        logger.info(f"Serving {len(store)} posts from {store.location} ({store.persist_mode.value})")
        try:
            yield
        finally:
            store.close()

    app = FastAPI(title=settings.APP_TITLE, version=settings.APP_VERSION, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(posts_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("dumpstore.main:app", host="0.0.0.0", port=8080)
