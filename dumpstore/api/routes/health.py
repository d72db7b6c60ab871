from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends

from dumpstore.api.deps import get_store
from dumpstore.config import get_settings
from dumpstore.store import Store

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(store: Annotated[Store, Depends(get_store)]):
    settings = get_settings()
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.APP_VERSION,
        "records": len(store),
        "persist_mode": store.persist_mode.value,
    }
