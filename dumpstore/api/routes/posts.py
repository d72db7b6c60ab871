"""Posts: list all, add one, get one by id."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse, Response

from dumpstore.api.deps import get_store, require_post
from dumpstore.errors import EncodeError, StoreError
from dumpstore.schemas import Post, PostCreate
from dumpstore.store import Store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("")
async def list_posts(store: Annotated[Store, Depends(get_store)]):
    try:
        data = store.encode_json()
    except EncodeError as e:
        logger.error(f"Encoding posts failed: {e}", exc_info=True)
        raise HTTPException(500, f"Encoding posts failed: {str(e)}")
    return Response(content=data, media_type="application/json")


@router.post("")
async def add_post(data: PostCreate, store: Annotated[Store, Depends(get_store)]):
    try:
        post_id = store.add(Post(name=data.name, body=data.body))
    except StoreError as e:
        logger.error(f"Post {e.record_id} kept in memory but not persisted: {e}")
        raise HTTPException(500, f"Post {e.record_id} was not persisted: {str(e)}")
    logger.info(f"Added post {post_id}")
    return JSONResponse({"id": post_id})


@router.get("/{post_id}")
async def get_post(post: Annotated[bytes, Depends(require_post)]):
    return Response(content=post, media_type="application/json")
