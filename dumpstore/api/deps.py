"""FastAPI dependencies and require-helpers for routes."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from dumpstore.store import Store


def get_store(request: Request) -> Store:
    """Return the store opened by the app lifespan. Use in Depends()."""
    return request.app.state.store


def require_post(
    post_id: int,
    store: Annotated[Store, Depends(get_store)],
) -> bytes:
    """Return the JSON of post *post_id* or raise 404. Encoded while the store is read-locked."""

    def _lookup(posts: list) -> bytes:
        if post_id < 0 or post_id >= len(posts):
            raise HTTPException(404, f"Post '{post_id}' not found")
        return posts[post_id].encode_json()

    return store.view(_lookup)
