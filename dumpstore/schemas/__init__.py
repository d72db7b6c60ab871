"""Pydantic schemas for the example API: request bodies and stored records."""

from .records import POST_TYPE, Post
from .requests import PostCreate

__all__ = [
    "POST_TYPE",
    "Post",
    "PostCreate",
]
