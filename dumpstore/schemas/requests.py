"""Request body models for the dumpstore example API."""

from pydantic import BaseModel


class PostCreate(BaseModel):
    name: str
    body: str = ""
