"""Schemas shared across endpoints."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. after a delete or logout."""

    message: str
