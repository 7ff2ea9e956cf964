"""
API Models for the Link Suggester

This module defines the Pydantic models used for request/response validation
on the public HTTP surface.

Design Goals
------------
- camelCase on the wire, snake_case in Python
- Strict field types (unknown request fields are ignored)
- One error envelope for every failure
"""

from __future__ import annotations

from typing import List
from pydantic import BaseModel, Field, ConfigDict

from ..llm.models import Suggestion


# ---------------------------------------------------------------------
# Request / Response Models
# ---------------------------------------------------------------------

class GenerateRequest(BaseModel):
    """
    Link suggestion request payload.

    URLs are checked by the route, not here, so a malformed URL produces the
    dedicated "Invalid URLs" error rather than a schema error.
    """
    source_url: str = Field(..., alias="sourceUrl")
    target_url: str = Field(..., alias="targetUrl")
    anchor_text: str = Field(..., alias="anchorText", min_length=1)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class GenerateResponse(BaseModel):
    """
    Successful response; the list may be empty.
    """
    suggestions: List[Suggestion] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """
    Error envelope used for every 4xx/5xx response.
    """
    error: str


# ---------------------------------------------------------------------
# Health Models
# ---------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str
    completion_model: str
    embedding_model: str
