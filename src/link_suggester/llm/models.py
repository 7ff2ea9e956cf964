"""
Suggestion Data Model

The unit of model output that survives sanitizing. Serialized with camelCase
aliases, which is also the shape the model is asked to produce.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ConfigDict


class Suggestion(BaseModel):
    """
    A proposed edit: source text and the same text with the link inserted.
    """
    original_text: str = Field(..., alias="originalText")
    suggested_change: str = Field(..., alias="suggestedChange")

    model_config = ConfigDict(populate_by_name=True, frozen=True)
