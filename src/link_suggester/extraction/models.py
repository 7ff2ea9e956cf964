"""
Extraction Data Models

Request-scoped values produced while reducing a fetched page to candidate
paragraphs. Instances are immutable once created.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class ExtractedArticle(BaseModel):
    """
    Readable content of a single fetched page.
    """

    title: Optional[str] = Field(
        default=None,
        description="Article title, when the page declares one.",
    )

    text_content: str = Field(
        default="",
        description="Plain-text body with blocks separated by blank lines.",
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def empty(cls) -> "ExtractedArticle":
        return cls(title=None, text_content="")


class Paragraph(BaseModel):
    """
    One candidate paragraph from the source article.
    """

    index: int = Field(..., ge=0)
    text: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True)
