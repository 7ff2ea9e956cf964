"""
Ranking Data Models

Intermediate values produced while ranking source paragraphs against the
target page. Both are discarded once the prompt has been built.
"""

from __future__ import annotations

from typing import List
from pydantic import BaseModel, Field, ConfigDict


class ParagraphEmbedding(BaseModel):
    """
    Embedding vector for one retained source paragraph.
    """

    index: int = Field(..., ge=0)
    vector: List[float]

    model_config = ConfigDict(extra="forbid", frozen=True)


class ScoredCandidate(BaseModel):
    """
    A source paragraph scored by cosine similarity to the target page.
    """

    index: int = Field(..., ge=0, description="Original paragraph position.")
    text: str = Field(..., min_length=1)
    score: float = Field(..., description="Cosine similarity, roughly [-1, 1].")

    model_config = ConfigDict(extra="forbid", frozen=True)
