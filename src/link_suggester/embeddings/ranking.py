"""
Similarity Ranking

Scores source paragraphs by cosine similarity between their embeddings and
the embedding of the target page, keeping the best few as prompt candidates.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from .embedder import Embedder
from .models import ParagraphEmbedding, ScoredCandidate
from ..config import settings
from ..extraction.models import ExtractedArticle, Paragraph

logger = logging.getLogger("linksuggest.ranking")

EPSILON = 1e-12


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two vectors over their common length.

    An all-zero vector scores 0.0 against anything.
    """
    n = min(len(a), len(b))
    va = np.asarray(a[:n], dtype=np.float64)
    vb = np.asarray(b[:n], dtype=np.float64)
    denom = np.linalg.norm(va) * np.linalg.norm(vb) + EPSILON
    return float(np.dot(va, vb) / denom)


def target_embedding_text(target: ExtractedArticle, max_chars: int = 2000) -> str:
    return f"{target.title or ''}\n{target.text_content[:max_chars]}"


class SimilarityRanker:
    def __init__(
        self,
        embedder: Embedder,
        top_k: Optional[int] = None,
        max_paragraphs: Optional[int] = None,
        target_chars: Optional[int] = None,
    ) -> None:
        self.embedder = embedder
        self.top_k = top_k if top_k is not None else settings.top_k_candidates
        self.max_paragraphs = (
            max_paragraphs if max_paragraphs is not None else settings.max_candidate_paragraphs
        )
        self.target_chars = (
            target_chars if target_chars is not None else settings.target_embed_chars
        )

    async def rank(
        self,
        target: ExtractedArticle,
        paragraphs: Sequence[Paragraph],
    ) -> List[ScoredCandidate]:
        """
        Return the ``top_k`` paragraphs most similar to the target page.

        Sorting is stable: paragraphs with equal scores keep document order.
        """
        if not paragraphs:
            return []

        if len(paragraphs) > self.max_paragraphs:
            logger.info(
                "Capping candidate paragraphs at %d (article has %d)",
                self.max_paragraphs,
                len(paragraphs),
            )
            paragraphs = paragraphs[: self.max_paragraphs]

        # Target first, then paragraphs, in one fan-out
        texts = [target_embedding_text(target, self.target_chars)]
        texts.extend(p.text for p in paragraphs)
        vectors = await self.embedder.embed(texts)

        target_vector = vectors[0]
        embeddings = [
            ParagraphEmbedding(index=p.index, vector=v)
            for p, v in zip(paragraphs, vectors[1:])
        ]
        texts_by_index = {p.index: p.text for p in paragraphs}

        scored = [
            ScoredCandidate(
                index=e.index,
                text=texts_by_index[e.index],
                score=cosine_similarity(target_vector, e.vector),
            )
            for e in embeddings
        ]
        scored.sort(key=lambda c: c.score, reverse=True)

        top = scored[: self.top_k]
        logger.debug(
            "Ranked %d paragraphs, top scores: %s",
            len(scored),
            [round(c.score, 3) for c in top],
        )
        return top
