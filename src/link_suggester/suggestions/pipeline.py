"""
Link Suggestion Pipeline

Orchestrates one request end to end:

    validate -> fetch (source + target, concurrently) -> extract -> segment
    -> rank -> prompt -> complete -> parse

Every stage either returns a value or raises a ``LinkSuggesterError``
subclass; the HTTP layer turns those into the error envelope. Model-output
parsing is the one stage that never fails (it degrades to no suggestions).

Collaborators are injected so tests can substitute fakes for the network.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Sequence, Tuple

from ..api.models import GenerateRequest
from ..llm.models import Suggestion
from ..config import settings
from ..core.errors import ContentExtractionError, InvalidRequestError
from ..core.urls import is_valid_http_url
from ..embeddings.models import ScoredCandidate
from ..embeddings.ranking import SimilarityRanker
from ..extraction.article import extract_article
from ..extraction.models import ExtractedArticle, Paragraph
from ..extraction.paragraphs import split_paragraphs
from ..llm.client import LLMClient
from ..llm.parsing import parse_suggestions
from ..llm.prompts import LINK_SYSTEM_PROMPT, build_link_prompt
from ..web.fetcher import PageFetcher

logger = logging.getLogger("linksuggest.pipeline")


class LinkSuggestionPipeline:
    """
    Readability extraction + embedding-ranked candidates + one completion.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        ranker: SimilarityRanker,
        llm: LLMClient,
        min_paragraph_length: Optional[int] = None,
        target_summary_chars: Optional[int] = None,
        max_suggestions: Optional[int] = None,
    ) -> None:
        self.fetcher = fetcher
        self.ranker = ranker
        self.llm = llm
        self.min_paragraph_length = (
            min_paragraph_length
            if min_paragraph_length is not None
            else settings.min_paragraph_length
        )
        self.target_summary_chars = (
            target_summary_chars
            if target_summary_chars is not None
            else settings.target_summary_chars
        )
        self.max_suggestions = (
            max_suggestions if max_suggestions is not None else settings.max_suggestions
        )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    @staticmethod
    def validate(req: GenerateRequest) -> None:
        if not is_valid_http_url(req.source_url) or not is_valid_http_url(req.target_url):
            raise InvalidRequestError("Invalid URLs")

    async def fetch(self, req: GenerateRequest) -> Tuple[str, str]:
        source_html, target_html = await self.fetcher.fetch_many(
            [req.source_url, req.target_url]
        )
        return source_html, target_html

    @staticmethod
    def extract(html: str, url: str) -> ExtractedArticle:
        return extract_article(html, url)

    def segment(self, article: ExtractedArticle) -> List[Paragraph]:
        paragraphs = split_paragraphs(article.text_content, self.min_paragraph_length)
        if not paragraphs:
            raise ContentExtractionError("No valid paragraphs found in source article")
        return paragraphs

    async def rank(
        self,
        target: ExtractedArticle,
        paragraphs: Sequence[Paragraph],
    ) -> List[ScoredCandidate]:
        return await self.ranker.rank(target, paragraphs)

    def generate_prompt(
        self,
        req: GenerateRequest,
        target: ExtractedArticle,
        candidates: Sequence[ScoredCandidate],
    ) -> str:
        return build_link_prompt(
            anchor_text=req.anchor_text,
            target_url=req.target_url,
            target_summary=target.text_content[: self.target_summary_chars],
            candidates=candidates,
        )

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def run(self, req: GenerateRequest) -> List[Suggestion]:
        """
        Produce up to ``max_suggestions`` link suggestions for ``req``.

        Raises
        ------
        InvalidRequestError
            Either URL is not an absolute http(s) URL. No I/O is performed.
        ContentExtractionError
            The source article has no usable paragraphs.
        UpstreamFetchError, ModelCallError
            A page fetch or model call failed.
        """
        started = time.perf_counter()
        self.validate(req)

        source_html, target_html = await self.fetch(req)

        source = self.extract(source_html, req.source_url)
        target = self.extract(target_html, req.target_url)

        paragraphs = self.segment(source)
        candidates = await self.rank(target, paragraphs)

        prompt = self.generate_prompt(req, target, candidates)
        raw = await self.llm.complete(prompt, system_prompt=LINK_SYSTEM_PROMPT)

        suggestions = parse_suggestions(raw, limit=self.max_suggestions)

        logger.info(
            "Generated %d suggestions for %s -> %s "
            "(%d paragraphs, %d candidates, %.2fs)",
            len(suggestions),
            req.source_url,
            req.target_url,
            len(paragraphs),
            len(candidates),
            time.perf_counter() - started,
        )
        return suggestions
