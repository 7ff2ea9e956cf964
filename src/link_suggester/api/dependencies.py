from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from ..config import Settings, settings
from ..llm.client import LLMClient
from ..embeddings.embedder import Embedder
from ..embeddings.ranking import SimilarityRanker
from ..suggestions.pipeline import LinkSuggestionPipeline
from ..web.fetcher import PageFetcher


# ---------------------------------------------------------------------
# Builders (explicit configuration, shared with scripts/)
# ---------------------------------------------------------------------

def build_page_fetcher(config: Settings) -> PageFetcher:
    return PageFetcher(
        user_agent=config.user_agent,
        timeout=config.fetch_timeout,
    )


def build_llm_client(config: Settings) -> LLMClient:
    return LLMClient(
        api_key=config.openai_api_key.get_secret_value(),
        model=config.completion_model,
        base_url=config.openai_base_url,
        timeout=config.llm_timeout,
        temperature=config.llm_temperature,
    )


def build_embedder(config: Settings) -> Embedder:
    return Embedder(
        api_key=config.openai_api_key.get_secret_value(),
        model=config.embedding_model,
        base_url=config.openai_base_url,
        timeout=config.embedding_timeout,
        batch_size=config.embedding_batch_size,
        concurrency=config.embedding_concurrency,
    )


def build_pipeline(
    config: Settings,
    fetcher: PageFetcher,
    embedder: Embedder,
    llm: LLMClient,
) -> LinkSuggestionPipeline:
    return LinkSuggestionPipeline(
        fetcher=fetcher,
        ranker=SimilarityRanker(
            embedder,
            top_k=config.top_k_candidates,
            max_paragraphs=config.max_candidate_paragraphs,
            target_chars=config.target_embed_chars,
        ),
        llm=llm,
        min_paragraph_length=config.min_paragraph_length,
        target_summary_chars=config.target_summary_chars,
        max_suggestions=config.max_suggestions,
    )


# ---------------------------------------------------------------------
# FastAPI Dependencies
# ---------------------------------------------------------------------

def get_settings() -> Settings:
    return settings


@lru_cache
def get_page_fetcher() -> PageFetcher:
    return build_page_fetcher(settings)


@lru_cache
def get_llm_client() -> LLMClient:
    return build_llm_client(settings)


@lru_cache
def get_embedder() -> Embedder:
    return build_embedder(settings)


def get_pipeline(
    config: Annotated[Settings, Depends(get_settings)],
    fetcher: Annotated[PageFetcher, Depends(get_page_fetcher)],
    embedder: Annotated[Embedder, Depends(get_embedder)],
    llm: Annotated[LLMClient, Depends(get_llm_client)],
) -> LinkSuggestionPipeline:
    # Stateless and cheap; built per request from the shared clients.
    return build_pipeline(config, fetcher, embedder, llm)
