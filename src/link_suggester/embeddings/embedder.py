"""
Embedding Client

This module implements a test-friendly embedding client for the OpenAI
embeddings API (or any compatible provider). It is responsible for:

- Batching text inputs
- Bounded-concurrency fan-out of batch requests
- Network and transport error isolation
- Strict response validation
- Deterministic output order (results follow input order, never arrival order)

The class is stateless and safe to reuse across requests.
"""

from __future__ import annotations

from typing import List, Sequence, Optional
import asyncio
import logging
import httpx

from ..config import settings
from ..core.concurrency import gather_or_cancel
from ..core.errors import ModelCallError

logger = logging.getLogger("linksuggest.embedder")


class EmbeddingError(ModelCallError):
    """Raised when embedding generation fails."""


class Embedder:
    """
    Asynchronous embedding generator for batches of text.

    This class performs no caching.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        batch_size: Optional[int] = None,
        concurrency: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize an Embedder.

        Parameters
        ----------
        api_key : Optional[str]
            Optional override for the API key. Defaults to settings.openai_api_key.

        model : Optional[str]
            Optional override for embedding model. Defaults to settings.embedding_model.

        base_url : Optional[str]
            API root; ``/embeddings`` is appended. Defaults to settings.openai_base_url.

        timeout : Optional[float]
            HTTP timeout for each request.

        batch_size : Optional[int]
            Maximum number of texts per request.

        concurrency : Optional[int]
            Maximum number of requests in flight at once.

        transport : Optional[httpx.AsyncBaseTransport]
            Custom transport, used by tests.
        """
        self.api_key = api_key or settings.openai_api_key.get_secret_value()
        self.model = model or settings.embedding_model
        self.endpoint = (base_url or settings.openai_base_url).rstrip("/") + "/embeddings"
        self.timeout = timeout if timeout is not None else settings.embedding_timeout
        self.batch_size = max(
            1, batch_size if batch_size is not None else settings.embedding_batch_size
        )
        self.concurrency = max(
            1, concurrency if concurrency is not None else settings.embedding_concurrency
        )
        self._transport = transport

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """
        Generate embeddings for a sequence of input texts.

        Batches are sent concurrently (at most ``concurrency`` at a time) and
        reassembled by batch position. The first failing batch cancels the
        others.

        Parameters
        ----------
        texts : Sequence[str]
            List or sequence of input text strings.

        Returns
        -------
        List[List[float]]
            One embedding per input text, in input order.

        Raises
        ------
        EmbeddingError
            If any batch fails or the response is malformed.
        """
        if not texts:
            return []

        batches = [
            list(texts[start : start + self.batch_size])
            for start in range(0, len(texts), self.batch_size)
        ]
        semaphore = asyncio.Semaphore(self.concurrency)
        headers = {"Authorization": f"Bearer {self.api_key}"}

        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
        ) as client:

            async def _run(batch: List[str]) -> List[List[float]]:
                async with semaphore:
                    return await self._embed_batch(client, headers, batch)

            # Cancels the remaining batches before the client closes
            results = await gather_or_cancel(*(_run(batch) for batch in batches))

        all_embeddings: List[List[float]] = []
        for batch_embeddings in results:
            all_embeddings.extend(batch_embeddings)

        if len(all_embeddings) != len(texts):
            raise EmbeddingError(
                f"Expected {len(texts)} embeddings, received {len(all_embeddings)}."
            )

        return all_embeddings

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _embed_batch(
        self,
        client: httpx.AsyncClient,
        headers: dict,
        batch: List[str],
    ) -> List[List[float]]:
        payload = {
            "model": self.model,
            "input": batch,
        }

        try:
            response = await client.post(
                self.endpoint,
                json=payload,
                headers=headers,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error(
                "Embedding request failed (%s): batch size=%d, error=%s",
                type(exc).__name__,
                len(batch),
                str(exc),
            )
            raise EmbeddingError(
                f"Embedding generation failed: {type(exc).__name__}"
            ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise EmbeddingError("Embedding response is not valid JSON.") from exc

        embeddings = self._extract_embeddings(data)
        if len(embeddings) != len(batch):
            raise EmbeddingError(
                f"Embedding response size mismatch: sent {len(batch)}, "
                f"received {len(embeddings)}."
            )
        return embeddings

    @staticmethod
    def _extract_embeddings(data: dict) -> List[List[float]]:
        """
        Parse and validate embedding output format.

        OpenAI returns:
            { "data": [ {"index": 0, "embedding": [...]}, ... ] }

        Records are ordered by ``index`` when every record carries one.

        Raises
        ------
        EmbeddingError
            If the API returns unexpected structure.
        """
        if not isinstance(data, dict) or "data" not in data:
            raise EmbeddingError("Embedding response missing 'data' field.")

        records = data["data"]
        if not isinstance(records, list):
            raise EmbeddingError("'data' field must be a list.")

        for index, record in enumerate(records):
            if not isinstance(record, dict) or "embedding" not in record:
                raise EmbeddingError(
                    f"Malformed embedding record at index {index}: {record!r}"
                )

        if all(isinstance(r.get("index"), int) for r in records):
            records = sorted(records, key=lambda r: r["index"])

        embeddings: List[List[float]] = []

        for index, record in enumerate(records):
            emb = record["embedding"]
            if not isinstance(emb, list) or not all(
                isinstance(x, (float, int)) for x in emb
            ):
                raise EmbeddingError(
                    f"Invalid embedding vector at index {index}: must be float list."
                )

            embeddings.append([float(x) for x in emb])

        return embeddings
