"""
Generate Routes

Exposes the single link-suggestion endpoint used by the browser form.

Workflow
--------
1. Validate both URLs (no I/O on failure).
2. Fetch source and target pages concurrently.
3. Extract readable text and segment the source into paragraphs.
4. Rank paragraphs by similarity to the target.
5. Ask the model for suggestions and sanitize its output.

Failures propagate as ``LinkSuggesterError`` subclasses and are rendered by
the handlers registered in ``main.create_app``.
"""

from fastapi import APIRouter, Depends, status
from typing import Annotated

from .models import ErrorResponse, GenerateRequest, GenerateResponse
from .dependencies import get_pipeline
from ..suggestions.pipeline import LinkSuggestionPipeline

router = APIRouter(prefix="/api", tags=["suggestions"])


@router.post(
    "/generate",
    response_model=GenerateResponse,
    summary="Suggest places in an article to link to a target URL",
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate(
    req: GenerateRequest,
    pipeline: Annotated[LinkSuggestionPipeline, Depends(get_pipeline)],
) -> GenerateResponse:
    """
    Return up to three link-insertion suggestions.

    The suggestion list may be empty when the model's output could not be
    parsed; that is not an error.
    """
    # Global exception handlers render pipeline errors
    suggestions = await pipeline.run(req)
    return GenerateResponse(suggestions=suggestions)
