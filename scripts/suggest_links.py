import argparse
import asyncio
import json
import os
import sys

# Ensure src is in pythonpath
sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from dotenv import load_dotenv
load_dotenv()

from link_suggester.api.dependencies import (
    build_embedder,
    build_llm_client,
    build_page_fetcher,
    build_pipeline,
)
from link_suggester.api.models import GenerateRequest, GenerateResponse
from link_suggester.config import settings
from link_suggester.core.errors import LinkSuggesterError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Suggest where an article could link to a target page.",
    )
    parser.add_argument("source_url", help="Article to insert the link into")
    parser.add_argument("target_url", help="Page the link should point to")
    parser.add_argument("anchor_text", help="Visible text of the link")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)

    pipeline = build_pipeline(
        settings,
        fetcher=build_page_fetcher(settings),
        embedder=build_embedder(settings),
        llm=build_llm_client(settings),
    )
    req = GenerateRequest(
        source_url=args.source_url,
        target_url=args.target_url,
        anchor_text=args.anchor_text,
    )

    try:
        suggestions = await pipeline.run(req)
    except LinkSuggesterError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    response = GenerateResponse(suggestions=suggestions)
    print(json.dumps(response.model_dump(by_alias=True), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
