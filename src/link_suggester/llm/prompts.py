"""
Prompt templates for link-insertion suggestions.
"""

from __future__ import annotations

from typing import Sequence

from ..embeddings.models import ScoredCandidate

LINK_SYSTEM_PROMPT = (
    "You suggest natural hyperlink insertions in existing articles. "
    "You never invent text that is not in the candidate paragraphs."
)

LINK_USER_PROMPT = """\
Anchor Text: "{anchor_text}"
Target URL: {target_url}

Target Article Summary:
{target_summary}

Candidate paragraphs from source:
{candidate_blocks}

Rules:
- Return ONLY JSON in this format:
[
  {{ "originalText": "...", "suggestedChange": "..." }}
]
- 1 to 3 suggestions only.
- "originalText" must be copied exactly from one candidate paragraph.
- Each suggestedChange MUST include:
  {anchor_tag}
"""

CANDIDATE_SEPARATOR = "\n\n---\n\n"


def anchor_tag(target_url: str, anchor_text: str) -> str:
    return f'<a href="{target_url}">{anchor_text}</a>'


def format_candidates(candidates: Sequence[ScoredCandidate]) -> str:
    return CANDIDATE_SEPARATOR.join(
        f"CANDIDATE_{i}:\n{c.text}" for i, c in enumerate(candidates, start=1)
    )


def build_link_prompt(
    anchor_text: str,
    target_url: str,
    target_summary: str,
    candidates: Sequence[ScoredCandidate],
) -> str:
    """
    Build the user prompt asking for 1-3 JSON link suggestions.

    ``target_summary`` is inserted as given; callers truncate it.
    """
    return LINK_USER_PROMPT.format(
        anchor_text=anchor_text,
        target_url=target_url,
        target_summary=target_summary,
        candidate_blocks=format_candidates(candidates),
        anchor_tag=anchor_tag(target_url, anchor_text),
    )
