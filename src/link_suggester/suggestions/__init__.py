"""
Suggestions Package

Provides the request pipeline that turns a source article, a target URL and
anchor text into link-insertion suggestions.
"""

from .pipeline import LinkSuggestionPipeline

__all__ = [
    "LinkSuggestionPipeline",
]
