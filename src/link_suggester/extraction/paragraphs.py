import re
from typing import List

from .models import Paragraph

_BLANK_LINE_SPLIT = re.compile(r"\n{2,}")


def split_paragraphs(text: str, min_length: int = 30) -> List[Paragraph]:
    """
    Split article text on blank lines into candidate paragraphs.

    Segments are trimmed; any segment of ``min_length`` characters or fewer
    is dropped as noise (captions, navigation remnants).
    """
    if not text:
        return []

    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    segments = (seg.strip() for seg in _BLANK_LINE_SPLIT.split(normalized))
    kept = [seg for seg in segments if len(seg) > min_length]

    return [Paragraph(index=i, text=seg) for i, seg in enumerate(kept)]
