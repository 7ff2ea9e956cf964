import os

# Settings are instantiated at import time; provide a fake credential first.
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")

import pytest

from link_suggester.extraction.models import ExtractedArticle, Paragraph


ARTICLE_HTML = """
<html>
  <head><title>Growing Tomatoes at Home | Garden Blog</title></head>
  <body>
    <nav><a href="/">Home</a> <a href="/about">About</a></nav>
    <article>
      <h1>Growing Tomatoes at Home</h1>
      <p>Tomatoes need at least six hours of direct sunlight every day to
         produce a healthy crop, so pick the sunniest corner of the garden.</p>
      <p>Water deeply but infrequently. Shallow watering encourages weak
         roots, while a thorough soak twice a week builds drought tolerance.</p>
      <p>Feed the plants with a balanced fertilizer once the first fruits
         appear, and switch to a potassium-rich feed as the season goes on.</p>
      <p>Short.</p>
    </article>
    <footer>Copyright 2024 Garden Blog</footer>
  </body>
</html>
"""


@pytest.fixture
def article_html():
    return ARTICLE_HTML


@pytest.fixture
def target_article():
    return ExtractedArticle(
        title="Soil pH for Vegetables",
        text_content="Most vegetables prefer slightly acidic soil.\n\n" + "x" * 3000,
    )


@pytest.fixture
def paragraphs():
    texts = [
        "Tomatoes need plenty of direct sunlight to produce fruit.",
        "Water deeply but infrequently to build strong roots.",
        "Feed the plants once the first fruits begin to appear.",
    ]
    return [Paragraph(index=i, text=t) for i, t in enumerate(texts)]
