"""HTML rendering for a selected quote.

The template is plain HTML with `{{author}}`, `{{title}}`, `{{link}}`,
`{{paragraph}}` and `{{time}}` placeholders. Free text is cleaned of
characters that break the template's inline strings; this is not full
HTML escaping.
"""

import logging
from pathlib import Path
import time

from litclock.services.quote_store import Quote

logger = logging.getLogger("uvicorn.error")

DEFAULT_TEMPLATE = Path(__file__).resolve().parent.parent / "templates" / "clock.html"

# Replacements applied to author, title and paragraph
_CLEAN_MAP = str.maketrans({"\n": " ", "\r": " ", '"': None, "\\": None, "_": None})


def clean_text(value: str) -> str:
    """Strip newlines, quotes, backslashes and underscores."""
    return value.translate(_CLEAN_MAP)


def load_template(path: str | None = None) -> str:
    """Read the HTML template.

    Args:
        path: Template file to use instead of the packaged clock.html.
    """
    if path:
        return Path(path).read_text(encoding="utf-8")
    return DEFAULT_TEMPLATE.read_text(encoding="utf-8")


def render_html(quote: Quote, hour: int, minute: int, template: str) -> str:
    """Substitute a quote into the template.

    `hour` and `minute` are the requested values, shown as "H:M".
    """
    started = time.perf_counter()
    html = template.replace("{{author}}", clean_text(quote.author))
    html = html.replace("{{title}}", clean_text(quote.title))
    html = html.replace("{{link}}", quote.link)
    html = html.replace("{{paragraph}}", clean_text(quote.text))
    html = html.replace("{{time}}", f"{hour}:{minute}")
    logger.debug(f"html elapsed: {(time.perf_counter() - started) * 1000:.3f}ms")
    return html
