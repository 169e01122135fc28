"""
ncm_dump.extract.html
=====================
Pulls the stored configuration out of the Orion config pages.

Both the export handler and the edit page render the config inside a
``<textarea ...>`` element.  The text must be returned exactly as served:
entity references stay encoded and surrounding whitespace is kept, so the
element content is sliced out of the raw document rather than read back
from the parse tree (which would decode it).  BeautifulSoup is only used to
find where each qualifying start tag sits in the source.
"""

import re

from bs4 import BeautifulSoup

# html.parser is the only builder that records source positions
_BS4_PARSER = "html.parser"

_START_TAG_RE = re.compile(r"""<textarea\b(?:[^>"']|"[^"]*"|'[^']*')*>""", re.IGNORECASE)
_END_TAG_RE = re.compile(r"</textarea\s*>", re.IGNORECASE)


def _line_offsets(html: str) -> list[int]:
    """Character offset of the start of every line (html.parser counts on ``\\n``)."""
    offsets = [0]
    offsets.extend(m.end() for m in re.finditer("\n", html))
    return offsets


def extract_textarea(html: str) -> str:
    """
    Return the raw content of the last ``textarea`` that carries attributes.

    Returns an empty string when the document has no such element.
    """
    soup = BeautifulSoup(html, _BS4_PARSER)
    offsets = _line_offsets(html)

    captured = ""
    consumed = 0
    for tag in soup.find_all("textarea"):
        if not tag.attrs or tag.sourceline is None:
            continue
        start = offsets[tag.sourceline - 1] + tag.sourcepos
        # A "<textarea" written inside an earlier textarea is config text
        if start < consumed:
            continue
        start_tag = _START_TAG_RE.match(html, start)
        if start_tag is None:
            continue
        end_tag = _END_TAG_RE.search(html, start_tag.end())
        stop = end_tag.start() if end_tag else len(html)
        captured = html[start_tag.end():stop]
        consumed = end_tag.end() if end_tag else len(html)
    return captured
