"""
XSS sanitization and search-term highlighting.

sanitize_for_xss parses free text with BeautifulSoup, drops dangerous
elements together with their content, and keeps only the text.
sanitize_and_highlight wraps query terms in the single allowed tag
(<mark class="...">), then re-checks so only that tag survives. Both are pure
and never raise.
"""

import html
import re
import warnings
from typing import List

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

# Short inputs such as "vercel.com" look like file names to bs4.
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

HIGHLIGHT_CLASS = "highlight"
_MARK_OPEN = f'<mark class="{HIGHLIGHT_CLASS}">'
_MARK_CLOSE = "</mark>"

# Removed together with their content.
DANGEROUS_TAGS = [
    "script", "style", "iframe", "object", "embed", "form", "input", "button",
    "textarea", "select", "img", "svg", "math", "link", "meta", "noscript", "template",
]

_ANY_TAG_RE = re.compile(r"<[^<>]*>")
_SCHEME_RE = re.compile(r"(?:javascript|vbscript|data)\s*:", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(
    r"\bon[a-z]+\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s>]*)",
    re.IGNORECASE,
)
_WHITESPACE_RE = re.compile(r"\s+")
_ENTITY_RE = r"&(?:[a-z]+|#\d+);"

# Nested payloads can re-form after one pass (e.g. "javajavascript:script:").
_MAX_PASSES = 5


def _text_content(markup: str) -> str:
    soup = BeautifulSoup(markup, "html.parser")
    for element in soup(DANGEROUS_TAGS):
        # Already gone when nested inside an earlier match
        if not element.decomposed:
            element.decompose()
    return soup.get_text()


def _scrub_until_stable(text: str) -> str:
    for _ in range(_MAX_PASSES):
        cleaned = _EVENT_HANDLER_RE.sub("", _SCHEME_RE.sub("", text))
        if cleaned == text:
            break
        text = cleaned
    return text


def sanitize_for_xss(text: str) -> str:
    """
    Reduce text to its plain-text content.

    Dangerous elements (script, style, iframe, ...) vanish with their content,
    other tags are unwrapped, and script-bearing URI schemes and on*= handlers
    are scrubbed from what is left. The result is HTML-escaped and whitespace
    is collapsed. Non-string input yields "".
    """
    if not isinstance(text, str) or not text:
        return ""
    cleaned = _scrub_until_stable(_text_content(text))
    cleaned = html.escape(cleaned, quote=False)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def _query_terms(query: str) -> List[str]:
    terms = [t for t in query.split() if t]
    # Longest first so "react native" highlights before "react".
    return sorted(set(terms), key=len, reverse=True)


def _highlight(sanitized: str, query: str) -> str:
    terms = _query_terms(query)
    if not terms:
        return sanitized
    alternation = "|".join(re.escape(t) for t in terms)
    # Entities are matched first so a term never splits "&lt;".
    pattern = re.compile(f"({_ENTITY_RE})|({alternation})", re.IGNORECASE)

    def replace(match: "re.Match[str]") -> str:
        if match.group(1):
            return match.group(1)
        return f"{_MARK_OPEN}{match.group(2)}{_MARK_CLOSE}"

    return pattern.sub(replace, sanitized)


def _restrict_to_mark(marked: str) -> str:
    """Drop every tag except the exact highlight open/close tags."""

    def keep_mark(match: "re.Match[str]") -> str:
        tag = match.group(0)
        return tag if tag in (_MARK_OPEN, _MARK_CLOSE) else ""

    marked = _ANY_TAG_RE.sub(keep_mark, marked)
    marked = _SCHEME_RE.sub("", marked)
    return _EVENT_HANDLER_RE.sub("", marked)


def sanitize_and_highlight(text: str, query: str) -> str:
    """
    Sanitize text, then wrap case-insensitive query-term matches in <mark>.

    Empty text or query returns the sanitized text unchanged.
    """
    sanitized = sanitize_for_xss(text)
    if not sanitized or not isinstance(query, str) or not query.strip():
        return sanitized
    return _restrict_to_mark(_highlight(sanitized, query))


def create_search_snippet(text: str, query: str, max_length: int = 150) -> str:
    """
    Short highlighted excerpt centred on the first query-term match.

    Falls back to the start of the text when no term matches. Ellipses mark
    truncated ends.
    """
    sanitized = sanitize_for_xss(text)
    if not sanitized:
        return ""
    if max_length <= 0 or len(sanitized) <= max_length:
        return sanitize_and_highlight(sanitized, query or "")

    first = -1
    lowered = sanitized.lower()
    for term in _query_terms(query or ""):
        idx = lowered.find(term.lower())
        if idx != -1 and (first == -1 or idx < first):
            first = idx

    start = 0 if first == -1 else max(0, first - max_length // 2)
    end = min(len(sanitized), start + max_length)
    start = max(0, end - max_length)
    excerpt = sanitized[start:end].strip()
    if start > 0:
        excerpt = "..." + excerpt
    if end < len(sanitized):
        excerpt = excerpt + "..."
    return sanitize_and_highlight(excerpt, query or "")
