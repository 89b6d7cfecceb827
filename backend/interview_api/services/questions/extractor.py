"""
Recover a JSON array from free-form model output.

Models wrap JSON in markdown fences, add prose around it, use single quotes
or bare keys, leave trailing commas, and sometimes stop mid-array. ``extract``
tries progressively more invasive strategies and returns the first parse that
yields a list:

1. the text as-is
2. the text with code fences and reasoning tags removed
3. slices of that text: ``[...]``, then ``{...}`` wrapped in brackets, then
   every complete top-level object found by a brace-depth scan
4. each slice again after the ``REPAIRS`` text transforms

Each repair is a pure ``str -> str`` function so it can be tested alone.
"""
import json
import re
from typing import Any, Callable, Iterator

from interview_api.errors import ExtractionError
from interview_api.utils.logger import get_logger, preview

logger = get_logger(__name__)

PREVIEW_CHARS = 200

_FENCE = re.compile(r"```[ \t]*(?:json|javascript|js)?[ \t]*", re.IGNORECASE)
_REASONING_TAGS = (
    re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE),
    re.compile(r"<reasoning>.*?</reasoning>", re.DOTALL | re.IGNORECASE),
)
# Double-quoted JSON string literal, escapes included
_STRING = r'"(?:\\.|[^"\\])*"'
_COMMENT = re.compile(rf"({_STRING})|/\*.*?\*/|//[^\n]*", re.DOTALL)
_TRAILING_COMMA = re.compile(rf"({_STRING})|,(\s*[}}\]])", re.DOTALL)
_BARE_KEY = re.compile(rf"({_STRING})|([{{,]\s*)([A-Za-z_$][\w$-]*)(\s*:)", re.DOTALL)
_SMART_QUOTES = str.maketrans({"“": '"', "”": '"', "‘": "'", "’": "'"})
_SMART_QUOTE = re.compile(rf"({_STRING})|[“”‘’]", re.DOTALL)

_SINGLE_QUOTE_OPENERS = frozenset(":[,{")
_SINGLE_QUOTE_CLOSERS = frozenset(":]},")


# ---------------------------------------------------------------------------
# Repairs
# ---------------------------------------------------------------------------

def normalize_smart_quotes(text: str) -> str:
    """Turn typographic quotes into ASCII ones, except inside string literals."""
    return _SMART_QUOTE.sub(
        lambda m: m.group(1) or m.group(0).translate(_SMART_QUOTES), text
    )


def _closing_single_quote(text: str, start: int) -> int:
    """Index of the quote that ends a single-quoted string opened before ``start``."""
    j = start
    n = len(text)
    while j < n:
        ch = text[j]
        if ch == "\\":
            j += 2
            continue
        if ch == "'":
            k = j + 1
            while k < n and text[k].isspace():
                k += 1
            # An apostrophe inside prose is not followed by a delimiter
            if k == n or text[k] in _SINGLE_QUOTE_CLOSERS:
                return j
        j += 1
    return -1


def single_to_double_quotes(text: str) -> str:
    """Rewrite 'single-quoted' keys and values as JSON strings."""
    out: list[str] = []
    prev = ""
    in_string = False
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
                prev = ch
            i += 1
            continue
        if ch == '"':
            in_string = True
        elif ch == "'" and (prev == "" or prev in _SINGLE_QUOTE_OPENERS):
            end = _closing_single_quote(text, i + 1)
            if end != -1:
                body = text[i + 1:end].replace("\\'", "'")
                body = re.sub(r'(?<!\\)"', r'\\"', body)
                out.append(f'"{body}"')
                prev = '"'
                i = end + 1
                continue
        out.append(ch)
        if not ch.isspace():
            prev = ch
        i += 1
    return "".join(out)


def strip_comments(text: str) -> str:
    """Drop /* block */ and // line comments that sit outside strings."""
    return _COMMENT.sub(lambda m: m.group(1) or "", text)


def quote_bare_keys(text: str) -> str:
    """``{key: 1}`` -> ``{"key": 1}``."""
    def _replace(m: re.Match) -> str:
        if m.group(1) is not None:
            return m.group(1)
        return f'{m.group(2)}"{m.group(3)}"{m.group(4)}'

    return _BARE_KEY.sub(_replace, text)


def strip_trailing_commas(text: str) -> str:
    """``[1, 2,]`` -> ``[1, 2]``."""
    def _replace(m: re.Match) -> str:
        if m.group(1) is not None:
            return m.group(1)
        return m.group(2)

    return _TRAILING_COMMA.sub(_replace, text)


def collapse_control_whitespace(text: str) -> str:
    """Raw newlines and tabs are invalid inside JSON strings."""
    return re.sub(r"[\r\n\t]+", " ", text)


def normalize_whitespace(text: str) -> str:
    return re.sub(r"\s{2,}", " ", text).strip()


# Order matters: quotes are normalized before anything that must recognize
# string literals, and comments go before newlines are collapsed.
REPAIRS: tuple[Callable[[str], str], ...] = (
    normalize_smart_quotes,
    single_to_double_quotes,
    strip_comments,
    quote_bare_keys,
    strip_trailing_commas,
    collapse_control_whitespace,
    normalize_whitespace,
)


def repair(text: str) -> str:
    """Apply every transform in ``REPAIRS`` in order."""
    for transform in REPAIRS:
        text = transform(text)
    return text


# ---------------------------------------------------------------------------
# Slicing
# ---------------------------------------------------------------------------

def strip_markdown(text: str) -> str:
    """Remove code fences and reasoning blocks some models emit."""
    for pattern in _REASONING_TAGS:
        text = pattern.sub("", text)
    return _FENCE.sub("", text).strip()


def split_top_level_objects(text: str) -> list[str]:
    """
    Return every balanced top-level ``{...}`` in ``text``, in order.
    Braces inside double-quoted strings are ignored, and an object cut off by
    truncation is dropped.
    """
    objects: list[str] = []
    depth = 0
    start = -1
    in_string = False
    escape = False
    for i, ch in enumerate(text):
        if escape:
            escape = False
            continue
        if in_string:
            if ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                objects.append(text[start:i + 1])
    return objects


def _candidates(cleaned: str) -> Iterator[tuple[str, str]]:
    first_bracket = cleaned.find("[")
    last_bracket = cleaned.rfind("]")
    if first_bracket != -1 and first_bracket < last_bracket:
        yield "array_slice", cleaned[first_bracket:last_bracket + 1]

    first_brace = cleaned.find("{")
    last_brace = cleaned.rfind("}")
    if first_brace != -1 and first_brace < last_brace:
        yield "object_slice", "[" + cleaned[first_brace:last_brace + 1] + "]"
        objects = split_top_level_objects(cleaned)
        if objects:
            yield "object_scan", "[" + ",".join(objects) + "]"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _parse_array(text: str) -> list[Any] | None:
    """Parse ``text``; a lone object is wrapped in a list, anything else is rejected."""
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, ValueError, RecursionError):
        # RecursionError: nesting deeper than the decoder's stack allows
        return None
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        return [value]
    return None


def _fail(message: str, raw_text: str) -> ExtractionError:
    err = ExtractionError(
        message,
        raw_length=len(raw_text),
        head=preview(raw_text[:PREVIEW_CHARS], PREVIEW_CHARS),
        tail=preview(raw_text[-PREVIEW_CHARS:], PREVIEW_CHARS),
    )
    logger.warning(
        "JSON extraction failed: %s",
        message,
        extra={"raw_length": err.raw_length, "head": err.head, "tail": err.tail},
    )
    return err


def extract(raw_text: str) -> list[Any]:
    """
    Return the JSON array contained in ``raw_text``.
    Raises ExtractionError when nothing parseable is found.
    """
    if raw_text is None or not raw_text.strip():
        raise _fail("Empty response text", raw_text or "")

    logger.debug("Extracting JSON (direct)", extra={"preview": preview(raw_text)})
    parsed = _parse_array(raw_text)
    if parsed is not None:
        return parsed

    cleaned = strip_markdown(raw_text)
    logger.debug("Extracting JSON (markdown stripped)", extra={"preview": preview(cleaned)})
    parsed = _parse_array(cleaned)
    if parsed is not None:
        return parsed

    if "[" not in cleaned and "{" not in cleaned:
        raise _fail("No JSON structure found in response", raw_text)

    for strategy, candidate in _candidates(cleaned):
        logger.debug(f"Extracting JSON ({strategy})", extra={"preview": preview(candidate)})
        parsed = _parse_array(candidate)
        if parsed is None:
            parsed = _parse_array(repair(candidate))
        if parsed is not None:
            logger.info(f"Recovered JSON array with {len(parsed)} items via {strategy}")
            return parsed

    raise _fail("Could not repair JSON in response", raw_text)
