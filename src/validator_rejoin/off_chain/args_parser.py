"""
Reparse the "args:" blob copied from the browser console into a Python list.

Two renderings are accepted:
  - a JSON array:           [ "0x...", [...], {...}, ... ]
  - a tuple-like rendering: ( '0x...', [...], {...}, ... )

Tuple parts are split on top-level commas only (commas nested inside (), {}, []
or quoted strings belong to their part), then each part gets a best-effort type
coercion. Anything the coercion can't type is left as a string for the ABI
encoder to deal with.
"""
import re
import json
import logging
from typing import Any, Dict, List, Optional

from validator_rejoin.errors import ArgsParseError

logger = logging.getLogger(__name__)

ARGS_LABEL_RE = re.compile(r"^args\s*:", re.IGNORECASE)
PREVIEW_CHARS = 150

_OPENERS = {"(": ")", "{": "}", "[": "]"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}


def strip_args_label(text: str) -> str:
    return ARGS_LABEL_RE.sub("", text.strip(), count=1).strip()


def split_top_level(text: str, sep: str = ",") -> List[str]:
    """
    Split `text` on `sep` where it sits outside any bracket pair or string literal.
    Interior empty parts are kept as ""; a trailing empty part is dropped.
    """
    parts: List[str] = []
    current: List[str] = []
    depth = {"(": 0, "{": 0, "[": 0}
    quote = ""
    escaped = False

    for char in text:
        if quote:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = ""
            continue

        if char in ("'", '"'):
            quote = char
        elif char in _OPENERS:
            depth[char] += 1
        elif char in _CLOSERS:
            depth[_CLOSERS[char]] -= 1
        elif char == sep and not any(depth.values()):
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    last = "".join(current).strip()
    if last:
        parts.append(last)
    if quote:
        logger.warning("Unterminated %s string literal in args data", quote)
    return parts


def _is_quoted(part: str) -> bool:
    return len(part) >= 2 and part[0] == part[-1] and part[0] in ("'", '"')


def _unquote(part: str) -> str:
    # only the enclosing quote and the backslash itself are unescaped
    quote = part[0]
    return re.sub(r"\\(\\|" + re.escape(quote) + ")", r"\1", part[1:-1])


def _parse_loose_object(body: str) -> Optional[Dict[str, Any]]:
    """`key: value` entries with bare or quoted keys; None if an entry has no key."""
    obj: Dict[str, Any] = {}
    for entry in split_top_level(body):
        if not entry:
            continue
        key_parts = split_top_level(entry, ":")
        if len(key_parts) < 2 and not entry.endswith(":"):
            return None
        key = key_parts[0]
        value = entry[len(key):].lstrip()[1:]
        obj[_unquote(key) if _is_quoted(key) else key] = coerce_part(value)
    return obj


def coerce_part(part: str) -> Any:
    part = part.strip()
    if not part:
        return None

    is_array = part.startswith("[") and part.endswith("]")
    is_object = part.startswith("{") and part.endswith("}")
    if is_array or is_object:
        try:
            return json.loads(part)
        except json.JSONDecodeError as e:
            logger.debug("Part is not JSON (%s), parsing as console rendering: %s...", e, part[:50])
        if is_array:
            return [coerce_part(p) for p in split_top_level(part[1:-1])]
        obj = _parse_loose_object(part[1:-1])
        if obj is None:
            logger.warning("Could not parse part as an object: %s... Treating as string.", part[:50])
            return part
        return obj

    if _is_quoted(part):
        return _unquote(part)

    lowered = part.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered in ("null", "undefined"):
        return None
    return part


def parse_tuple_body(body: str) -> List[Any]:
    return [coerce_part(p) for p in split_top_level(body)]


def parse_args_data(args_input: str) -> List[Any]:
    print("🔧 Parsing arguments data...")

    if not args_input or not args_input.strip():
        raise ArgsParseError("No input data provided for parsing.")

    clean = strip_args_label(args_input)

    # Attempt 1: JSON array
    if clean.startswith("[") and clean.endswith("]"):
        try:
            parsed = json.loads(clean)
            print("   ✅ Successfully parsed as JSON array.")
            return parsed
        except json.JSONDecodeError as e:
            print(f"   ⚠️ Direct JSON parsing failed: {e}. Splitting array contents instead.")
            logger.warning("JSON array parse failed at pos %s", e.pos)
        parsed = parse_tuple_body(clean[1:-1].strip())
        print(f"   ✅ Parsed array into {len(parsed)} parts.")
        return parsed

    # Attempt 2: tuple rendering
    if clean.startswith("(") and clean.endswith(")"):
        print("   🔧 Attempting to parse as tuple format...")
        parsed = parse_tuple_body(clean[1:-1].strip())
        print(f"   ✅ Parsed tuple into {len(parsed)} parts.")
        return parsed

    raise ArgsParseError(
        "Invalid input format. Expected JSON array '[ ... ]' or tuple '( ... )'. "
        f"Received: {clean[:PREVIEW_CHARS]}..."
    )
