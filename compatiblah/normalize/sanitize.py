from __future__ import annotations

import re

# Literal fixes for the trailing-comma shapes models emit most often.
_TRAILING_COMMA_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    (",}", "}"),
    (", }", " }"),
    (",\n}", "\n}"),
    (",\r\n}", "\r\n}"),
    (",\r}", "\r}"),
    (" ,}", "}"),
    (" , }", " }"),
    (",]", "]"),
    (", ]", " ]"),
    (",\n]", "\n]"),
    (",\r\n]", "\r\n]"),
    (",\r]", "\r]"),
    (" ,]", "]"),
    (" , ]", " ]"),
)

# A comma whose next significant character closes an object or array.
# Commas are skipped in the lookahead too, so a run like ",,}" goes in one pass.
_DANGLING_COMMA_RE = re.compile(r",(?=[ \t\r\n,]*[}\]])")


def split_string_literals(text: str) -> list[tuple[bool, str]]:
    """Split ``text`` into ``(is_string_literal, chunk)`` pieces.

    A backslash always consumes the next character, inside or outside a
    literal. An unterminated literal runs to the end of the text.
    """
    segments: list[tuple[bool, str]] = []
    buffer: list[str] = []
    in_string = False
    escaped = False

    for char in text:
        if escaped:
            buffer.append(char)
            escaped = False
            continue
        if char == "\\":
            buffer.append(char)
            escaped = True
            continue
        if char == '"':
            if in_string:
                buffer.append(char)
                segments.append((True, "".join(buffer)))
                buffer = []
                in_string = False
            else:
                if buffer:
                    segments.append((False, "".join(buffer)))
                buffer = [char]
                in_string = True
            continue
        buffer.append(char)

    if buffer:
        segments.append((in_string, "".join(buffer)))
    return segments


def _replace_known_patterns(chunk: str) -> str:
    for pattern, replacement in _TRAILING_COMMA_REPLACEMENTS:
        chunk = chunk.replace(pattern, replacement)
    return chunk


def _drop_dangling_commas(chunk: str) -> str:
    return _DANGLING_COMMA_RE.sub("", chunk)


def sanitize_json(text: str) -> str:
    """Remove trailing commas before ``}``/``]`` without touching string values.

    Both passes only see the text between string literals. The result is a
    fixed point: ``sanitize_json(sanitize_json(x)) == sanitize_json(x)``.
    """
    cleaned = "".join(
        chunk if is_string else _replace_known_patterns(chunk)
        for is_string, chunk in split_string_literals(text)
    )
    return "".join(
        chunk if is_string else _drop_dangling_commas(chunk)
        for is_string, chunk in split_string_literals(cleaned)
    )
