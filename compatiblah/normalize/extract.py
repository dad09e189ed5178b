from __future__ import annotations


def extract_json_object(text: str) -> str:
    """Return the first brace-balanced ``{...}`` span in ``text``.

    Model output is often wrapped in prose or code fences. When no balanced
    span exists the input is returned unchanged, since it may already be bare
    JSON.

    Known limitation: braces inside string literals are counted like
    structural ones, so a value such as ``"a } b"`` ends the span early.
    Closing braces that appear before the first ``{`` also shift the count.
    """
    start = -1
    depth = 0
    for index, char in enumerate(text):
        if char == "{":
            if start == -1:
                start = index
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0 and start != -1:
                return text[start : index + 1]
    return text
