from __future__ import annotations

import re

DEFAULT_MAX_CHARS = 600

_JSON_HINTS_RE = re.compile(r'```json|"\s*schedule"\s*:|\{\s*"schedule"\s*:', re.I)
_INSTRUCTION_WORDS_RE = re.compile(
    r'(출력 형식|반드시|JSON 형식|activities|type"\s*:\s*"(task|lifestyle)'
    r"|day:\s*\d|weekday|notes)",
    re.I,
)
_SECTION_HEADERS_RE = re.compile(r"(\[생활 패턴\]|\[할 일 목록\]|\[반드시 지켜야 할 규칙\])")


def looks_like_system_prompt(text: str | None, *, max_chars: int = DEFAULT_MAX_CHARS) -> bool:
    """Heuristic pre-save filter: True when text reads like model instructions, not user input."""
    if not text:
        return False
    if len(text) > max_chars:
        return True
    return bool(
        _JSON_HINTS_RE.search(text)
        or _INSTRUCTION_WORDS_RE.search(text)
        or _SECTION_HEADERS_RE.search(text)
    )
