import json
from typing import Any, Optional

def dump_body(body: dict) -> Optional[bytes]:
    """Serialize a request body; None if it isn't JSON-serializable."""
    try:
        return json.dumps(body, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError):
        return None

def first_choice_content(data: Any) -> Optional[str]:
    """
    Pull choices[0].message.content out of a chat-completion payload.
    Returns None on any shape mismatch (missing keys, empty choices, non-str content).
    """
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None
