from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

Message = Dict[str, Any]

_MESSAGE_KEYS = ("content", "collection", "channel_id", "type", "optimistic", "state")


def _normalize_message(payload: Dict[str, Any]) -> Message:
    normalized = {key: payload[key] for key in _MESSAGE_KEYS if key in payload}
    collection = normalized.get("collection")
    if isinstance(collection, str):
        normalized["collection"] = collection.strip()
    return normalized


def parse_text(text: str, collection: str | None) -> List[Message]:
    return [{"content": text, "collection": (collection or "").strip()}]


def parse_jsonl(path: Path) -> List[Message]:
    messages: List[Message] = []
    with path.open("r", encoding="utf-8") as fh:
        for line_num, raw in enumerate(fh, 1):
            raw = raw.strip()
            if not raw:
                continue
            try:
                payload = json.loads(raw)
            except json.JSONDecodeError as exc:
                raise ValueError(
                    f"Invalid JSON on line {line_num}: {exc}"
                ) from exc
            if not isinstance(payload, dict):
                raise ValueError(f"Line {line_num} is not a JSON object")
            if not isinstance(payload.get("content"), str):
                raise ValueError(f"Message on line {line_num} lacks content")
            if "collection" in payload and not isinstance(payload["collection"], str):
                raise ValueError(
                    f"Message on line {line_num} has a non-string collection"
                )
            messages.append(_normalize_message(payload))
    return messages
