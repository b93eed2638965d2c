"""Pull custom emoji references out of chat messages."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final

from .types import AssetReference

__all__ = ["CUSTOM_EMOJI_PATTERN", "extract_emojis", "references_from_message"]

# <:name:id> or <a:name:id>; names may carry a ~N disambiguation suffix.
CUSTOM_EMOJI_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"<a?:(\w+)(?:~\d+)?:(\d+)>", re.ASCII
)

_CACHEABLE_MESSAGE_TYPES: Final[frozenset[int]] = frozenset({0, 19})  # default, reply


def extract_emojis(content: str, collection_name: str) -> list[AssetReference]:
    """Return the custom emojis in ``content``, first occurrence per ID only."""
    emojis: list[AssetReference] = []
    seen: set[str] = set()
    for match in CUSTOM_EMOJI_PATTERN.finditer(content):
        name, emoji_id = match.groups()
        if emoji_id in seen:
            continue
        seen.add(emoji_id)
        emojis.append(
            AssetReference(id=emoji_id, display_name=name, collection_name=collection_name)
        )
    return emojis


def references_from_message(
    message: Mapping[str, Any],
    collection_name: str | None,
) -> list[AssetReference]:
    """Extract cacheable emojis from a message payload.

    Optimistic (not yet acknowledged) messages, messages still sending,
    non-chat message types and messages outside any collection (direct
    messages) yield nothing.
    """
    if message.get("optimistic"):
        return []
    if message.get("type", 0) not in _CACHEABLE_MESSAGE_TYPES:
        return []
    if message.get("state") == "SENDING":
        return []
    if not collection_name:
        return []
    content = message.get("content") or ""
    if not content:
        return []
    return extract_emojis(content, collection_name)
