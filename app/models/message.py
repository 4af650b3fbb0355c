"""Column type storing a ticket's message thread as a single JSON blob."""

import json
from typing import Any

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

MESSAGES_FORMAT_VERSION = 1


class MessageList(TypeDecorator):
    """
    Serializes an ordered list of ``{"sender": ..., "text": ...}`` dicts.

    Stored as ``{"version": 1, "messages": [...]}``. A bare JSON list, as written
    by older deployments, is accepted on read.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> str | None:
        if value is None:
            return None
        messages = [{"sender": m["sender"], "text": m["text"]} for m in value]
        return json.dumps({"version": MESSAGES_FORMAT_VERSION, "messages": messages})

    def process_result_value(self, value: str | None, dialect) -> list[dict] | None:
        if value is None:
            return None
        payload = json.loads(value)
        if isinstance(payload, list):
            return payload
        version = payload.get("version")
        if version != MESSAGES_FORMAT_VERSION:
            raise ValueError(f"Unsupported messages format version: {version}")
        return payload["messages"]
