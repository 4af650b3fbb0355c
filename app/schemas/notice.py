"""Chat notices handed to the actor directory for delivery."""

import enum
from typing import Tuple

from pydantic import BaseModel


class NoticeKind(enum.Enum):
    NEW_TICKET = "chat.messages.add.ticket"
    STATUS_UPDATED = "chat.messages.update.status"
    MESSAGE_ADDED = "chat.messages.add.message"
    TICKET_DELETED = "chat.messages.delete.ticket"
    ACCESS_DENIED = "chat.messages.access.denied"


class Notice(BaseModel):
    """
    A templated message. ``kind.value`` is the translation key the client
    renders with ``params``; ``color`` is a formatting hint.
    """

    kind: NoticeKind
    params: Tuple[str, ...] = ()
    color: str = "gold"

    model_config = {"frozen": True}

    @property
    def fallback_text(self) -> str:
        if self.kind is NoticeKind.ACCESS_DENIED:
            return f"Ooops, you don't have access to ticket with id {self.params[0]}."
        return f"{self.kind.value}: {', '.join(self.params)}"
