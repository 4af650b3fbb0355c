"""Pydantic value records for tickets and the payloads built from them."""

import enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from app.models.ticket import TicketReason, TicketStatus

UNSAVED_ID = -1


class MessageRecord(BaseModel):
    sender: str
    text: str

    model_config = {"frozen": True}


class TicketRecord(BaseModel):
    """
    Immutable snapshot of a ticket.

    Changes are made by building a new record with ``with_status`` or
    ``with_message`` and handing it back to the store.
    """

    id: int = Field(default=UNSAVED_ID, description="Assigned by the store.")
    status: TicketStatus = TicketStatus.OPEN
    sender: str
    server: str
    reason: TicketReason
    messages: Tuple[MessageRecord, ...] = Field(..., min_length=1)

    model_config = {"frozen": True}

    @property
    def is_persisted(self) -> bool:
        return self.id != UNSAVED_ID

    @property
    def short_id(self) -> str:
        return f"#{self.id}"

    def participants(self) -> List[str]:
        """Distinct message authors in order of first appearance."""
        seen: Dict[str, str] = {}
        for message in self.messages:
            seen.setdefault(message.sender.lower(), message.sender)
        return list(seen.values())

    def with_status(self, status: TicketStatus) -> "TicketRecord":
        return self.model_copy(update={"status": status})

    def with_message(self, message: MessageRecord) -> "TicketRecord":
        return self.model_copy(update={"messages": self.messages + (message,)})


class Stats(BaseModel):
    counts_by_reason: Dict[TicketReason, int]
    active_users: int
    average_response_time: float


class TicketOutcome(enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    DENIED = "denied"
    REJECTED = "rejected"


class TicketResult(BaseModel):
    outcome: TicketOutcome
    ticket: Optional[TicketRecord] = None
    detail: Optional[str] = None


class SyncResult(BaseModel):
    admin_access: bool
    stats: Optional[Stats] = None
    tickets: List[TicketRecord]


class NewTicketRequest(BaseModel):
    text: str
    reason: TicketReason


class AddMessageRequest(BaseModel):
    text: str


class UpdateStatusRequest(BaseModel):
    status: TicketStatus
