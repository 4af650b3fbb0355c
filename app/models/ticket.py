"""Ticket model for tracking support requests."""

import enum

from sqlalchemy import Enum as EnumType
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base
from app.models.message import MessageList


class TicketStatus(enum.Enum):
    OPEN = "open"
    ANSWERED = "answered"
    CLOSED = "closed"


class TicketReason(enum.Enum):
    BUG = "bug"
    GRIEFING = "griefing"
    CHEATING = "cheating"
    PLAYER = "player"
    QUESTION = "question"
    OTHER = "other"


class Ticket(Base):
    __tablename__ = "tickets"
    # Ids of deleted tickets are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    status: Mapped[TicketStatus] = mapped_column(
        EnumType(TicketStatus, native_enum=False),
        nullable=False,
        default=TicketStatus.OPEN,
    )
    sender: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True, comment="Identity of the ticket creator."
    )
    server: Mapped[str] = mapped_column(
        String(64), nullable=False, comment="Server instance the ticket came from."
    )
    reason: Mapped[TicketReason] = mapped_column(
        EnumType(TicketReason, native_enum=False), nullable=False
    )
    messages: Mapped[list[dict]] = mapped_column(MessageList, nullable=False)

    def __repr__(self) -> str:
        return f"<Ticket(id={self.id}, status='{self.status.value}')>"
