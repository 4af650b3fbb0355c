"""Exports all models for easy access."""

from .base import Base
from .message import MessageList
from .ticket import Ticket, TicketReason, TicketStatus

__all__ = [
    "Base",
    "Ticket",
    "TicketStatus",
    "TicketReason",
    "MessageList",
]
