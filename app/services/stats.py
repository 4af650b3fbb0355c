"""Corpus-wide ticket statistics."""

from collections import Counter
from typing import Dict, Optional, Sequence

from app.models.ticket import TicketReason
from app.schemas.ticket import Stats, TicketRecord


def count_reasons(tickets: Sequence[TicketRecord]) -> Dict[TicketReason, int]:
    return dict(Counter(ticket.reason for ticket in tickets))


def active_users(tickets: Sequence[TicketRecord], window: int = 5) -> int:
    """Distinct senders among the ``window`` most recently created tickets."""
    if window <= 0:
        return 0
    recent = list(tickets)[-window:]
    return len({ticket.sender.lower() for ticket in recent})


def response_gap(ticket: TicketRecord) -> Optional[int]:
    """
    Number of messages between the opening message and the first reply from
    someone else. None if nobody else has written in the thread.
    """
    opener = ticket.messages[0].sender.lower()
    for index, message in enumerate(ticket.messages[1:], start=1):
        if message.sender.lower() != opener:
            return index
    return None


def average_response_time(tickets: Sequence[TicketRecord]) -> float:
    gaps = [gap for gap in map(response_gap, tickets) if gap is not None]
    if not gaps:
        return 0.0
    return sum(gaps) / len(gaps)


class StatsAggregator:
    def __init__(self, window: int = 5):
        self.window = window

    def gather(self, tickets: Sequence[TicketRecord]) -> Stats:
        """Recomputes all statistics from ``tickets``, which must be in creation order."""
        return Stats(
            counts_by_reason=count_reasons(tickets),
            active_users=active_users(tickets, self.window),
            average_response_time=average_response_time(tickets),
        )
