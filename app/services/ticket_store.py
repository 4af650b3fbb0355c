"""Persistence of tickets and their message threads."""

import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.models import Base, Ticket, TicketReason, TicketStatus
from app.schemas.ticket import MessageRecord, TicketRecord
from app.utils.logging_config import logger

LOCK_STRIPES = 64


def _to_record(row: Ticket) -> TicketRecord:
    return TicketRecord(
        id=row.id,
        status=row.status,
        sender=row.sender,
        server=row.server,
        reason=row.reason,
        messages=tuple(MessageRecord(**message) for message in row.messages),
    )


def _messages_blob(ticket: TicketRecord) -> list[dict]:
    return [message.model_dump() for message in ticket.messages]


class TicketStore:
    """
    Keyed CRUD over the ``tickets`` table.

    Every call runs in its own transaction and returns fresh value records, so
    callers never share mutable state with the store. ``cached_tickets`` holds
    the result of the latest ``get_all`` for callers that want the last known
    snapshot without querying again.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory
        self._locks = [threading.RLock() for _ in range(LOCK_STRIPES)]
        self.cached_tickets: List[TicketRecord] = []

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            with session.begin():
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Ticket store operation failed: {e}", exc_info=True)
            raise
        finally:
            session.close()

    def initialize(self) -> None:
        """Creates the tickets table if it does not exist."""
        with self._transaction() as session:
            Base.metadata.create_all(session.connection(), tables=[Ticket.__table__])

    @contextmanager
    def locked(self, ticket_id: int) -> Iterator[None]:
        """
        Serializes read-modify-write cycles on a single ticket. Ids share a
        fixed pool of locks, so unrelated tickets may occasionally wait on each other.
        """
        with self._locks[ticket_id % LOCK_STRIPES]:
            yield

    def create(self, ticket: TicketRecord) -> int:
        """Stores a new ticket and returns the id assigned to it."""
        row = Ticket(
            status=ticket.status,
            sender=ticket.sender,
            server=ticket.server,
            reason=ticket.reason,
            messages=_messages_blob(ticket),
        )
        with self._transaction() as session:
            session.add(row)
            session.flush()
            return row.id

    def new_ticket(
        self, text: str, reason: TicketReason, sender: str, server: str
    ) -> TicketRecord:
        """
        Creates an open ticket whose thread starts with ``text`` and stores it.

        Args:
            text: Body of the first message.
            reason: Topic of the ticket.
            sender: Identity of the creator.
            server: Label of the originating server.

        Returns:
            The stored ticket carrying its assigned id.
        """
        ticket = TicketRecord(
            status=TicketStatus.OPEN,
            sender=sender,
            server=server,
            reason=reason,
            messages=(MessageRecord(sender=sender, text=text),),
        )
        return ticket.model_copy(update={"id": self.create(ticket)})

    def delete(self, ticket: TicketRecord) -> None:
        with self._transaction() as session:
            session.execute(delete(Ticket).where(Ticket.id == ticket.id))

    def update(self, ticket: TicketRecord) -> bool:
        """
        Writes the mutable fields (status and messages) of a stored ticket.
        Returns False if the ticket no longer exists.
        """
        with self._transaction() as session:
            row = session.execute(
                select(Ticket).where(Ticket.id == ticket.id).with_for_update()
            ).scalar_one_or_none()
            if row is None:
                return False
            row.status = ticket.status
            row.messages = _messages_blob(ticket)
        return True

    def get_by_id(self, ticket_id: int) -> Optional[TicketRecord]:
        with self._transaction() as session:
            row = session.get(Ticket, ticket_id)
            return _to_record(row) if row is not None else None

    def get_all(self) -> List[TicketRecord]:
        """Queries every ticket in creation order and refreshes the cache."""
        with self._transaction() as session:
            rows = session.execute(select(Ticket).order_by(Ticket.id)).scalars().all()
            tickets = [_to_record(row) for row in rows]
        self.cached_tickets = tickets
        return list(tickets)

    def get_by_sender(self, name: str) -> List[TicketRecord]:
        with self._transaction() as session:
            rows = (
                session.execute(
                    select(Ticket)
                    .where(func.lower(Ticket.sender) == name.lower())
                    .order_by(Ticket.id)
                )
                .scalars()
                .all()
            )
            return [_to_record(row) for row in rows]
