"""Ticket lifecycle operations and the sync request."""

from typing import Callable

from app.config.db import SessionLocal
from app.config.redis import get_redis_client
from app.models.ticket import TicketReason, TicketStatus
from app.schemas.actor import Actor
from app.schemas.notice import NoticeKind
from app.schemas.ticket import (
    MessageRecord,
    SyncResult,
    TicketOutcome,
    TicketRecord,
    TicketResult,
)
from app.services.access_policy import AccessPolicy
from app.services.directory import (
    NullPermissionProvider,
    RedisActorDirectory,
    RedisPermissionProvider,
)
from app.services.notifications import NotificationFanout
from app.services.stats import StatsAggregator
from app.services.ticket_store import TicketStore
from app.settings import settings
from app.utils.logging_config import logger


class TicketService:
    """
    Resolves the target ticket, checks access, mutates through the store and
    only then fans out notices. Missing tickets and blank new tickets are
    silent no-ops reported through ``TicketResult.outcome``.
    """

    def __init__(
        self,
        store: TicketStore,
        policy: AccessPolicy,
        fanout: NotificationFanout,
        stats: StatsAggregator,
        server_name: str = "default",
    ):
        self.store = store
        self.policy = policy
        self.fanout = fanout
        self.stats = stats
        self.server_name = server_name

    def create_ticket(self, text: str, reason: TicketReason, actor: Actor) -> TicketResult:
        if not text.strip():
            logger.debug(f"Ignoring blank ticket from {actor.identity}")
            return TicketResult(outcome=TicketOutcome.REJECTED)
        ticket = self.store.new_ticket(text, reason, actor.identity, self.server_name)
        logger.info(f"Ticket {ticket.short_id} opened by {actor.identity}")
        self.fanout.notify(ticket, actor.identity, NoticeKind.NEW_TICKET)
        return TicketResult(outcome=TicketOutcome.CREATED, ticket=ticket)

    def update_status(
        self, ticket_id: int, status: TicketStatus, actor: Actor
    ) -> TicketResult:
        return self._mutate(
            ticket_id,
            actor,
            NoticeKind.STATUS_UPDATED,
            lambda ticket: ticket.with_status(status),
        )

    def add_message(self, ticket_id: int, text: str, actor: Actor) -> TicketResult:
        message = MessageRecord(sender=actor.identity, text=text)
        return self._mutate(
            ticket_id,
            actor,
            NoticeKind.MESSAGE_ADDED,
            lambda ticket: ticket.with_message(message),
        )

    def delete_ticket(self, ticket_id: int, actor: Actor) -> TicketResult:
        with self.store.locked(ticket_id):
            ticket = self.store.get_by_id(ticket_id)
            if ticket is None:
                return TicketResult(outcome=TicketOutcome.NOT_FOUND)
            if not self.policy.can_access_ticket(ticket, actor):
                return self._deny(ticket, actor)
            self.store.delete(ticket)
        logger.info(f"Ticket {ticket.short_id} deleted by {actor.identity}")
        self.fanout.notify(ticket, actor.identity, NoticeKind.TICKET_DELETED)
        return TicketResult(outcome=TicketOutcome.DELETED, ticket=ticket)

    def sync(self, actor: Actor) -> SyncResult:
        """Management sees every ticket plus stats; everyone else only their own tickets."""
        admin_access = self.policy.can_manage(actor)
        if not admin_access:
            return SyncResult(
                admin_access=False, tickets=self.store.get_by_sender(actor.identity)
            )
        tickets = self.store.get_all()
        return SyncResult(
            admin_access=True, stats=self.stats.gather(tickets), tickets=tickets
        )

    def _mutate(
        self,
        ticket_id: int,
        actor: Actor,
        kind: NoticeKind,
        change: Callable[[TicketRecord], TicketRecord],
    ) -> TicketResult:
        with self.store.locked(ticket_id):
            ticket = self.store.get_by_id(ticket_id)
            if ticket is None:
                return TicketResult(outcome=TicketOutcome.NOT_FOUND)
            if not self.policy.can_access_ticket(ticket, actor):
                return self._deny(ticket, actor)
            updated = change(ticket)
            if not self.store.update(updated):
                return TicketResult(outcome=TicketOutcome.NOT_FOUND)
        logger.info(f"Ticket {updated.short_id} {kind.name.lower()} by {actor.identity}")
        self.fanout.notify(updated, actor.identity, kind)
        return TicketResult(outcome=TicketOutcome.UPDATED, ticket=updated)

    def _deny(self, ticket: TicketRecord, actor: Actor) -> TicketResult:
        logger.info(f"Access to ticket {ticket.short_id} denied for {actor.identity}")
        notice = self.fanout.notify_denied(ticket, actor)
        return TicketResult(outcome=TicketOutcome.DENIED, detail=notice.fallback_text)


def build_ticket_service() -> TicketService:
    """Wires the service against the configured database and Redis."""
    redis_client = get_redis_client()
    directory = RedisActorDirectory(redis_client, settings.OPERATORS)
    if settings.CHECK_PERMISSION:
        permissions = RedisPermissionProvider(redis_client)
    else:
        permissions = NullPermissionProvider()
    policy = AccessPolicy.from_settings(directory, permissions)
    return TicketService(
        store=TicketStore(SessionLocal),
        policy=policy,
        fanout=NotificationFanout(directory, policy, enabled=settings.NOTIFICATIONS),
        stats=StatsAggregator(settings.ACTIVE_USERS_WINDOW),
        server_name=settings.SERVER_NAME,
    )
