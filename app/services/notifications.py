"""Best-effort fanout of ticket events to interested identities."""

from typing import List

from app.schemas.actor import Actor
from app.schemas.notice import Notice, NoticeKind
from app.schemas.ticket import TicketRecord
from app.services.access_policy import AccessPolicy
from app.services.directory import ActorDirectory
from app.utils.logging_config import logger


class NotificationFanout:
    def __init__(
        self, directory: ActorDirectory, policy: AccessPolicy, enabled: bool = True
    ):
        self.directory = directory
        self.policy = policy
        self.enabled = enabled

    def notify(self, ticket: TicketRecord, exclude: str, kind: NoticeKind) -> List[str]:
        """
        Sends a ``kind`` notice about ``ticket`` caused by ``exclude``.

        New tickets go to every connected identity with management access;
        everything else goes to the ticket's participants. The acting identity
        never notifies itself.

        Returns:
            Identities the notice was delivered to.
        """
        if not self.enabled:
            return []
        if kind is NoticeKind.NEW_TICKET:
            recipients = self._connected_managers(exclude)
        else:
            recipients = [
                name for name in ticket.participants() if name.lower() != exclude.lower()
            ]
        return self._deliver(recipients, self._build(ticket, exclude, kind))

    def notify_denied(self, ticket: TicketRecord, actor: Actor) -> Notice:
        """Tells ``actor`` it may not act on ``ticket``, regardless of the global switch."""
        notice = Notice(kind=NoticeKind.ACCESS_DENIED, params=(ticket.short_id,), color="red")
        self._deliver([actor.identity], notice)
        return notice

    def _build(self, ticket: TicketRecord, actor: str, kind: NoticeKind) -> Notice:
        if kind is NoticeKind.STATUS_UPDATED:
            return Notice(kind=kind, params=(actor, ticket.short_id, ticket.status.value))
        return Notice(kind=kind, params=(actor, ticket.short_id))

    def _connected_managers(self, creator: str) -> List[str]:
        try:
            online = self.directory.online_actors()
        except Exception as e:
            logger.warning(f"Could not list connected identities: {e}")
            return []
        return [
            actor.identity
            for actor in online
            if not actor.is_identity(creator) and self.policy.can_manage(actor)
        ]

    def _deliver(self, recipients: List[str], notice: Notice) -> List[str]:
        delivered = []
        for identity in recipients:
            try:
                if self.directory.send(identity, notice):
                    delivered.append(identity)
            except Exception as e:
                logger.warning(f"Failed to deliver {notice.kind.name} to {identity}: {e}")
        return delivered
