"""Who may act on a ticket."""

from typing import Literal, Optional

from app.schemas.actor import Actor
from app.schemas.ticket import TicketRecord
from app.services.directory import ActorDirectory, PermissionProvider
from app.settings import settings
from app.utils.logging_config import logger

DeploymentMode = Literal["dedicated", "single_user"]


class AccessPolicy:
    """
    Owners may always act on their own tickets; management access bypasses
    ownership. Nothing is cached since permissions can change between calls.
    """

    def __init__(
        self,
        directory: ActorDirectory,
        permissions: Optional[PermissionProvider] = None,
        mode: DeploymentMode = "dedicated",
        check_permission: bool = False,
        permission_node: str = "tickets.manage",
    ):
        self.directory = directory
        self.permissions = permissions
        self.mode = mode
        self.check_permission = check_permission
        self.permission_node = permission_node

    @classmethod
    def from_settings(
        cls, directory: ActorDirectory, permissions: Optional[PermissionProvider]
    ) -> "AccessPolicy":
        return cls(
            directory,
            permissions,
            mode=settings.DEPLOYMENT_MODE,
            check_permission=settings.CHECK_PERMISSION,
            permission_node=settings.PERMISSION_NODE,
        )

    def can_access_ticket(self, ticket: TicketRecord, actor: Actor) -> bool:
        return actor.is_identity(ticket.sender) or self.can_manage(actor)

    def can_manage(self, actor: Actor) -> bool:
        if self.mode == "single_user":
            return actor.elevated
        if self.check_permission:
            return self._has_permission(actor.identity)
        return self.directory.is_operator(actor.identity)

    def _has_permission(self, identity: str) -> bool:
        if self.permissions is None:
            return False
        try:
            return bool(self.permissions.has_permission(identity, self.permission_node))
        except Exception as e:
            logger.warning(f"Permission provider unavailable, denying {identity}: {e}")
            return False
