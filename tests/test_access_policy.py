from app.models.ticket import TicketReason
from app.schemas.actor import Actor
from app.schemas.ticket import MessageRecord, TicketRecord
from app.services.access_policy import AccessPolicy


def _ticket(sender="bob"):
    return TicketRecord(
        id=1,
        sender=sender,
        server="lobby",
        reason=TicketReason.BUG,
        messages=(MessageRecord(sender=sender, text="broken"),),
    )


def test_owner_can_access_own_ticket(policy):
    assert policy.can_access_ticket(_ticket("bob"), Actor(identity="bob"))
    assert policy.can_access_ticket(_ticket("Bob"), Actor(identity="bOB"))


def test_stranger_cannot_access_ticket(policy):
    assert not policy.can_access_ticket(_ticket("bob"), Actor(identity="carol"))


def test_operator_manages_in_dedicated_mode(policy):
    staff = Actor(identity="Staff")

    assert policy.can_manage(staff)
    assert policy.can_access_ticket(_ticket("bob"), staff)


def test_elevated_flag_ignored_in_dedicated_mode(policy):
    assert not policy.can_manage(Actor(identity="carol", elevated=True))


def test_single_user_mode_uses_elevated_flag(directory):
    policy = AccessPolicy(directory, None, mode="single_user")

    assert policy.can_manage(Actor(identity="carol", elevated=True))
    assert not policy.can_manage(Actor(identity="staff"))


def test_strict_mode_queries_permission_node(directory, make_permissions):
    permissions = make_permissions(granted=["carol"])
    policy = AccessPolicy(
        directory, permissions, check_permission=True, permission_node="qreport.manage"
    )

    assert policy.can_manage(Actor(identity="carol"))
    assert not policy.can_manage(Actor(identity="staff"))
    assert permissions.calls == [("carol", "qreport.manage"), ("staff", "qreport.manage")]


def test_strict_mode_queries_provider_every_time(directory, make_permissions):
    permissions = make_permissions(granted=["carol"])
    policy = AccessPolicy(directory, permissions, check_permission=True)
    carol = Actor(identity="carol")

    assert policy.can_manage(carol)
    permissions.granted.clear()
    assert not policy.can_manage(carol)


def test_missing_provider_denies(directory):
    policy = AccessPolicy(directory, None, check_permission=True)

    assert not policy.can_manage(Actor(identity="staff"))
    assert policy.can_access_ticket(_ticket("staff"), Actor(identity="staff"))


def test_failing_provider_denies(directory):
    class Broken:
        def has_permission(self, identity, node):
            raise ConnectionError("provider offline")

    policy = AccessPolicy(directory, Broken(), check_permission=True)

    assert not policy.can_manage(Actor(identity="carol"))
