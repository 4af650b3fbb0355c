from app.models.ticket import TicketReason, TicketStatus
from app.schemas.actor import Actor
from app.schemas.notice import NoticeKind
from app.schemas.ticket import MessageRecord, TicketRecord
from app.services.notifications import NotificationFanout


def _thread(*senders, status=TicketStatus.OPEN):
    return TicketRecord(
        id=7,
        status=status,
        sender=senders[0],
        server="lobby",
        reason=TicketReason.BUG,
        messages=tuple(MessageRecord(sender=s, text="...") for s in senders),
    )


def test_participants_except_actor_are_notified(fanout, directory):
    ticket = _thread("alice", "staff", "alice", "bob")

    delivered = fanout.notify(ticket, "staff", NoticeKind.MESSAGE_ADDED)

    assert delivered == ["alice", "bob"]
    identity, notice = directory.sent[0]
    assert notice.kind is NoticeKind.MESSAGE_ADDED
    assert notice.params == ("staff", "#7")
    assert notice.color == "gold"


def test_status_notice_carries_new_status(fanout, directory):
    ticket = _thread("alice", status=TicketStatus.CLOSED)

    fanout.notify(ticket, "staff", NoticeKind.STATUS_UPDATED)

    assert directory.sent[0][1].params == ("staff", "#7", "closed")


def test_offline_participants_are_skipped(fanout, directory):
    ticket = _thread("alice", "zed")

    assert fanout.notify(ticket, "staff", NoticeKind.TICKET_DELETED) == ["alice"]


def test_new_ticket_alerts_connected_managers(make_directory, policy):
    directory = make_directory(
        online=[Actor(identity="alice"), Actor(identity="staff"), Actor(identity="mod")],
        operators=["staff", "mod", "ghost"],
    )
    policy.directory = directory
    fanout = NotificationFanout(directory, policy)

    delivered = fanout.notify(_thread("mod"), "mod", NoticeKind.NEW_TICKET)

    assert delivered == ["staff"]
    assert directory.sent[0][1].params == ("mod", "#7")


def test_disabled_fanout_sends_nothing(directory, policy):
    fanout = NotificationFanout(directory, policy, enabled=False)

    assert fanout.notify(_thread("alice", "bob"), "bob", NoticeKind.MESSAGE_ADDED) == []
    assert directory.sent == []


def test_delivery_failure_does_not_stop_others(directory, policy):
    class Flaky(type(directory)):
        def send(self, identity, notice):
            if identity == "alice":
                raise ConnectionError("socket closed")
            return super().send(identity, notice)

    flaky = Flaky(online=list(directory.online.values()))
    fanout = NotificationFanout(flaky, policy)

    delivered = fanout.notify(_thread("alice", "bob", "carol"), "staff", NoticeKind.MESSAGE_ADDED)

    assert delivered == ["bob", "carol"]


def test_denied_notice_reaches_actor_even_when_disabled(directory, policy):
    fanout = NotificationFanout(directory, policy, enabled=False)

    notice = fanout.notify_denied(_thread("bob"), Actor(identity="carol"))

    assert directory.sent == [("carol", notice)]
    assert notice.color == "red"
    assert notice.fallback_text == "Ooops, you don't have access to ticket with id #7."
