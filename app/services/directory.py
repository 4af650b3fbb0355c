"""
Connected-actor roster, notice delivery and the external permission provider.

Production wiring keeps presence and permissions in Redis; tests pass their
own implementations of the two protocols.
"""

import json
from typing import Iterable, List, Protocol

import redis

from app.schemas.actor import Actor
from app.schemas.notice import Notice
from app.utils.logging_config import logger

PRESENCE_KEY = "presence"


class ActorDirectory(Protocol):
    """The session layer keeps the roster current through connect and disconnect."""

    def connect(self, actor: Actor) -> None: ...

    def disconnect(self, identity: str) -> None: ...

    def online_actors(self) -> List[Actor]: ...

    def is_online(self, identity: str) -> bool: ...

    def is_operator(self, identity: str) -> bool: ...

    def send(self, identity: str, notice: Notice) -> bool: ...


class PermissionProvider(Protocol):
    def has_permission(self, identity: str, node: str) -> bool: ...


class RedisActorDirectory:
    """
    Presence lives in the ``presence`` hash (identity -> elevated flag).
    Notices are published to ``notices:<identity>`` for the session layer to relay.
    """

    def __init__(self, client: redis.Redis, operators: Iterable[str] = ()):
        self._client = client
        self._operators = {operator.lower() for operator in operators}

    def connect(self, actor: Actor) -> None:
        self._client.hset(PRESENCE_KEY, actor.identity, "1" if actor.elevated else "0")

    def disconnect(self, identity: str) -> None:
        self._client.hdel(PRESENCE_KEY, identity)

    def online_actors(self) -> List[Actor]:
        roster = self._client.hgetall(PRESENCE_KEY)
        return [
            Actor(identity=identity, elevated=flag == "1")
            for identity, flag in roster.items()
        ]

    def is_online(self, identity: str) -> bool:
        return bool(self._client.hexists(PRESENCE_KEY, identity))

    def is_operator(self, identity: str) -> bool:
        return identity.lower() in self._operators

    def send(self, identity: str, notice: Notice) -> bool:
        """Publishes the notice if the recipient is connected. Returns whether it was sent."""
        if not self.is_online(identity):
            return False
        payload = notice.model_dump(mode="json")
        payload["text"] = notice.fallback_text
        self._client.publish(f"notices:{identity}", json.dumps(payload))
        return True


class RedisPermissionProvider:
    """Permission nodes granted to an identity are members of ``permissions:<identity>``."""

    def __init__(self, client: redis.Redis):
        self._client = client

    def has_permission(self, identity: str, node: str) -> bool:
        try:
            return bool(self._client.sismember(f"permissions:{identity.lower()}", node))
        except redis.RedisError as e:
            logger.warning(f"Permission lookup failed for {identity}: {e}")
            return False


class NullPermissionProvider:
    def has_permission(self, identity: str, node: str) -> bool:
        return False
