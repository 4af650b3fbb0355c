"""Utility for issuing and reading actor tokens."""

from datetime import datetime, timedelta, timezone

import jwt

from app.schemas.actor import Actor
from app.settings import settings


def create_actor_jwt(actor: Actor) -> str:
    """
    Creates a JWT identifying an actor to the ticket API.

    Args:
        actor (Actor): The identity and its elevated capability flag.

    Returns:
        str: The encoded JWT token.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "iat": now,
        "exp": now + timedelta(hours=settings.ACTOR_TOKEN_EXPIRE_HOURS),
        "sub": actor.identity,
        "elevated": actor.elevated,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_actor_jwt(token: str) -> Actor:
    """Raises jwt.InvalidTokenError (or a subclass) for bad or expired tokens."""
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    identity = payload.get("sub")
    if not identity:
        raise jwt.InvalidTokenError("Subject not found")
    return Actor(identity=identity, elevated=bool(payload.get("elevated", False)))
