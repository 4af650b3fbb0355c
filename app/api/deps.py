"""Dependencies for API endpoints."""

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.schemas.actor import Actor
from app.services.directory import ActorDirectory
from app.services.ticket_service import TicketService, build_ticket_service
from app.utils.jwt_manager import decode_actor_jwt

reusable_oauth2 = HTTPBearer(scheme_name="Bearer")

_ticket_service: TicketService | None = None


def get_ticket_service() -> TicketService:
    global _ticket_service
    if _ticket_service is None:
        _ticket_service = build_ticket_service()
    return _ticket_service


def get_current_actor(
    token: HTTPAuthorizationCredentials = Depends(reusable_oauth2),
) -> Actor:
    """
    Dependency to get the acting identity from the bearer token.
    """
    try:
        return decode_actor_jwt(token.credentials)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has expired."
        ) from None
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}"
        ) from e


def get_actor_directory(
    service: TicketService = Depends(get_ticket_service),
) -> ActorDirectory:
    return service.fanout.directory
