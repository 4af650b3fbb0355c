from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_current_actor, get_ticket_service
from app.schemas.actor import Actor
from app.schemas.ticket import (
    AddMessageRequest,
    NewTicketRequest,
    SyncResult,
    TicketOutcome,
    TicketResult,
    UpdateStatusRequest,
)
from app.services.ticket_service import TicketService

router = APIRouter()


def _checked(result: TicketResult) -> TicketResult:
    if result.outcome is TicketOutcome.DENIED:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=result.detail)
    return result


@router.post("/sync", response_model=SyncResult)
def sync_tickets(
    actor: Actor = Depends(get_current_actor),
    service: TicketService = Depends(get_ticket_service),
):
    """
    Returns the admin-access flag and the tickets visible to the actor,
    plus statistics for management.
    """
    return service.sync(actor)


@router.post("", response_model=TicketResult)
def new_ticket(
    body: NewTicketRequest,
    actor: Actor = Depends(get_current_actor),
    service: TicketService = Depends(get_ticket_service),
):
    return service.create_ticket(body.text, body.reason, actor)


@router.post("/{ticket_id}/messages", response_model=TicketResult)
def add_message(
    ticket_id: int,
    body: AddMessageRequest,
    actor: Actor = Depends(get_current_actor),
    service: TicketService = Depends(get_ticket_service),
):
    return _checked(service.add_message(ticket_id, body.text, actor))


@router.put("/{ticket_id}/status", response_model=TicketResult)
def update_status(
    ticket_id: int,
    body: UpdateStatusRequest,
    actor: Actor = Depends(get_current_actor),
    service: TicketService = Depends(get_ticket_service),
):
    return _checked(service.update_status(ticket_id, body.status, actor))


@router.delete("/{ticket_id}", response_model=TicketResult)
def delete_ticket(
    ticket_id: int,
    actor: Actor = Depends(get_current_actor),
    service: TicketService = Depends(get_ticket_service),
):
    return _checked(service.delete_ticket(ticket_id, actor))
