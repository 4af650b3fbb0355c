from fastapi import APIRouter, Depends, status

from app.api.deps import get_actor_directory, get_current_actor
from app.schemas.actor import Actor
from app.services.directory import ActorDirectory

router = APIRouter()


@router.put("", status_code=status.HTTP_204_NO_CONTENT)
def connect(
    actor: Actor = Depends(get_current_actor),
    directory: ActorDirectory = Depends(get_actor_directory),
):
    """
    Marks the actor as connected so it receives ticket notices.
    """
    directory.connect(actor)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def disconnect(
    actor: Actor = Depends(get_current_actor),
    directory: ActorDirectory = Depends(get_actor_directory),
):
    directory.disconnect(actor.identity)
