from pydantic import BaseModel


class Actor(BaseModel):
    """The identity behind a request plus its client-side elevated capability."""

    identity: str
    elevated: bool = False

    model_config = {"frozen": True}

    def is_identity(self, name: str) -> bool:
        return self.identity.lower() == name.lower()
