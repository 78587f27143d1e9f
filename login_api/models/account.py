from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class Account(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    password_hash: str
    created_at: Optional[datetime] = None

    def public(self) -> dict:
        """Fields safe to return to a client."""
        return {"id": self.id, "email": self.email}
