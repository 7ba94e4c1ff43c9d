"""Data classes shared by the authentication services."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class TokenPayload:
    """Decoded claims of a verified bearer token."""

    user_id: UUID
    email: Optional[str]
    exp: datetime
    token_type: str = "access"

    def is_access_token(self) -> bool:
        return self.token_type == "access"
