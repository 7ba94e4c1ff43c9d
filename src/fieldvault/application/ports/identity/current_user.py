"""CurrentUser - the service's view of the authenticated caller.

This is a port that defines what the service needs from the identity
system. Identity providers translate their token claims into this type.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class CurrentUser:
    """Immutable representation of the current authenticated user.

    ``user_id`` is the owner id that scopes every record lookup.
    """

    user_id: UUID
    email: Optional[str] = None

    def __str__(self) -> str:
        return f"CurrentUser({self.user_id})"

    def __repr__(self) -> str:
        return f"CurrentUser(user_id={self.user_id}, email={self.email!r})"
