"""Banking domain exceptions."""

from uuid import UUID

from fieldvault.domain.shared.exceptions import DomainException, ErrorCode


class RecordNotFoundError(DomainException):
    """Raised when the owner has no active banking record."""

    def __init__(self, user_id: UUID):
        super().__init__(
            "No banking record found for user",
            ErrorCode.RECORD_NOT_FOUND,
            {"user_id": str(user_id)},
        )
        self.user_id = user_id
