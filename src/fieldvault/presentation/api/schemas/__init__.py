from fieldvault.presentation.api.schemas.banking import (
    EnvelopeResponse,
    ProtectRecordRequest,
    ProtectRecordResponse,
)

__all__ = ["EnvelopeResponse", "ProtectRecordRequest", "ProtectRecordResponse"]
