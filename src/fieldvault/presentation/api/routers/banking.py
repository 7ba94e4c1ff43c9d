"""Banking router for field encryption endpoints."""

import json
import logging

from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError

from fieldvault.application.commands import ProtectBankingRecordCommand
from fieldvault.domain.banking.value_objects import SensitiveField
from fieldvault.domain.shared.exceptions import PersistenceError
from fieldvault.presentation.api.dependencies import (
    FieldEncryptorDep,
    KeyResolverDep,
    RepoFactory,
    SettingsDep,
)
from fieldvault.presentation.api.schemas.banking import (
    ProtectRecordRequest,
    ProtectRecordResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_overrides(request: Request) -> dict[SensitiveField, str]:
    """Parse optional plaintext overrides from the request body.

    A missing, unparseable or non-object body means "no overrides". Within an
    object each field stands alone: an invalid value drops only that field.
    """
    body = await request.body()
    if not body.strip():
        return {}

    try:
        payload = json.loads(body)
    except ValueError:
        logger.warning("Ignoring unparseable request body, using stored values")
        return {}

    if not isinstance(payload, dict):
        logger.warning(
            "Ignoring request body of type %s, using stored values",
            type(payload).__name__,
        )
        return {}

    overrides, rejected = ProtectRecordRequest.parse_fields(payload)
    if rejected:
        logger.warning("Ignoring invalid values for fields: %s", rejected)
    return overrides


@router.post(
    "/encrypt",
    summary="Encrypt banking details",
    response_model_exclude_none=True,
    responses={
        200: {"description": "Fields encrypted, or nothing left to encrypt"},
        401: {"description": "Missing or invalid bearer credential"},
        404: {"description": "No active banking record for the user"},
        500: {"description": "Key not configured, encryption or store failure"},
    },
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {
                "application/json": {
                    "schema": ProtectRecordRequest.model_json_schema(),
                },
            },
        },
    },
)
async def encrypt_banking_details(
    request: Request,
    factory: RepoFactory,
    key_resolver: KeyResolverDep,
    field_encryptor: FieldEncryptorDep,
    settings: SettingsDep,
) -> ProtectRecordResponse:
    """
    Encrypt the sensitive fields of the current user's active banking record.

    Only fields without an envelope are encrypted; envelopes already stored
    are never replaced. Body values override the stored plaintext.
    """
    overrides = await read_overrides(request)

    command = ProtectBankingRecordCommand.from_factory(
        factory,
        key_resolver=key_resolver,
        field_encryptor=field_encryptor,
        key_version=settings.encryption_key_version,
    )

    try:
        result = await command.execute(overrides)
    except Exception:
        await factory.session.rollback()
        # Let the global exception handler process domain exceptions
        raise

    try:
        await factory.session.commit()
    except SQLAlchemyError as e:
        await factory.session.rollback()
        msg = "Failed to save encrypted data"
        raise PersistenceError(msg) from e

    return ProtectRecordResponse.from_result(result)
