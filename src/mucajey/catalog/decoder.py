"""Decode raw catalog responses into domain records."""

import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from mucajey.catalog.exceptions import CatalogDecodingError, body_snippet
from mucajey.catalog.models import (
    CardData,
    CardListResponse,
    EditionData,
    EditionListResponse,
    MappingResult,
    RegistrationResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _describe(exc: ValidationError) -> str:
    """Summarize the first validation error as ``<location>: <type> (<msg>)``."""
    errors = exc.errors(include_url=False)
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    summary = f"{location}: {first['type']} ({first['msg']})"
    if len(errors) > 1:
        summary += f" and {len(errors) - 1} more"
    return summary


def _decode(model: type[ModelT], data: bytes, label: str) -> ModelT:
    try:
        return model.model_validate_json(data)
    except ValidationError as exc:
        detail = _describe(exc)
        snippet = body_snippet(data)
        logger.error("Failed to decode %s: %s", label, detail)
        logger.debug("Body snippet (%s): %s", label, snippet)
        raise CatalogDecodingError(f"{label}: {detail}", snippet=snippet) from exc


def decode_card_list(data: bytes) -> list[CardData]:
    """Decode a ``{"cards": [...]}`` envelope."""
    response = _decode(CardListResponse, data, "card list")
    return [payload.to_card() for payload in response.cards]


def decode_edition_list(data: bytes) -> list[EditionData]:
    """Decode an ``{"editions": [...]}`` envelope."""
    response = _decode(EditionListResponse, data, "edition list")
    return [payload.to_edition() for payload in response.editions]


def decode_mapping_response(data: bytes) -> MappingResult:
    return _decode(MappingResult, data, "mapping response")


def decode_registration_response(data: bytes) -> RegistrationResponse:
    return _decode(RegistrationResponse, data, "registration response")
