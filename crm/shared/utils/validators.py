"""
Request body parsing shared by the backend services
"""

from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError
import structlog

from crm.shared.utils.errors import BadRequestError

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Identifiers are BIGSERIAL columns
INT64_MAX = 2 ** 63 - 1
INT64_MIN = -(2 ** 63)

MAX_TEXT_LENGTH = 255


def parse_json_body(raw: bytes, model: Type[ModelT]) -> ModelT:
    """
    Decode a request body into model.

    Malformed JSON, a non-object document and wrongly typed fields are all
    reported the same way, as "Invalid JSON".
    """
    try:
        return model.model_validate_json(raw or b"")
    except ValidationError as e:
        logger.warning("Rejected request body", model=model.__name__, errors=e.error_count())
        raise BadRequestError("Invalid JSON") from e
