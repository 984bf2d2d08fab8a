"""Shared JSON decoder for response payloads."""

from datetime import datetime
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator

# yyyy-MM-dd'T'HH:mm:ss.SSSZ, with 1 to 6 fraction digits accepted
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_timestamp(value: Any) -> Any:
    """Parse a timestamp string using the fixed payload format.

    The fraction may have 1 to 6 digits; the fraction and the offset are both
    required. Non-string values are passed through for pydantic to validate.
    """
    if isinstance(value, str):
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    return value


Timestamp = Annotated[datetime, BeforeValidator(parse_timestamp)]


class JSONDecoder:
    """Decodes JSON bytes into pydantic models.

    A single instance is shared by every request so that custom success
    handlers receive the same decoder the default path uses.
    """

    def decode(self, model_type: type[ModelT], data: bytes | str) -> ModelT:
        """Decode `data` into `model_type`.

        Raises:
            pydantic.ValidationError: If `data` is not valid JSON or does not
                match the model.
        """
        return model_type.model_validate_json(data)


DEFAULT_DECODER = JSONDecoder()
