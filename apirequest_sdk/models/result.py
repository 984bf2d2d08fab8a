"""Result of a completed API request."""

from dataclasses import dataclass

from apirequest_sdk.exceptions import APIRequestError
from apirequest_sdk.models.responses import APISuccessResponse


@dataclass(frozen=True)
class Success:
    """Decoded 2xx response; `response.raw_data` holds the body bytes."""

    response: APISuccessResponse

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Terminal failure; `error.kind` identifies which one."""

    error: APIRequestError

    @property
    def is_success(self) -> bool:
        return False


Result = Success | Failure
