"""Pydantic models for API response payloads.

Both models accept OAuth-style snake_case keys and the camelCase keys used by
the authentication API, and keep any unknown keys as extra fields.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from apirequest_sdk._internal.decoding import Timestamp

# =============================================================================
# Success Payload
# =============================================================================


class APISuccessResponse(BaseModel):
    """Decoded body of a 2xx response.

    `raw_data` holds the undecoded body and is attached after decoding; it is
    never part of the serialised model.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    # OAuth token endpoint
    access_token: str | None = None
    token_type: str | None = None
    expires_in: int | None = None
    refresh_token: str | None = None
    id_token: str | None = None
    scope: str | None = None

    # Authentication transactions
    status: str | None = None
    state_token: str | None = Field(default=None, alias="stateToken")
    session_token: str | None = Field(default=None, alias="sessionToken")
    expires_at: Timestamp | None = Field(default=None, alias="expiresAt")
    factor_result: str | None = Field(default=None, alias="factorResult")
    relay_state: str | None = Field(default=None, alias="relayState")
    embedded: dict[str, Any] | None = Field(default=None, alias="_embedded")
    links: dict[str, Any] | None = Field(default=None, alias="_links")

    raw_data: bytes | None = Field(default=None, exclude=True, repr=False)


# =============================================================================
# Error Payload
# =============================================================================


class ErrorCause(BaseModel):
    """Single entry of an error response's `errorCauses` list."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    error_summary: str | None = Field(default=None, alias="errorSummary")


class APIErrorResponse(BaseModel):
    """Structured error body returned with a non-2xx status."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    error: str | None = None
    error_description: str | None = None
    error_code: str | None = Field(default=None, alias="errorCode")
    error_summary: str | None = Field(default=None, alias="errorSummary")
    error_link: str | None = Field(default=None, alias="errorLink")
    error_id: str | None = Field(default=None, alias="errorId")
    error_causes: list[ErrorCause] | None = Field(default=None, alias="errorCauses")

    def describe(self) -> str:
        """Return the most specific human-readable message available."""
        for message in (self.error_summary, self.error_description, self.error, self.error_code):
            if message:
                return message
        return "Server responded with an error"
