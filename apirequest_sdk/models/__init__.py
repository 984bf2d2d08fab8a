"""Public models for the API request SDK.

Example:
    from apirequest_sdk.models import APISuccessResponse, Success

    def completion(request, result):
        if isinstance(result, Success):
            print(result.response.access_token)
"""

from apirequest_sdk.models.descriptor import Method, RequestDescriptor
from apirequest_sdk.models.responses import APIErrorResponse, APISuccessResponse, ErrorCause
from apirequest_sdk.models.result import Failure, Result, Success

__all__ = [
    "Method",
    "RequestDescriptor",
    "APISuccessResponse",
    "APIErrorResponse",
    "ErrorCause",
    "Success",
    "Failure",
    "Result",
]
