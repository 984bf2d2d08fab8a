"""Internal modules for the API request SDK.

WARNING: These modules back `apirequest_sdk.APIRequest` and are not part of
the public API.

Modules:
    builder - Request descriptor construction
    decoding - Shared JSON decoder
    executor - Callback executor
    http - Shared HTTP client configuration
    lifecycle - Request lifecycle state and cancellation guard
    redaction - Redaction of sensitive values in debug output
    sinks - Outcome delivery (completion or custom handler)
    transport - Standard and pluggable transports
"""
