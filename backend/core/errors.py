"""
Exception hierarchy for the prediction pipeline.

Decoding of model output never raises; everything here is either a
configuration/auth problem, a transport failure, or a domain error.
"""
from typing import Optional


class ElionError(Exception):
    """Base class for all errors raised by the assistant."""


class ConfigurationError(ElionError):
    """Required configuration is missing or malformed."""


class CredentialsError(ConfigurationError):
    """Credential material could not be decoded or used."""


class GatewayError(ElionError):
    """The model-serving endpoint answered with a non-success status."""

    def __init__(self, status_code: int, body: str, message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Vertex AI rawPredict error ({status_code}): {body}")


class UnknownPropertyError(ElionError):
    def __init__(self, property_id: str):
        self.property_id = property_id
        super().__init__(f"Unknown property: {property_id}")


class MissingTemplateError(ElionError):
    def __init__(self, property_id: str):
        self.property_id = property_id
        super().__init__(f"No prompt template for property: {property_id}")


class InvalidRequestError(ElionError):
    """A whole request was rejected before any model call was made."""
