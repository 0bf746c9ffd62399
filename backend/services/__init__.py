"""
Services package.
"""
from .credentials import CredentialProvider, GoogleCredentialProvider
from .model_gateway import ModelGateway, UnconfiguredGateway
from .orchestrator import PredictionOrchestrator

__all__ = [
    "CredentialProvider",
    "GoogleCredentialProvider",
    "ModelGateway",
    "UnconfiguredGateway",
    "PredictionOrchestrator",
]
