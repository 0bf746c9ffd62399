"""
Google Cloud credentials for the Vertex AI endpoints
"""
import asyncio
import base64
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import google.auth
from google.auth.exceptions import DefaultCredentialsError
from google.auth.transport.requests import Request
from google.oauth2 import service_account
from loguru import logger

from core.errors import CredentialsError

CLOUD_PLATFORM_SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]


def decode_credentials(material: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Decode a service account key given as inline JSON or base64-encoded JSON.

    Returns None when no material is configured.
    """
    if not material or not material.strip():
        return None

    try:
        info = json.loads(material)
    except ValueError:
        try:
            info = json.loads(base64.b64decode(material, validate=False).decode("utf-8"))
        except ValueError as e:
            raise CredentialsError(f"Credentials are neither JSON nor base64-encoded JSON: {e}") from e

    if not isinstance(info, dict):
        raise CredentialsError("Credentials must decode to a JSON object")
    return info


class CredentialProvider(ABC):
    """Source of bearer tokens for the model endpoints."""

    @abstractmethod
    async def get_access_token(self) -> str:
        pass


class GoogleCredentialProvider(CredentialProvider):
    """
    Bearer tokens from google-auth.

    The credentials object is built on first use and reused for the life of
    the provider; google-auth decides when the cached token needs refreshing.
    Refresh is a blocking HTTP call, so it runs in a worker thread.
    """

    def __init__(self, credentials_json: str = ""):
        self._material = credentials_json
        self._credentials = None
        self._lock = asyncio.Lock()

    def _build_credentials(self):
        info = decode_credentials(self._material)
        if info is not None:
            try:
                return service_account.Credentials.from_service_account_info(info, scopes=CLOUD_PLATFORM_SCOPES)
            except ValueError as e:
                raise CredentialsError(f"Invalid service account key: {e}") from e

        try:
            credentials, project = google.auth.default(scopes=CLOUD_PLATFORM_SCOPES)
        except DefaultCredentialsError as e:
            raise CredentialsError(f"No Google Cloud credentials available: {e}") from e
        logger.info(f"Using application default credentials (project={project})")
        return credentials

    def _refresh(self) -> str:
        if self._credentials is None:
            self._credentials = self._build_credentials()
        if not self._credentials.valid:
            self._credentials.refresh(Request())
        return self._credentials.token or ""

    async def get_access_token(self) -> str:
        if self._credentials is not None and self._credentials.valid:
            return self._credentials.token

        async with self._lock:
            return await asyncio.to_thread(self._refresh)
