"""
Configuration settings for the Elion molecule design assistant
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from the backend directory FIRST before any imports
_backend_dir = Path(__file__).parent
_env_file = _backend_dir / ".env"
if _env_file.exists():
    load_dotenv(_env_file, override=True)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables"""

    def __init__(self):
        # Google Cloud project and serving regions
        self.project_id: str = os.getenv("GOOGLE_CLOUD_PROJECT_ID", "")
        self.region: str = os.getenv("GOOGLE_CLOUD_REGION", "us-central1")
        self.chat_region: str = os.getenv("GOOGLE_CLOUD_CHAT_REGION") or self.region

        # Vertex AI endpoints (chat falls back to the scoring endpoint)
        self.predict_endpoint_id: str = os.getenv("VERTEX_AI_PREDICT_ENDPOINT_ID", "")
        self.chat_endpoint_id: str = os.getenv("VERTEX_AI_CHAT_ENDPOINT_ID") or self.predict_endpoint_id

        # Inline JSON or base64-encoded JSON service account key
        self.credentials_json: str = os.getenv("GOOGLE_APPLICATION_CREDENTIALS_JSON", "")

        # Gateway settings
        self.serving_stack: str = os.getenv("MODEL_SERVING_STACK", "vllm-gemma")
        self.gateway_timeout: float = float(os.getenv("GATEWAY_TIMEOUT_SECONDS", "60"))
        self.gateway_max_concurrency: int = int(os.getenv("GATEWAY_MAX_CONCURRENCY", "0"))

        # Generation settings
        self.score_max_tokens: int = 64
        self.score_temperature: float = 0.0
        self.chat_max_tokens: int = 2048
        self.chat_temperature: float = 0.3

        # Answer cache for the built-in example molecules
        self.answer_cache_enabled: bool = _env_bool("ANSWER_CACHE_ENABLED", True)

        # API
        self.allowed_origins: list = os.getenv("ALLOWED_ORIGINS", "*").split(",")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def gateway_configured(self) -> bool:
        """Whether enough is configured to reach the model endpoints"""
        return bool(self.project_id and self.predict_endpoint_id)


settings = Settings()
