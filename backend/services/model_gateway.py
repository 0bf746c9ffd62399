"""
Remote Model Gateway

Sends prompts to TxGemma deployed on Vertex AI (vLLM behind the
``:rawPredict`` route) and returns the cleaned generated text.

Two call shapes:
- score: one prompt, small generation budget, temperature 0 for reproducible scoring
- chat: a turn list rendered in Gemma's turn format, larger budget, some temperature

The endpoint's response envelope is not fixed across serving stacks, so the
text is located by an ordered list of extraction strategies, and any echoed
prompt is removed by a post-processor chosen per serving stack.
"""
import asyncio
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

import httpx
from loguru import logger

from core.errors import ConfigurationError, GatewayError

from .credentials import CredentialProvider

TURN_START = "<start_of_turn>"
TURN_END = "<end_of_turn>"
MODEL_TURN = f"{TURN_START}model\n"
OUTPUT_MARKER = "Output:\n"

# Fields tried, in order, on an object-shaped prediction
PREDICTION_TEXT_FIELDS = ("output", "text", "generated_text", "content")


def format_chat_prompt(turns: Iterable[Dict[str, str]]) -> str:
    """
    Render turns in Gemma's chat template, leaving a model turn open.

    The assistant role is called "model" by Gemma.
    """
    prompt = ""
    for turn in turns:
        role = "model" if turn["role"] == "assistant" else turn["role"]
        prompt += f"{TURN_START}{role}\n{turn['content']}{TURN_END}\n"
    prompt += MODEL_TURN
    return prompt


# ============= Envelope unwrapping =============

def _first_prediction(body: Any) -> Any:
    if isinstance(body, dict):
        predictions = body.get("predictions")
        if isinstance(predictions, list) and predictions:
            return predictions[0]
    return None


def _prediction_as_string(body: Any) -> Optional[str]:
    prediction = _first_prediction(body)
    return prediction if isinstance(prediction, str) else None


def _prediction_text_field(body: Any) -> Optional[str]:
    prediction = _first_prediction(body)
    if not isinstance(prediction, dict):
        return None
    for name in PREDICTION_TEXT_FIELDS:
        if prediction.get(name):
            return str(prediction[name])
    return json.dumps(prediction)


def _prediction_scalar(body: Any) -> Optional[str]:
    prediction = _first_prediction(body)
    return None if prediction is None else str(prediction)


def _top_level_text(body: Any) -> Optional[str]:
    if isinstance(body, dict) and body.get("text"):
        return str(body["text"])
    return None


def _bare_string(body: Any) -> Optional[str]:
    return body if isinstance(body, str) else None


ENVELOPE_STRATEGIES: Tuple[Callable[[Any], Optional[str]], ...] = (
    _prediction_as_string,
    _prediction_text_field,
    _prediction_scalar,
    _top_level_text,
    _bare_string,
)


def unwrap_envelope(body: Any) -> str:
    """Generated text from a prediction envelope; the whole body as JSON if nothing matches."""
    for strategy in ENVELOPE_STRATEGIES:
        text = strategy(body)
        if text is not None:
            return text
    return json.dumps(body)


# ============= Echo stripping =============

class ResponsePostProcessor(ABC):
    """Removes serving-stack noise (echoed prompts, control tokens) from generated text."""

    @abstractmethod
    def clean(self, text: str) -> str:
        pass


class GemmaPostProcessor(ResponsePostProcessor):
    """
    vLLM serving Gemma may echo the request as "Prompt:\\n...\\nOutput:\\n<answer>".

    Everything up to the last output marker (or, without one, the last open
    model turn) is dropped, then end-of-turn tokens are removed.
    """

    markers: Sequence[str] = (OUTPUT_MARKER, MODEL_TURN)

    def clean(self, text: str) -> str:
        for marker in self.markers:
            index = text.rfind(marker)
            if index != -1:
                text = text[index + len(marker):]
                break
        return text.replace(TURN_END, "").strip()


class PassthroughPostProcessor(ResponsePostProcessor):
    def clean(self, text: str) -> str:
        return text.strip()


POST_PROCESSORS: Dict[str, ResponsePostProcessor] = {
    "vllm-gemma": GemmaPostProcessor(),
    "passthrough": PassthroughPostProcessor(),
}


def get_post_processor(serving_stack: str) -> ResponsePostProcessor:
    processor = POST_PROCESSORS.get(serving_stack)
    if processor is None:
        raise ConfigurationError(
            f"Unknown serving stack '{serving_stack}', expected one of: {', '.join(POST_PROCESSORS)}"
        )
    return processor


# ============= Gateway =============

@dataclass(frozen=True)
class EndpointConfig:
    """One Vertex AI endpoint"""
    project_id: str
    region: str
    endpoint_id: str

    @property
    def url(self) -> str:
        return (
            f"https://{self.region}-aiplatform.googleapis.com/v1/projects/{self.project_id}"
            f"/locations/{self.region}/endpoints/{self.endpoint_id}:rawPredict"
        )


@dataclass(frozen=True)
class GenerationParams:
    max_tokens: int
    temperature: float


SCORE_PARAMS = GenerationParams(max_tokens=64, temperature=0.0)
CHAT_PARAMS = GenerationParams(max_tokens=2048, temperature=0.3)


class ModelGateway:
    """
    Client for the scoring and chat endpoints.

    The HTTP client and credential provider are owned by the caller; the
    gateway never retries, a failed call surfaces as GatewayError (non-2xx)
    or the transport's own exception.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        credentials: CredentialProvider,
        predict_endpoint: EndpointConfig,
        chat_endpoint: Optional[EndpointConfig] = None,
        post_processor: Optional[ResponsePostProcessor] = None,
        score_params: GenerationParams = SCORE_PARAMS,
        chat_params: GenerationParams = CHAT_PARAMS,
        max_concurrency: int = 0,
    ):
        self.http_client = http_client
        self.credentials = credentials
        self.predict_endpoint = predict_endpoint
        self.chat_endpoint = chat_endpoint or predict_endpoint
        self.post_processor = post_processor or GemmaPostProcessor()
        self.score_params = score_params
        self.chat_params = chat_params
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency > 0 else None

    @classmethod
    def from_settings(cls, settings, http_client: httpx.AsyncClient, credentials: CredentialProvider) -> "ModelGateway":
        if not settings.project_id or not settings.predict_endpoint_id:
            raise ConfigurationError(
                "GOOGLE_CLOUD_PROJECT_ID and VERTEX_AI_PREDICT_ENDPOINT_ID must be set"
            )
        return cls(
            http_client=http_client,
            credentials=credentials,
            predict_endpoint=EndpointConfig(settings.project_id, settings.region, settings.predict_endpoint_id),
            chat_endpoint=EndpointConfig(settings.project_id, settings.chat_region, settings.chat_endpoint_id),
            post_processor=get_post_processor(settings.serving_stack),
            score_params=GenerationParams(settings.score_max_tokens, settings.score_temperature),
            chat_params=GenerationParams(settings.chat_max_tokens, settings.chat_temperature),
            max_concurrency=settings.gateway_max_concurrency,
        )

    async def score(self, prompt: str) -> str:
        """Single-shot scoring call."""
        return await self._raw_predict(self.predict_endpoint, prompt, self.score_params, "score")

    async def chat(self, turns: Sequence[Dict[str, str]]) -> str:
        """Multi-turn call; turns are {"role", "content"} dicts, system turn first if any."""
        prompt = format_chat_prompt(turns)
        logger.debug(f"[chat] Prompt char length: {len(prompt)}, ~approx tokens: {len(prompt) // 4}")
        return await self._raw_predict(self.chat_endpoint, prompt, self.chat_params, "chat")

    async def _raw_predict(self, endpoint: EndpointConfig, prompt: str, params: GenerationParams, mode: str) -> str:
        if self._semaphore is None:
            return await self._post(endpoint, prompt, params, mode)
        async with self._semaphore:
            return await self._post(endpoint, prompt, params, mode)

    async def _post(self, endpoint: EndpointConfig, prompt: str, params: GenerationParams, mode: str) -> str:
        token = await self.credentials.get_access_token()

        # vLLM only sees parameters placed inside the instance; Vertex's
        # top-level "parameters" field is not forwarded to it
        payload = {
            "instances": [{
                "prompt": prompt,
                "max_tokens": params.max_tokens,
                "temperature": params.temperature,
            }]
        }

        logger.debug(f"[{mode}] POST {endpoint.url}")
        response = await self.http_client.post(
            endpoint.url,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            json=payload,
        )

        if not response.is_success:
            logger.warning(f"[{mode}] Vertex AI error {response.status_code}: {response.text[:1000]}")
            raise GatewayError(response.status_code, response.text)

        try:
            body = response.json()
        except ValueError:
            body = response.text

        text = self.post_processor.clean(unwrap_envelope(body))
        logger.debug(f"[{mode}] Cleaned output: {text[:200]}")
        return text


class UnconfiguredGateway:
    """
    Stand-in used when no endpoint is configured.

    Cached answers still work; every live call fails with ConfigurationError,
    which the orchestrator turns into per-property error results.
    """

    def __init__(self, reason: str = "Vertex AI endpoint is not configured"):
        self.reason = reason

    async def score(self, prompt: str) -> str:
        raise ConfigurationError(self.reason)

    async def chat(self, turns: Sequence[Dict[str, str]]) -> str:
        raise ConfigurationError(self.reason)
