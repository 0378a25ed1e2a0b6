"""Generation gateway: prompt in, MP4 bytes out.

One request makes at most two sequential outbound calls: the generation call
itself and, when the service answers with a video pointer, a fetch of that URL.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Protocol, Union

import httpx

from reelsmith.api.errors import (
    DomainError,
    InternalError,
    UpstreamFetchError,
    UpstreamServiceError,
    UpstreamShapeError,
    UpstreamTransportError,
    ValidationError,
)
from reelsmith.config.settings import Settings
from reelsmith.observability.logging import get_logger
from reelsmith.prompts import build_video_prompt

logger = get_logger(__name__)

MAX_TEXT_LENGTH = 500
VIDEO_MEDIA_TYPE = "video/mp4"

MSG_TEXT_REQUIRED = "Text content is required"
MSG_TEXT_TOO_LONG = f"Text content must be less than {MAX_TEXT_LENGTH} characters"
MSG_GENERATION_FAILED = "Failed to generate video. Please try again."
MSG_SERVICE_ERROR = "The video generation service could not complete the request. Please try again."
MSG_INVALID_RESPONSE = "Invalid response from video generation service"
MSG_UNEXPECTED_FORMAT = "Unexpected response format from video generation service"
MSG_FETCH_FAILED = "Failed to fetch generated video"
MSG_INTERNAL = "Internal server error during video generation"


@dataclass(frozen=True)
class BinaryVideo:
    content: bytes
    media_type: str


@dataclass(frozen=True)
class JsonError:
    message: str


@dataclass(frozen=True)
class JsonVideoPointer:
    url: str


@dataclass(frozen=True)
class JsonUnrecognized:
    payload: Any


@dataclass(frozen=True)
class UnexpectedFormat:
    media_type: str


RemoteResponse = Union[BinaryVideo, JsonError, JsonVideoPointer, JsonUnrecognized, UnexpectedFormat]


@dataclass(frozen=True)
class GeneratedVideo:
    """Final video bytes and the attachment filename to serve them under."""

    content: bytes
    filename: str
    media_type: str = VIDEO_MEDIA_TYPE

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def classify_payload(payload: Any) -> RemoteResponse:
    """Classify a decoded JSON body by its error / url fields."""
    if not isinstance(payload, dict):
        return JsonUnrecognized(payload)
    error = payload.get("error")
    if error:
        return JsonError(error if isinstance(error, str) else json.dumps(error))
    url = payload.get("video_url") or payload.get("url")
    if url and isinstance(url, str):
        return JsonVideoPointer(url)
    return JsonUnrecognized(payload)


def classify_response(response: httpx.Response) -> RemoteResponse:
    """Interpret a successful generation response by its declared content type."""
    content_type = response.headers.get("content-type", "").lower()

    if "application/json" in content_type:
        try:
            payload = response.json()
        except ValueError:
            logger.warning("generation_response_unparseable", body=response.text[:500])
            return JsonUnrecognized(None)
        return classify_payload(payload)

    if "video/" in content_type or "application/octet-stream" in content_type:
        return BinaryVideo(response.content, content_type)

    return UnexpectedFormat(content_type)


def validate_text(text: str | None) -> str:
    """Reject missing, blank and over-length text. Returns the text unchanged."""
    if text is None or not text.strip():
        raise ValidationError(MSG_TEXT_REQUIRED)
    if len(text) > MAX_TEXT_LENGTH:
        raise ValidationError(MSG_TEXT_TOO_LONG)
    return text


def attachment_filename(timestamp_ms: int) -> str:
    return f"generated-video-{timestamp_ms}.mp4"


def _now_ms() -> int:
    return int(time.time() * 1000)


class GenerationProvider(Protocol):
    """Backend that turns a prompt into a RemoteResponse."""

    async def request_generation(self, prompt: str) -> RemoteResponse: ...

    async def fetch_video(self, url: str) -> bytes: ...


class RemoteGenerationClient:
    """Chat-completion style generation endpoint reached over httpx.

    No retries. The timeout is whatever was configured; `None` waits
    indefinitely for the remote service.
    """

    def __init__(
        self,
        *,
        api_url: str,
        model: str,
        api_key: str = "",
        customer_id: str = "",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_url = api_url
        self.model = model
        self._api_key = api_key
        self._customer_id = customer_id
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        if self._customer_id:
            headers["CustomerId"] = self._customer_id
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def request_generation(self, prompt: str) -> RemoteResponse:
        body = {"model": self.model, "messages": [{"role": "user", "content": prompt}]}
        try:
            async with self._client() as client:
                resp = await client.post(self.api_url, json=body, headers=self._headers())
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error(
                "generation_request_failed",
                url=self.api_url,
                error=str(exc),
                exc_type=type(exc).__name__,
            )
            raise UpstreamTransportError(MSG_GENERATION_FAILED) from exc

        if not resp.is_success:
            logger.error(
                "generation_upstream_error",
                url=self.api_url,
                status_code=resp.status_code,
                body=resp.text,
            )
            raise UpstreamTransportError(MSG_GENERATION_FAILED)

        return classify_response(resp)

    async def fetch_video(self, url: str) -> bytes:
        try:
            async with self._client() as client:
                resp = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("video_fetch_failed", url=url, error=str(exc), exc_type=type(exc).__name__)
            raise UpstreamFetchError(MSG_FETCH_FAILED) from exc

        if not resp.is_success:
            logger.error("video_fetch_failed", url=url, status_code=resp.status_code)
            raise UpstreamFetchError(MSG_FETCH_FAILED)
        return resp.content


class FakeGenerationClient:
    """Serves a local MP4 fixture through the binary-video path, no network."""

    def __init__(self, clip_path: str | Path) -> None:
        self.clip_path = Path(clip_path).expanduser()

    async def request_generation(self, prompt: str) -> RemoteResponse:
        try:
            content = self.clip_path.read_bytes()
        except OSError as exc:
            logger.error("fake_clip_unavailable", path=str(self.clip_path), error=str(exc))
            raise UpstreamTransportError(MSG_GENERATION_FAILED) from exc
        logger.info("fake_generation_served", path=str(self.clip_path), prompt_chars=len(prompt))
        return BinaryVideo(content, VIDEO_MEDIA_TYPE)

    async def fetch_video(self, url: str) -> bytes:
        raise UpstreamFetchError(MSG_FETCH_FAILED)


class DisabledGenerationClient:
    """GENERATION_PROVIDER=off: every generation fails."""

    async def request_generation(self, prompt: str) -> RemoteResponse:
        logger.warning("generation_disabled")
        raise UpstreamTransportError(MSG_GENERATION_FAILED)

    async def fetch_video(self, url: str) -> bytes:
        raise UpstreamFetchError(MSG_FETCH_FAILED)


def get_generation_provider(settings: Settings) -> GenerationProvider:
    mode = settings.generation_provider
    if mode == "fake":
        return FakeGenerationClient(settings.generation_fake_clip_path)
    if mode == "off":
        return DisabledGenerationClient()
    return RemoteGenerationClient(
        api_url=settings.generation_api_url,
        model=settings.generation_model,
        api_key=settings.generation_api_key,
        customer_id=settings.generation_customer_id,
        timeout=settings.generation_timeout_s,
    )


async def _resolve_video(provider: GenerationProvider, remote: RemoteResponse) -> bytes:
    if isinstance(remote, BinaryVideo):
        return remote.content
    if isinstance(remote, JsonError):
        logger.error("generation_service_error", upstream_error=remote.message)
        raise UpstreamServiceError(MSG_SERVICE_ERROR)
    if isinstance(remote, JsonVideoPointer):
        logger.info("generation_video_pointer", url=remote.url)
        return await provider.fetch_video(remote.url)
    if isinstance(remote, JsonUnrecognized):
        logger.error("generation_response_unrecognized", payload=remote.payload)
        raise UpstreamShapeError(MSG_INVALID_RESPONSE)
    logger.error("generation_response_unexpected_type", media_type=remote.media_type)
    raise UpstreamShapeError(MSG_UNEXPECTED_FORMAT)


async def generate_video(
    text: str | None,
    style: str | None,
    duration: float,
    provider: GenerationProvider,
    *,
    clock: Callable[[], int] = _now_ms,
) -> GeneratedVideo:
    """Validate, prompt, call the provider and return the final video.

    Raises a DomainError subclass on every failure path; unexpected exceptions
    are normalized to InternalError after being logged.
    """
    text = validate_text(text)
    prompt = build_video_prompt(text, style, duration)
    logger.info(
        "generation_started",
        style=style,
        duration=duration,
        text_chars=len(text),
    )
    try:
        remote = await provider.request_generation(prompt)
        content = await _resolve_video(provider, remote)
    except DomainError:
        raise
    except Exception as exc:
        logger.exception("generation_internal_error", exc_type=type(exc).__name__)
        raise InternalError(MSG_INTERNAL) from exc

    video = GeneratedVideo(content=content, filename=attachment_filename(clock()))
    logger.info("generation_completed", filename=video.filename, size_bytes=len(content))
    return video


__all__ = [
    "BinaryVideo",
    "DisabledGenerationClient",
    "FakeGenerationClient",
    "GeneratedVideo",
    "GenerationProvider",
    "JsonError",
    "JsonUnrecognized",
    "JsonVideoPointer",
    "MAX_TEXT_LENGTH",
    "RemoteGenerationClient",
    "RemoteResponse",
    "UnexpectedFormat",
    "attachment_filename",
    "classify_payload",
    "classify_response",
    "generate_video",
    "get_generation_provider",
    "validate_text",
]
