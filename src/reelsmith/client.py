"""HTTP client for the generation gateway, used by the CLI."""

from __future__ import annotations

import re
from typing import Any

import httpx

from reelsmith.services.generation import GeneratedVideo

_FILENAME_RE = re.compile(r'filename="?([^";]+)"?')
_FALLBACK_ERROR = "Failed to generate video"


class GatewayError(Exception):
    """The gateway answered with an error envelope (or could not be reached)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(resp: httpx.Response) -> str:
    try:
        payload = resp.json()
    except ValueError:
        return _FALLBACK_ERROR
    if isinstance(payload, dict) and isinstance(payload.get("error"), str) and payload["error"]:
        return payload["error"]
    return _FALLBACK_ERROR


def _filename_from(resp: httpx.Response) -> str:
    match = _FILENAME_RE.search(resp.headers.get("content-disposition", ""))
    if match:
        return match.group(1)
    return "generated-video.mp4"


class GatewayClient:
    """Thin wrapper around the Reelsmith HTTP API.

    Generation is a single long round trip; `timeout=None` waits for it.
    """

    def __init__(self, base_url: str, *, timeout: float | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(timeout=httpx.Timeout(timeout))

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GatewayClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def generate(self, text: str, style: str, duration: int | float) -> GeneratedVideo:
        try:
            resp = self._client.post(
                f"{self._base_url}/generate-video",
                json={"text": text, "style": style, "duration": duration},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise GatewayError(f"Could not reach the gateway at {self._base_url}: {exc}") from exc

        if resp.status_code != 200:
            raise GatewayError(_error_message(resp), resp.status_code)
        return GeneratedVideo(
            content=resp.content,
            filename=_filename_from(resp),
            media_type=resp.headers.get("content-type", "video/mp4"),
        )

    def styles(self) -> dict[str, Any]:
        try:
            resp = self._client.get(f"{self._base_url}/styles")
            resp.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise GatewayError(f"Could not load styles from {self._base_url}: {exc}") from exc
        return resp.json()


__all__ = ["GatewayClient", "GatewayError"]
