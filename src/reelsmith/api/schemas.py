"""Request and response models for the HTTP API."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reelsmith.prompts import DEFAULT_STYLE

DEFAULT_DURATION_S = 30


class GenerateVideoRequest(BaseModel):
    """Body of POST /generate-video.

    Deliberately permissive: text rules are enforced by the gateway so they
    surface as 400 `{error}` responses, and style/duration are passed through.
    A style that is not a string is dropped so the default style applies.
    """

    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = Field(None, description="Text content of the video (1-500 chars)")
    style: Optional[str] = Field(DEFAULT_STYLE, description="Style tag; unknown tags use the default")
    duration: Optional[int | float] = Field(
        DEFAULT_DURATION_S, description="Target duration in seconds"
    )

    @field_validator("style", mode="before")
    @classmethod
    def _non_string_style_to_default(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None

    @property
    def effective_duration(self) -> int | float:
        return DEFAULT_DURATION_S if self.duration is None else self.duration


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human-readable error message")
    code: Optional[str] = Field(None, description="Machine-readable error code")


class StyleItem(BaseModel):
    tag: str
    label: str
    description: str


class DurationItem(BaseModel):
    seconds: int
    label: str
    description: str


class StylesResponse(BaseModel):
    styles: List[StyleItem]
    default_style: str
    durations: List[DurationItem]


class HealthResponse(BaseModel):
    status: str
    version: str
    generation_provider: str
