"""Prompt construction for vertical short-form video generation.

The prompt is a pure function of (text, style, duration): the same inputs always
produce the same string, so golden-output tests can pin it exactly.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_STYLE = "modern"

BASE_PROMPT = (
    "Create a vertical video (9:16 aspect ratio, 1080x1920 resolution) for social media "
    "(Instagram Reels, YouTube Shorts, TikTok)."
)

STYLE_DESCRIPTIONS: dict[str, str] = {
    "minimal": (
        "Clean, minimal design with simple typography and subtle animations. "
        "Use soft colors and plenty of white space."
    ),
    "dynamic": (
        "Dynamic and energetic with bold typography, vibrant colors, and smooth transitions. "
        "Include motion graphics and visual effects."
    ),
    "colorful": (
        "Bright, colorful design with playful animations and engaging visual elements. "
        "Use rainbow gradients and lively transitions."
    ),
    "professional": (
        "Professional and sophisticated design with elegant typography, corporate colors, "
        "and polished animations."
    ),
    "cinematic": (
        "Cinematic style with dramatic lighting, film-like color grading, "
        "and professional video effects."
    ),
    "modern": (
        "Modern, trendy design with current social media aesthetics, popular fonts, "
        "and contemporary visual styles."
    ),
}

REQUIREMENTS = (
    "- VERTICAL FORMAT: 9:16 aspect ratio (1080x1920 pixels)",
    "- Mobile-optimized for Instagram Reels, YouTube Shorts, TikTok",
    "- Text should be large and readable on mobile devices",
    "- Use kinetic typography with smooth text animations",
    "- Include engaging visual transitions",
    "- Ensure text remains visible throughout the video",
    "- Background should complement the text without overwhelming it",
    "- Add subtle sound-reactive visual elements (even if no audio)",
    "- Make it thumb-stopping and engaging for social media feeds",
    "- High quality, professional output suitable for social media posting",
)


@dataclass(frozen=True)
class StyleOption:
    tag: str
    label: str
    description: str


@dataclass(frozen=True)
class DurationOption:
    seconds: int
    label: str
    description: str


STYLE_OPTIONS: tuple[StyleOption, ...] = (
    StyleOption("minimal", "Minimal", "Clean and simple design"),
    StyleOption("dynamic", "Dynamic", "Energetic with bold animations"),
    StyleOption("colorful", "Colorful", "Bright and playful"),
    StyleOption("professional", "Professional", "Corporate and sophisticated"),
    StyleOption("cinematic", "Cinematic", "Dramatic and film-like"),
    StyleOption("modern", "Modern", "Trendy social media style"),
)

DURATION_OPTIONS: tuple[DurationOption, ...] = (
    DurationOption(15, "15 seconds", "Quick and punchy"),
    DurationOption(30, "30 seconds", "Standard length"),
    DurationOption(45, "45 seconds", "Extended content"),
    DurationOption(60, "60 seconds", "Full-length reel"),
)


def resolve_style(style: str | None) -> str:
    """Return the known style tag for `style`, or the default tag."""
    if style in STYLE_DESCRIPTIONS:
        return style  # type: ignore[return-value]
    return DEFAULT_STYLE


def describe_style(style: str | None) -> str:
    return STYLE_DESCRIPTIONS[resolve_style(style)]


def pacing_phrase(duration: float) -> str:
    if duration <= 15:
        return "short and punchy"
    if duration <= 30:
        return "medium-paced"
    return "comprehensive but engaging"


def _format_seconds(duration: float) -> str:
    if isinstance(duration, float) and duration.is_integer():
        return str(int(duration))
    return str(duration)


def build_video_prompt(text: str, style: str | None, duration: float) -> str:
    """Build the instruction string sent to the generation model.

    Unknown styles fall back to the default style description. Duration is
    not range-checked; it only selects the pacing phrase.
    """
    seconds = _format_seconds(duration)
    requirements = "\n".join(REQUIREMENTS)
    return (
        f"{BASE_PROMPT}\n\n"
        f'Content: "{text}"\n\n'
        f"Style: {describe_style(style)}\n\n"
        f"Duration: {seconds} seconds ({pacing_phrase(duration)})\n\n"
        f"Requirements:\n{requirements}\n\n"
        "The video should start immediately without long introductions and maintain "
        f"viewer engagement throughout the {seconds}-second duration."
    )


__all__ = [
    "BASE_PROMPT",
    "DEFAULT_STYLE",
    "DURATION_OPTIONS",
    "STYLE_DESCRIPTIONS",
    "STYLE_OPTIONS",
    "DurationOption",
    "StyleOption",
    "build_video_prompt",
    "describe_style",
    "pacing_phrase",
    "resolve_style",
]
