"""Unit tests for prompt building."""

from __future__ import annotations

import pytest

from reelsmith.prompts import (
    BASE_PROMPT,
    DEFAULT_STYLE,
    STYLE_DESCRIPTIONS,
    build_video_prompt,
    describe_style,
    pacing_phrase,
    resolve_style,
)


def test_build_video_prompt_golden_output() -> None:
    prompt = build_video_prompt("Hello world", "minimal", 15)

    expected = (
        "Create a vertical video (9:16 aspect ratio, 1080x1920 resolution) for social media "
        "(Instagram Reels, YouTube Shorts, TikTok).\n\n"
        'Content: "Hello world"\n\n'
        "Style: Clean, minimal design with simple typography and subtle animations. "
        "Use soft colors and plenty of white space.\n\n"
        "Duration: 15 seconds (short and punchy)\n\n"
        "Requirements:\n"
        "- VERTICAL FORMAT: 9:16 aspect ratio (1080x1920 pixels)\n"
        "- Mobile-optimized for Instagram Reels, YouTube Shorts, TikTok\n"
        "- Text should be large and readable on mobile devices\n"
        "- Use kinetic typography with smooth text animations\n"
        "- Include engaging visual transitions\n"
        "- Ensure text remains visible throughout the video\n"
        "- Background should complement the text without overwhelming it\n"
        "- Add subtle sound-reactive visual elements (even if no audio)\n"
        "- Make it thumb-stopping and engaging for social media feeds\n"
        "- High quality, professional output suitable for social media posting\n\n"
        "The video should start immediately without long introductions and maintain "
        "viewer engagement throughout the 15-second duration."
    )
    assert prompt == expected


def test_build_video_prompt_is_deterministic(sample_text: str) -> None:
    first = build_video_prompt(sample_text, "cinematic", 45)
    second = build_video_prompt(sample_text, "cinematic", 45)
    assert first == second


@pytest.mark.parametrize("style", ["unknown", "", "MODERN", "retro", None])
def test_unknown_style_matches_default_style(style, sample_text: str) -> None:
    assert build_video_prompt(sample_text, style, 30) == build_video_prompt(
        sample_text, DEFAULT_STYLE, 30
    )


@pytest.mark.parametrize("style", sorted(STYLE_DESCRIPTIONS))
def test_known_style_description_is_embedded(style: str) -> None:
    prompt = build_video_prompt("text", style, 30)
    assert f"Style: {STYLE_DESCRIPTIONS[style]}" in prompt
    assert resolve_style(style) == style


@pytest.mark.parametrize(
    ("duration", "phrase"),
    [
        (-5, "short and punchy"),
        (0, "short and punchy"),
        (15, "short and punchy"),
        (16, "medium-paced"),
        (30, "medium-paced"),
        (31, "comprehensive but engaging"),
        (60, "comprehensive but engaging"),
    ],
)
def test_pacing_phrase_thresholds(duration: int, phrase: str) -> None:
    assert pacing_phrase(duration) == phrase
    assert f"({phrase})" in build_video_prompt("text", "modern", duration)


def test_prompt_contains_literal_text_and_vertical_framing(sample_text: str) -> None:
    prompt = build_video_prompt(sample_text, "dynamic", 30)
    assert prompt.startswith(BASE_PROMPT)
    assert f'Content: "{sample_text}"' in prompt
    assert "9:16" in prompt


def test_integral_float_duration_renders_as_integer() -> None:
    prompt = build_video_prompt("text", "modern", 30.0)
    assert "Duration: 30 seconds" in prompt
    assert "throughout the 30-second duration" in prompt


def test_describe_style_falls_back() -> None:
    assert describe_style("nope") == STYLE_DESCRIPTIONS[DEFAULT_STYLE]
