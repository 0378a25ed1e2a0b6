"""Style and duration catalog for clients building the generation form."""

from __future__ import annotations

from fastapi import APIRouter

from reelsmith.api.schemas import DurationItem, StyleItem, StylesResponse
from reelsmith.prompts import DEFAULT_STYLE, DURATION_OPTIONS, STYLE_OPTIONS

router = APIRouter(tags=["Generation"])


@router.get("/styles", response_model=StylesResponse)
async def list_styles() -> StylesResponse:
    return StylesResponse(
        styles=[StyleItem(tag=s.tag, label=s.label, description=s.description) for s in STYLE_OPTIONS],
        default_style=DEFAULT_STYLE,
        durations=[
            DurationItem(seconds=d.seconds, label=d.label, description=d.description)
            for d in DURATION_OPTIONS
        ],
    )


__all__ = ["router"]
