"""Video generation endpoint."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from reelsmith.api.dependencies import get_provider
from reelsmith.api.rate_limit import limiter
from reelsmith.api.schemas import ErrorResponse, GenerateVideoRequest
from reelsmith.config import settings
from reelsmith.services.generation import GenerationProvider, generate_video

router = APIRouter(tags=["Generation"])


@router.post(
    "/generate-video",
    response_class=Response,
    responses={
        200: {"content": {"video/mp4": {}}, "description": "Generated MP4 as an attachment"},
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
@limiter.limit(lambda: settings.generate_rate_limit)
async def generate_video_endpoint(
    request: Request,
    body: GenerateVideoRequest,
    provider: GenerationProvider = Depends(get_provider),
) -> Response:
    """Generate a vertical video and return it as an MP4 attachment."""

    video = await generate_video(body.text, body.style, body.effective_duration, provider)
    return Response(
        content=video.content,
        media_type=video.media_type,
        headers={"Content-Disposition": video.content_disposition},
    )


__all__ = ["router"]
