"""Business logic services.

These services encapsulate operations that reach outside the process
(the remote video generation endpoint and the video fetch that may follow it).
"""

from reelsmith.services.generation import (
    GeneratedVideo,
    GenerationProvider,
    generate_video,
    get_generation_provider,
)

__all__ = [
    "GeneratedVideo",
    "GenerationProvider",
    "generate_video",
    "get_generation_provider",
]
