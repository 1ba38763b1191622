import httpx

from reaction_caption.bootstrap.components import Components
from reaction_caption.components.configuration.settings import Settings
from reaction_caption.components.logger.logger import Logger
from reaction_caption.services.CaptionService.caption_service import CaptionService
from reaction_caption.services.CaptionService.caption_service_interface import (
    CaptionServiceInterface,
)
from reaction_caption.services.FrameService.frame_extractor import (
    FrameExtractor,
    VideoCapabilities,
)
from reaction_caption.services.FrameService.frame_extractor_interface import (
    FrameExtractorInterface,
)
from reaction_caption.services.GenerationService.generation_service import (
    GenerationService,
)
from reaction_caption.services.GenerationService.generation_service_interface import (
    GenerationServiceInterface,
)
from reaction_caption.services.MediaService.media_service import MediaService
from reaction_caption.services.MediaService.media_service_interface import (
    MediaServiceInterface,
)


def get_frame_extractor(components: Components) -> FrameExtractorInterface:
    settings = components.get_component(Settings)
    return FrameExtractor(
        capabilities=components.get_component(VideoCapabilities),
        logger=components.get_component(Logger).get_logger("FrameExtractor"),
        width=settings.frame_width,
        height=settings.frame_height,
        jpeg_quality=settings.frame_jpeg_quality,
        seek_fraction=settings.frame_seek_fraction,
        timeout_seconds=settings.frame_timeout_seconds,
    )


def get_media_service(components: Components) -> MediaServiceInterface:
    settings = components.get_component(Settings)
    return MediaService(
        frame_extractor=get_frame_extractor(components),
        logger=components.get_component(Logger).get_logger("MediaService"),
        max_file_bytes=settings.max_file_size_bytes,
        video_supported=components.get_component(VideoCapabilities).video_supported,
    )


def get_generation_service(
    components: Components, http_client: httpx.AsyncClient | None = None
) -> GenerationServiceInterface:
    """
    Create the Gemini client.

    Without an injected ``http_client`` a fresh AsyncClient is opened and
    closed around every request.
    """
    settings = components.get_component(Settings)
    return GenerationService(
        logger=components.get_component(Logger).get_logger("GenerationService"),
        endpoint=settings.generate_content_url,
        temperature=settings.temperature,
        top_p=settings.top_p,
        top_k=settings.top_k,
        timeout=settings.request_timeout_seconds,
        http_client=http_client,
    )


def get_caption_service(
    components: Components, http_client: httpx.AsyncClient | None = None
) -> CaptionServiceInterface:
    return CaptionService(
        media_service=get_media_service(components),
        generation_service=get_generation_service(components, http_client),
        logger=components.get_component(Logger).get_logger("CaptionService"),
    )
