from reaction_caption.dependencies.components import get_components
from reaction_caption.dependencies.services import get_caption_service
from reaction_caption.services.CaptionService.caption_service_interface import (
    CaptionServiceInterface,
)


def bootstrap_caption_service(
    env: str = "development",
    config_path: str = ".env",
) -> CaptionServiceInterface:
    components = get_components(env=env, config_path=config_path)
    return get_caption_service(components)
