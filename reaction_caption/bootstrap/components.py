import os
from pathlib import Path
from threading import Lock
from typing import Any, TypeVar, cast

from dotenv import load_dotenv

from reaction_caption.components.configuration.settings import Settings, load_settings
from reaction_caption.components.logger.logger import Logger
from reaction_caption.services.FrameService.frame_extractor import (
    VideoCapabilities,
    probe_video_backend,
)


load_dotenv()

T = TypeVar("T")


class ComponentsMeta(type):
    _instances: dict[tuple[type, str], "Components"] = {}
    _lock: Lock = Lock()

    def __call__(cls, *args, **kwargs):
        env = args[0] if args else kwargs.get("env")
        if env is None:
            raise ValueError("Environment must be provided")

        env_key = str(env)
        key = (cls, env_key)
        with cls._lock:
            if key not in cls._instances:
                instance = super().__call__(*args, **kwargs)
                cls._instances[key] = instance
        return cls._instances[key]


class Components(metaclass=ComponentsMeta):
    def __init__(self, env: str, config_path: str) -> None:
        self.__env: str = env
        root_dir: str = str(Path(__file__).resolve().parents[2])
        self.__config_path: str = os.path.join(root_dir, config_path)
        self.__components: dict[type[Any], Any] = self.__bootstrap_components()

    def __bootstrap_components(self) -> dict[type[Any], Any]:
        if self.__env in {"development", "staging", "production"}:
            return self.__get_dev_components()

        raise ValueError(f"Invalid environment: {self.__env}")

    def __get_dev_components(self) -> dict[type[Any], Any]:
        env_file = self.__config_path if os.path.isfile(self.__config_path) else None
        settings: Settings = load_settings(env_file)

        logger: Logger = Logger(
            log_format=settings.log_format,
            log_level=settings.log_level,
        )
        _logger_instance = logger.get_logger("Components")

        # Decoding strategy is chosen once here and handed to the extractor.
        capabilities: VideoCapabilities = probe_video_backend()
        if capabilities.video_supported:
            _logger_instance.info(
                "Video decoding backend: %s", capabilities.backend_name
            )
        else:
            _logger_instance.warning(
                "No video decoding backend available; video uploads will be rejected"
            )

        components: dict[type[Any], Any] = {
            Settings: settings,
            Logger: logger,
            VideoCapabilities: capabilities,
        }

        return components

    def get_component(self, component_name: type[T]) -> T:
        if component_name not in self.__components:
            raise ValueError(f"Component {component_name} not found")

        return cast(T, self.__components[component_name])

    def get_config_path(self) -> str:
        return self.__config_path
