import logging

ROOT_LOGGER_NAME = "reaction_caption"

# Request lines logged by these libraries carry the API key query parameter.
_QUIET_LOGGERS = ("httpx", "httpcore")


class Logger:
    def __init__(self, log_format: str, log_level: str) -> None:
        self.log_format = log_format
        self.log_level = log_level.upper()

        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.setLevel(self.log_level)
        if not root.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(self.log_format))
            root.addHandler(handler)

        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
