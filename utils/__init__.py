from .logger import logger, logging_setup

__all__ = ["logger", "logging_setup"]
