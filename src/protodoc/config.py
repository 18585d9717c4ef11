import os

DEFAULT_FORMAT = "markdown"
DEFAULT_LOG_LEVEL = "WARNING"


def get_default_format() -> str:
    return os.getenv("PROTODOC_FORMAT", DEFAULT_FORMAT)


def get_log_level() -> str:
    return os.getenv("PROTODOC_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
