import json
import logging
import os
import sys
from typing import Any

ROOT_LOGGER = "appointme"


class StructuredAdapter(logging.LoggerAdapter):
    """
    Dict messages are merged with the adapter's context and written as one
    JSON object; anything else is logged unchanged.
    """

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        if isinstance(msg, dict):
            msg = json.dumps({**self.extra, **msg}, default=str)
        return msg, kwargs


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        root.addHandler(handler)
        root.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    return root


def get_logger(name: str, **context: Any) -> StructuredAdapter:
    # module loggers propagate to the single handler on the package logger
    _configure_root()
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return StructuredAdapter(logging.getLogger(name), context)


logger = get_logger(ROOT_LOGGER)
