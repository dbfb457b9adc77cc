from .logging_utils import get_component_logger, get_logger, set_log_level
from .text import pascal_case, slugify

__all__ = [
    "get_logger",
    "get_component_logger",
    "set_log_level",
    "pascal_case",
    "slugify",
]
