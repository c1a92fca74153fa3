from ._logs import setup_logging
from ._ssl_context import create_ssl_context

__all__ = [
    "setup_logging",
    "create_ssl_context",
]
