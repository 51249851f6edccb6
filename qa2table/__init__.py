"""Top-level package for qa2table.

Turns raw text into question/answer pairs with a chat-completion model and
stores every pair as a record in an Airtable table.
"""

from importlib import metadata

from .utils.logging import get_logger

try:
    __version__: str = metadata.version(__name__)
except metadata.PackageNotFoundError:  # pragma: no cover
    # Package is not installed, default to dev version
    __version__ = "0.0.0.dev0"

logger = get_logger(__name__)

__all__ = ["__version__"]
