import logging

from .core import Signal, create_signal, batch_updates, set_global_error_handler
from .form import *  # noqa: F401,F403

__version__ = "0.0.1"

get_version = lambda: __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())
