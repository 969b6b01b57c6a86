import logging

logger = logging.getLogger(__name__)


def global_error_handler(error: Exception, description: str = None):
    """Default handler for errors raised inside subscribers: log with traceback."""
    logger.error(
        "%s: %s",
        description or error.__class__.__name__,
        error,
        exc_info=(type(error), error, error.__traceback__),
    )
