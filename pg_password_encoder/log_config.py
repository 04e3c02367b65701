"""Logging configuration for the command line tool."""
import logging
import sys

HANDLER_NAME = 'pg_password_encoder'


def setup_logging(verbose=False):
    """Set up logging to stderr for the command line tool.

    Calling this again replaces the handler installed by the previous call.

    Args:
        verbose: Log debug messages instead of warnings and errors only.

    Returns:
        logging.Handler: The handler attached to the root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return handler
