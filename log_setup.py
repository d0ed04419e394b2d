import logging
import sys


def setup_logger(name, verbose=False):
    """
    Configure a named logger writing bare messages to stderr.
    Informational output is shown only in verbose mode.
    """
    logger = logging.getLogger(name)
    stream_handlers = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
    if stream_handlers:
        stream_handlers[0].setStream(sys.stderr)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    set_verbose_mode(logger, verbose)
    return logger


def set_verbose_mode(logger, verbose):
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
