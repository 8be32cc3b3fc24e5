import logging

FORMAT = "\033[94m%(asctime)s\033[0m \033[93m%(levelname)s\033[0m %(message)s \033[95m(%(filename)s:%(lineno)d)\033[0m"

logger = logging.getLogger("settee")
logger.addHandler(logging.NullHandler())

_handler: logging.Handler | None = None


def setup(verbose: bool = False) -> logging.Handler:
    """Print settee's log records to stderr, colourised."""
    global _handler
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(FORMAT))
        logger.addHandler(_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return _handler
