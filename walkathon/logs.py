import logging
import sys


def setup_logging(verbose: bool = False) -> None:
    """Configure console logging for the check-in station.

    Args:
        verbose: Log DEBUG messages instead of only warnings and errors.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    # request-level chatter from the http client is rarely useful
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
