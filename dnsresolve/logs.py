import logging
import sys

DEFAULT_LOG_FILE = "dns_resolver.log"

FILE_FORMAT = "[%(asctime)s] %(name)s %(levelname)s: %(message)s"
CONSOLE_FORMAT = "%(name)-12s: %(levelname)-8s %(message)s"


def setup_logging(path=DEFAULT_LOG_FILE, verbose: bool = False) -> logging.Logger:
    """Send ``dnsresolve`` log records to ``path`` (appending), and to stderr if verbose."""
    logger = logging.getLogger("dnsresolve")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if path:
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    if verbose:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.DEBUG)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
