import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Install one stream handler on the root logger.

    Calling it again (one app per test) only adjusts the level.
    """
    root = logging.getLogger()
    if not any(getattr(h, "_storefront", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._storefront = True
        root.addHandler(handler)
    root.setLevel(level)
