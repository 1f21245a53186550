import logging, json, sys, time, os


def get_logger(name="chainnode", level=None, to_file=None):
    """
    Unified structured logger for all chainnode components.

    Level falls back to CHAINNODE_LOG_LEVEL (default INFO); file output to
    CHAINNODE_LOG_FILE when `to_file` is not given.
    """
    logger = logging.getLogger(name)
    if level is None:
        level = os.getenv("CHAINNODE_LOG_LEVEL", "INFO").upper()
    logger.setLevel(level)
    to_file = to_file or os.getenv("CHAINNODE_LOG_FILE")

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt=json.dumps({
                "ts": "%(asctime)s",
                "level": "%(levelname)s",
                "name": "%(name)s",
                "msg": "%(message)s"
            }),
            datefmt="%Y-%m-%dT%H:%M:%SZ",
        )
        formatter.converter = time.gmtime  # UTC
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if to_file:
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
