import logging

DEFAULT_FORMAT = '%(levelname)s | %(name)s | %(message)s'

def get_logger(name='yaml_grep', level=logging.WARNING, fmt=None):
    # Return the named logger, writing to stderr, at the specified level.
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
