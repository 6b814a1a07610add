import colorlog

handler = colorlog.StreamHandler()
handler.setFormatter(
    colorlog.ColoredFormatter(
        "%(log_color)s%(levelname)s:%(name)s:%(message)s",
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
    )
)


def get_logger(name):
    """Return a package logger with the shared colorlog handler."""
    logger = colorlog.getLogger(name)
    if handler not in logger.handlers:
        logger.addHandler(handler)
    return logger
