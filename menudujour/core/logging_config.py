import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

app_logger = logging.getLogger("menudujour")


def configure_logging(level: str = "INFO") -> logging.Logger:
    app_logger.setLevel(level.upper())

    # Avoid stacking handlers when the app is created more than once (tests, reload)
    if not app_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app_logger.addHandler(handler)

    return app_logger
