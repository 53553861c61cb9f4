import logging, logging.config

def setup_logging(level: str = "INFO", access_log: bool = True, sql_log: bool = False):
    """Configure console logging for the API process and the query services.

    SQL statements are logged through ``sqlalchemy.engine`` only when
    ``sql_log`` is set.
    """
    level = level.upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                        "datefmt": "%Y-%m-%d %H:%M:%S"},
            # Uvicorn pre-formats access log lines
            "access_simple": {"format": "%(message)s"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "default"},
            "access":  {"class": "logging.StreamHandler", "formatter": "access_simple"},
        },
        "loggers": {
            "uvicorn.error":  {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": ("INFO" if access_log else "WARNING"),
                               "handlers": ["access"], "propagate": False},
            "sqlalchemy.engine": {"level": ("INFO" if sql_log else "WARNING")},
            "rostertrack": {"level": level, "handlers": ["console"], "propagate": False},
        },
        "root": {"level": level, "handlers": ["console"]},
    })
