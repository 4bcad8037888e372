# app/core/logging.py

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # SQLAlchemy fica em WARNING para não poluir o log com SQL
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
