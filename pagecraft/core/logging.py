import logging

ISO_FMT = "%Y-%m-%dT%H:%M:%S%z"

def configure_logging(level: int | str = logging.INFO) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
        datefmt=ISO_FMT,
    )
    # SQL echo is noisy at INFO; only surface it when explicitly debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
