import logging
from typing import Iterable, Union


def setup_logging(
    level: Union[int, str] = logging.INFO,
    loggers: Iterable[str] = ("lemma_proof", "lemma_sdk", "lemma_cli"),
) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    for name in loggers:
        logging.getLogger(name).setLevel(level)
