import logging
import sys


def configure_logging(level: int = logging.INFO) -> None:
    # stdout carries the generated code
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
