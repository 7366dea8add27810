import logging
import os
from pathlib import Path


def setup_logging(log_dir: Path, verbose: bool = False) -> None:
    os.makedirs(log_dir, exist_ok=True)
    stream = logging.StreamHandler()
    stream.setLevel(logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=[
            logging.FileHandler(os.path.join(log_dir, "pomors.log"), encoding="utf-8"),
            stream,
        ],
    )
