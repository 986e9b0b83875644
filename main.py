from __future__ import annotations

from api import run
from common.logging import setup_default_logging

if __name__ == "__main__":
    setup_default_logging()
    run()
