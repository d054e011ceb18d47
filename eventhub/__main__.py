# -*- coding: utf-8 -*-
"""Запуск API: ``python -m eventhub``."""

import uvicorn

from eventhub.config.uvicorn_config import get_uvicorn_config


def main() -> None:
    uvicorn.run(**get_uvicorn_config())


if __name__ == "__main__":
    main()
