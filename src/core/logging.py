"""Logging de la aplicación (Rich).

Por qué Rich:
- La CLI ya imprime con Rich; `RichHandler` mantiene el mismo estilo.
- Los logs van a stderr para no mezclarse con la salida JSON en stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure the root logger once and return the `sfind` logger.

    Args:
        level: Log level name (e.g. 'INFO', 'DEBUG'). Unknown names fall back
            to WARNING.
    """

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    logging.basicConfig(
        level=logging.getLevelNamesMapping().get(level.upper(), logging.WARNING),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx loguea cada request en INFO; solo lo queremos en DEBUG.
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if level.upper() == "DEBUG" else logging.WARNING
    )
    return logging.getLogger("sfind")
