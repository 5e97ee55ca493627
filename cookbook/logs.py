import logging

from rich.logging import RichHandler


_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Route stdlib logging through rich.

    The handler is installed once. Every call sets the root level.
    """
    global _configured
    if not _configured:
        logging.basicConfig(
            format="%(name)s: %(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        )
        _configured = True
    logging.getLogger().setLevel(level.upper())
