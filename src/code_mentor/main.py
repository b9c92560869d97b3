from __future__ import annotations
import logging
import uvicorn
from code_mentor.infrastructure.config import get_settings

logger = logging.getLogger("code_mentor")


def main() -> None:
    """Load settings, configure logging and serve the tool API."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    logger.info("Serving code mentor tools on %s:%d", settings.host, settings.port)
    uvicorn.run(
        "code_mentor.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
