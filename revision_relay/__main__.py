"""
Revision Relay — Command-Line Entry Point
==========================================

What:  `python -m revision_relay` (or the `revision-relay` script) checks the
       configuration and starts uvicorn on the configured host and port.
How:   Settings are built when revision_relay.config is first imported, so
       that import happens inside main(). An invalid value (unknown fidelity
       mode, log level, URL template) or a missing GEMINI_API_KEY is reported
       and the process exits with status 1 before the server binds its port.
"""

import logging
import sys

import uvicorn
from pydantic import ValidationError

logger = logging.getLogger("revision_relay")


def load_settings():
    """Import the settings singleton; invalid values raise ValidationError here."""
    from revision_relay.config import settings

    return settings


def describe_validation_error(exc: ValidationError) -> str:
    """One `field: reason` entry per invalid setting, without the rejected values."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']).upper()}: {err['msg']}"
        for err in exc.errors(include_input=False)
    )


def main() -> None:
    try:
        settings = load_settings()
    except ValidationError as e:
        # setup_logging() needs settings, so report with a bare stdout handler
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            handlers=[logging.StreamHandler(sys.stdout)],
        )
        logger.critical("Invalid configuration: %s", describe_validation_error(e))
        logger.critical("Fix the configuration and restart the server.")
        sys.exit(1)

    from revision_relay.main import setup_logging

    setup_logging()

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.critical("Configuration error: %s", str(e))
        logger.critical("Fix the configuration and restart the server.")
        sys.exit(1)

    uvicorn.run(
        "revision_relay.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
