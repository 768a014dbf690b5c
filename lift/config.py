import logging
import os

import structlog
from dotenv import load_dotenv

load_dotenv()

# Building configuration
MIN_FLOOR = int(os.getenv("LIFT_MIN_FLOOR", "1"))
MAX_FLOOR = int(os.getenv("LIFT_MAX_FLOOR", "10"))
START_FLOOR = int(os.getenv("LIFT_START_FLOOR", "1"))

# Timing, in abstract time units; TIME_UNIT_SECONDS maps one unit to wall-clock
TIME_UNIT_SECONDS = float(os.getenv("LIFT_TIME_UNIT_SECONDS", "1.0"))
DOOR_OPERATION_UNITS = float(os.getenv("LIFT_DOOR_OPERATION_UNITS", "1"))
FLOOR_TRAVEL_UNITS = float(os.getenv("LIFT_FLOOR_TRAVEL_UNITS", "3"))

# Safety bound for step_until_stop
MAX_STEPS = int(os.getenv("LIFT_MAX_STEPS", "1000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging():
    """
    Set up structured JSON logging for the application using structlog.

    This configures the standard logging module to emit plain messages,
    then initializes structlog with processors to:
      1. Timestamp logs in ISO format.
      2. Include log level and stack information.
      3. Format exception info when present.
      4. Render final output as JSON for easy ingestion into log systems.

    Call this once at startup so all modules use the same logging configuration.
    """
    if getattr(configure_logging, "_configured", False):
        return

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, LOG_LEVEL, logging.INFO),
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    configure_logging._configured = True
