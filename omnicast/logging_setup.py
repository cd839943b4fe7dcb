"""
Structured logging setup for Lambda & local development.

PURPOSE:
- Configure consistent JSON-formatted logs for every Omnicast function.
- Logs are structured so they can be queried in CloudWatch Insights by
  service, request_id and correlation_id.

CONTEXT:
- Called once at import time by each handler module in omnicast.handlers.
"""

from __future__ import annotations
import logging
import os
import sys
import structlog


def configure_logging(service: str = "omnicast"):
    """
    Configure structured JSON logging for the current environment.

    parameters:
    - service: str – function name bound onto every log line (e.g. 'backboard-proxy').

    returns:
    - structlog.BoundLogger – logger bound with service and env metadata.

    behaviour:
    - Reads log level from LOG_LEVEL (default = INFO).
    - Directs logs to stdout so AWS Lambda captures them.

    example log entry:
    {
      "event": "proxy.response",
      "level": "info",
      "timestamp": "2026-01-14T13:00:00Z",
      "service": "backboard-proxy",
      "env": "dev",
      "status": 200
    }
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
    )

    # Configure once per process: loggers bound at import share one processor list.
    if not structlog.is_configured():
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.processors.JSONRenderer(),
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    return structlog.get_logger().bind(service=service, env=os.getenv("ENV", "dev"))
