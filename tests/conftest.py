"""
Shared pytest configuration.

Log events are rendered but discarded so they never mix with report output
captured by the tests.
"""

import structlog

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.dev.ConsoleRenderer(colors=False)
    ],
    logger_factory=structlog.ReturnLoggerFactory()
)
