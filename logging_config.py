"""
Logging Configuration

Centralized logging configuration for applications built on orbit_engine.
The library modules only create named loggers; handlers are installed by
the application calling :func:`configure_logging`.

Usage:
    import logging

    from logging_config import configure_logging, get_logger
    from orbit_engine.propagation import SatellitePropagator

    configure_logging(logging.DEBUG, log_file="orbit.log")
    logger = get_logger("orbit_engine.app")

    # parse_elements warns about checksum mismatches and logs decode errors
    propagator = SatellitePropagator.from_tle(line1, line2)
    result = propagator.propagate(1440.0)
    if result.ok:
        logger.info(f"{propagator.method} position at one day: {result.position} km")

    # at DEBUG, ephemeris type H records also log each RK4 run, e.g.
    # "orbit_engine.high_ephemeris - DEBUG - RK4 covered 0.500000 days in 112 steps";
    # failed propagations are logged by orbit_engine.propagation at ERROR
"""

import logging
import sys
from typing import Optional

# Default logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the entire application.

    Parameters
    ----------
    level : int
        Logging level (e.g., logging.DEBUG, logging.INFO)
    log_file : str, optional
        Path to log file. If None, logs only to console.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
    logging.getLogger("orbit_engine").setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Parameters
    ----------
    name : str
        Name of the logger (typically __name__)

    Returns
    -------
    logging.Logger
        Logger instance
    """
    return logging.getLogger(name)
