"""
Logging utilities for the Events Manager.
Provides standardized logging configuration and helpers.
"""

import logging
import sys
from typing import Optional, Dict, Any
from datetime import datetime, timezone


def setup_logging(level: str = "INFO", service_name: str = "events") -> logging.Logger:
    """
    Setup standardized logging for the service.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        service_name: Name of the service for log identification

    Returns:
        Configured root logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(
        f'[%(asctime)s] {service_name.upper()}: %(levelname)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(console_handler)

    return logger


def log_event_change(action: str, event_id: Optional[int] = None,
                     changes: Optional[Dict[str, Any]] = None) -> None:
    """
    Log a mutation of an event row with standard format.

    Args:
        action: One of created, updated, deleted
        event_id: Event ID if known
        changes: Field names touched by the mutation
    """
    logger = logging.getLogger('events.audit')
    log_data: Dict[str, Any] = {
        'action': action,
        'timestamp': datetime.now(timezone.utc).isoformat()
    }

    if event_id is not None:
        log_data['event_id'] = event_id

    if changes:
        log_data['fields'] = sorted(changes)

    logger.info(f"Event {action}: {log_data}")
