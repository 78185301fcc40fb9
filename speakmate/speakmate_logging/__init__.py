"""
Structured logging for Speakmate.

JSON logs with timestamp, event_type and call context.
Use get_logger() in all modules for aggregation-friendly output.
"""

from speakmate.speakmate_logging.logger import bind_call, get_logger

__all__ = ["bind_call", "get_logger"]
