"""
Speakmate — client core for the speech analysis backend.

Issues one analysis call at a time against the configured backend, validates
the response against the frozen contract, and falls back to a stub response
when no backend is configured. Split into the stateless API layer (api),
the stateful request lifecycle (session), configuration and logging.
"""

__version__ = "0.1.0"
