"""
Analysis session package — request lifecycle and observable state.

Consumers (screens, CLI) call analyze/cancel/reset and read or subscribe to
the (loading, error, data) state.
"""

from speakmate.session.manager import AnalyzeSession, AnalyzeState

__all__ = ["AnalyzeSession", "AnalyzeState"]
