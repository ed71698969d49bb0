"""Report rendering for analysis profiles."""

from .renderer import PLACEHOLDERS, ReportRenderer, language_shares

__all__ = ["PLACEHOLDERS", "ReportRenderer", "language_shares"]
