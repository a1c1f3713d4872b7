from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when chart input violates the numeric/label contract."""
