from luvatrix_charts.adapters.normalize import normalize_series

__all__ = ["normalize_series"]
