"""Report rendering module."""
from .generator import ReportGenerator, filter_totals, sort_rows, paginate

__all__ = ["ReportGenerator", "filter_totals", "sort_rows", "paginate"]
