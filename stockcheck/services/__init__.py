"""
StockCheck services.

Business logic for stock reconciliation, result rendering and bin analysis.
"""

from stockcheck.services.formatters import (
    RenderView,
    format_invoice_list,
    format_pick_route,
    format_picking_list,
    format_stock_update_csv,
    format_summary,
    render,
)
from stockcheck.services.stock_analysis import (
    BinAnalysis,
    BinUsage,
    analyze_bins,
    extract_bin_location,
    format_bin_analysis,
    location_sort_key,
    sort_bins,
)
from stockcheck.services.stock_matching import (
    allocate,
    allocate_all,
    classify_status,
    match,
    match_want,
    pick_counts,
    summarize,
)

__all__ = [
    "BinAnalysis",
    "BinUsage",
    "RenderView",
    "allocate",
    "allocate_all",
    "analyze_bins",
    "classify_status",
    "extract_bin_location",
    "format_bin_analysis",
    "format_invoice_list",
    "format_pick_route",
    "format_picking_list",
    "format_stock_update_csv",
    "format_summary",
    "location_sort_key",
    "match",
    "match_want",
    "pick_counts",
    "render",
    "sort_bins",
    "summarize",
]
