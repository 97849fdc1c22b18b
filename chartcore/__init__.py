"""Core (UI-agnostic) chart logic.

This package contains:
- column metadata and chart-type suggestion
- cell coercion (typed upload path and saved-analysis replay path)
- trace and layout builders (Plotly-compatible dicts)
- spreadsheet loading (CSV/XLSX -> headers, rows, column types)
"""
