"""Spreadsheet report engine for educational exports.

Classifies a sheet by its headers, extracts findings for one of six report
shapes and renders them as chunked text.
"""

__version__ = "0.1.0"
