from __future__ import annotations

from .formatter import format_quote_table, format_slip, quote_as_dict

__all__ = ["format_quote_table", "format_slip", "quote_as_dict"]
