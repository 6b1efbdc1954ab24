from __future__ import annotations

from .quote import QuoteError, QuoteRequest, SwapQuote, build_quote

__all__ = ["QuoteError", "QuoteRequest", "SwapQuote", "build_quote"]
