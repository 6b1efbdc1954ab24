from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .amount import CryptoAmount


@dataclass(frozen=True)
class SwapOutput:
    """Output, fee and slip of a single or double swap.

    ``swap_fee`` is denominated in the output asset for single swaps and
    in RUNE for double swaps. ``slip`` is a fraction; multiply by 100 for
    a percentage.
    """

    output: CryptoAmount
    swap_fee: CryptoAmount
    slip: Decimal
