from __future__ import annotations

from .swap import (
    CHAIN_GAS_ASSETS,
    UnsupportedChain,
    calc_network_fee,
    get_chain_asset,
    get_double_swap,
    get_double_swap_fee,
    get_double_swap_output,
    get_double_swap_slip,
    get_single_swap,
    get_swap_fee,
    get_swap_output,
    get_swap_slip,
)

__all__ = [
    "CHAIN_GAS_ASSETS",
    "UnsupportedChain",
    "calc_network_fee",
    "get_chain_asset",
    "get_double_swap",
    "get_double_swap_fee",
    "get_double_swap_output",
    "get_double_swap_slip",
    "get_single_swap",
    "get_swap_fee",
    "get_swap_output",
    "get_swap_slip",
]
