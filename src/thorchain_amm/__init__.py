"""Constant-product swap pricing for THORChain liquidity pools."""

from __future__ import annotations

from .adapters import BasePriceOracle, PoolPriceOracle
from .domain import (
    ASSET_RUNE_NATIVE,
    Asset,
    AssetMismatchError,
    Chain,
    CryptoAmount,
    LiquidityPool,
    SwapOutput,
    UnknownChain,
)
from .processors import (
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
    "ASSET_RUNE_NATIVE",
    "Asset",
    "AssetMismatchError",
    "BasePriceOracle",
    "Chain",
    "CryptoAmount",
    "LiquidityPool",
    "PoolPriceOracle",
    "SwapOutput",
    "UnknownChain",
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
