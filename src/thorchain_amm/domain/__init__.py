"""Domain models for the swap engine."""

from __future__ import annotations

from .amount import AssetMismatchError, CryptoAmount
from .chain import (
    ASSET_ATOM,
    ASSET_AVAX,
    ASSET_BCH,
    ASSET_BNB,
    ASSET_BTC,
    ASSET_DOGE,
    ASSET_ETH,
    ASSET_LTC,
    ASSET_LUNA,
    ASSET_RUNE_NATIVE,
    Asset,
    Chain,
    UnknownChain,
    is_rune,
)
from .pool import LiquidityPool
from .swap_output import SwapOutput

__all__ = [
    "ASSET_ATOM",
    "ASSET_AVAX",
    "ASSET_BCH",
    "ASSET_BNB",
    "ASSET_BTC",
    "ASSET_DOGE",
    "ASSET_ETH",
    "ASSET_LTC",
    "ASSET_LUNA",
    "ASSET_RUNE_NATIVE",
    "Asset",
    "AssetMismatchError",
    "Chain",
    "CryptoAmount",
    "LiquidityPool",
    "SwapOutput",
    "UnknownChain",
    "is_rune",
]
