from __future__ import annotations

from .price_oracles import BasePriceOracle, PoolPriceOracle

__all__ = ["BasePriceOracle", "PoolPriceOracle"]
