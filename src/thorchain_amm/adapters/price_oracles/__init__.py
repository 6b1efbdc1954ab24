from __future__ import annotations

from .base import BasePriceOracle
from .pool import PoolPriceOracle

__all__ = ["BasePriceOracle", "PoolPriceOracle"]
