from __future__ import annotations

from abc import ABC, abstractmethod

from ...domain import Asset, CryptoAmount


class BasePriceOracle(ABC):
    """Abstract base class for price oracles.

    An oracle converts an amount into another asset's terms using its own
    pricing source. The swap engine depends only on ``convert``.
    """

    @property
    @abstractmethod
    def oracle_name(self) -> str:
        """Return the name of this oracle."""
        ...

    @abstractmethod
    async def convert(self, amount: CryptoAmount, target_asset: Asset) -> CryptoAmount:
        """Convert ``amount`` into ``target_asset``."""
        ...
