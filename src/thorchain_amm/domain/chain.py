"""Chain identifiers and asset identity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UnknownChain(ValueError):
    """Raised when a chain identifier is not one of the supported chains."""

    def __init__(self, chain: str):
        self.chain = chain
        super().__init__(f"Unknown chain: {chain}")


class Chain(str, Enum):
    BITCOIN = "BTC"
    BITCOIN_CASH = "BCH"
    LITECOIN = "LTC"
    DOGE = "DOGE"
    BINANCE = "BNB"
    ETHEREUM = "ETH"
    AVALANCHE = "AVAX"
    TERRA = "TERRA"
    COSMOS = "GAIA"
    THORCHAIN = "THOR"

    @classmethod
    def parse(cls, value: Chain | str) -> Chain:
        """Resolve a chain from its ticker, case-insensitively."""
        if isinstance(value, Chain):
            return value
        try:
            return cls(value.upper())
        except ValueError:
            raise UnknownChain(value) from None


@dataclass(frozen=True)
class Asset:
    """A fungible unit on a chain.

    ``symbol`` may carry a contract suffix (``USDC-0XA0B8...``) while
    ``ticker`` is the bare token name.
    """

    chain: Chain
    symbol: str
    ticker: str
    synth: bool = False

    @property
    def separator(self) -> str:
        return "/" if self.synth else "."

    def __str__(self) -> str:
        return f"{self.chain.value}{self.separator}{self.symbol}"

    @classmethod
    def from_string(cls, value: str) -> Asset:
        """Parse ``CHAIN.SYMBOL`` (native) or ``CHAIN/SYMBOL`` (synth).

        Raises:
            ValueError: If the string has no chain separator or an empty symbol
            UnknownChain: If the chain part is not supported
        """
        synth = "/" in value
        separator = "/" if synth else "."
        chain_part, sep, symbol = value.strip().partition(separator)
        if not sep or not symbol:
            raise ValueError(f"Invalid asset string: {value!r}")

        symbol = symbol.upper()
        ticker = symbol.split("-", 1)[0]
        return cls(
            chain=Chain.parse(chain_part),
            symbol=symbol,
            ticker=ticker,
            synth=synth,
        )

    def to_native(self) -> Asset:
        """Return the layer-1 asset a synth represents (identity for natives)."""
        if not self.synth:
            return self
        return Asset(chain=self.chain, symbol=self.symbol, ticker=self.ticker)


ASSET_BTC = Asset(Chain.BITCOIN, "BTC", "BTC")
ASSET_BCH = Asset(Chain.BITCOIN_CASH, "BCH", "BCH")
ASSET_LTC = Asset(Chain.LITECOIN, "LTC", "LTC")
ASSET_DOGE = Asset(Chain.DOGE, "DOGE", "DOGE")
ASSET_BNB = Asset(Chain.BINANCE, "BNB", "BNB")
ASSET_ETH = Asset(Chain.ETHEREUM, "ETH", "ETH")
ASSET_AVAX = Asset(Chain.AVALANCHE, "AVAX", "AVAX")
ASSET_LUNA = Asset(Chain.TERRA, "LUNA", "LUNA")
ASSET_ATOM = Asset(Chain.COSMOS, "ATOM", "ATOM")
ASSET_RUNE_NATIVE = Asset(Chain.THORCHAIN, "RUNE", "RUNE")


def is_rune(asset: Asset) -> bool:
    return asset == ASSET_RUNE_NATIVE
