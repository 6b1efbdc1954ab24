"""Asset-tagged amounts in base units."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal, localcontext

from ..constants import SWAP_CONTEXT, THORCHAIN_DECIMALS
from ..units import scale_decimals, to_asset_amount, to_base_amount
from .chain import Asset


class AssetMismatchError(ValueError):
    """Raised when combining amounts denominated in different assets."""

    def __init__(self, left: Asset, right: Asset):
        self.left = left
        self.right = right
        super().__init__(f"Cannot combine amounts of {left} and {right}")


Scalar = Decimal | int | str


@dataclass(frozen=True)
class CryptoAmount:
    """A non-negative integral quantity of ``asset`` in its smallest unit.

    Fractional base amounts are truncated toward zero on construction, so
    every value held here is a whole number of base units.
    """

    base_amount: Decimal
    asset: Asset
    decimals: int = THORCHAIN_DECIMALS

    def __post_init__(self) -> None:
        with localcontext(SWAP_CONTEXT):
            amount = Decimal(self.base_amount).to_integral_value(ROUND_DOWN)
            amount = amount.quantize(Decimal(1))
        if amount < 0:
            raise ValueError(f"Amount must be non-negative, got {amount}")
        if self.decimals < 0:
            raise ValueError(f"decimals must be >= 0, got {self.decimals}")
        object.__setattr__(self, "base_amount", amount)

    @classmethod
    def from_asset_amount(
        cls, amount: Scalar, asset: Asset, decimals: int = THORCHAIN_DECIMALS
    ) -> CryptoAmount:
        """Build from a human-readable amount, e.g. ``1.5`` BTC."""
        return cls(to_base_amount(amount, decimals), asset, decimals)

    @property
    def asset_amount(self) -> Decimal:
        return to_asset_amount(self.base_amount, self.decimals)

    def _check(self, other: CryptoAmount) -> None:
        if self.asset != other.asset:
            raise AssetMismatchError(self.asset, other.asset)

    def _aligned(self, other: CryptoAmount) -> tuple[Decimal, Decimal, int]:
        """Both base amounts at the finer of the two precisions."""
        self._check(other)
        decimals = max(self.decimals, other.decimals)
        return (
            Decimal(scale_decimals(int(self.base_amount), self.decimals, decimals)),
            Decimal(scale_decimals(int(other.base_amount), other.decimals, decimals)),
            decimals,
        )

    def __add__(self, other: CryptoAmount) -> CryptoAmount:
        left, right, decimals = self._aligned(other)
        return CryptoAmount(left + right, self.asset, decimals)

    def __sub__(self, other: CryptoAmount) -> CryptoAmount:
        left, right, decimals = self._aligned(other)
        return CryptoAmount(left - right, self.asset, decimals)

    def times(self, factor: Scalar | CryptoAmount) -> CryptoAmount:
        if isinstance(factor, CryptoAmount):
            self._check(factor)
            factor = factor.asset_amount
        return CryptoAmount(self.base_amount * Decimal(factor), self.asset, self.decimals)

    def div(self, divisor: Scalar | CryptoAmount) -> CryptoAmount:
        if isinstance(divisor, CryptoAmount):
            self._check(divisor)
            divisor = divisor.asset_amount
        return CryptoAmount(self.base_amount / Decimal(divisor), self.asset, self.decimals)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CryptoAmount):
            return NotImplemented
        if self.asset != other.asset:
            return False
        return self.asset_amount == other.asset_amount

    def __hash__(self) -> int:
        return hash((self.asset, self.asset_amount))

    def __lt__(self, other: CryptoAmount) -> bool:
        self._check(other)
        return self.asset_amount < other.asset_amount

    def __le__(self, other: CryptoAmount) -> bool:
        self._check(other)
        return self.asset_amount <= other.asset_amount

    def __gt__(self, other: CryptoAmount) -> bool:
        self._check(other)
        return self.asset_amount > other.asset_amount

    def __ge__(self, other: CryptoAmount) -> bool:
        self._check(other)
        return self.asset_amount >= other.asset_amount

    def format(self, places: int | None = None) -> str:
        """Human-readable ``<amount> <ASSET>``; ``places`` trims trailing precision."""
        amount = self.asset_amount
        if places is not None:
            amount = amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_DOWN)
        return f"{amount:f} {self.asset}"

    def __str__(self) -> str:
        return self.format()
