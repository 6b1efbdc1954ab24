"""Constant-product swap math, network fees and chain gas assets.

Every function here is pure: pool snapshots and amounts go in, new values
come out. The only coroutines are the double-swap fee helpers, which await
the injected price oracle.
"""

from __future__ import annotations

from decimal import Decimal, localcontext

from eth_utils import to_wei

from ..adapters.price_oracles.base import BasePriceOracle
from ..constants import (
    BCH_TX_SIZE,
    BTC_TX_SIZE,
    DOGE_TX_SIZE,
    EVM_DECIMALS,
    EVM_GAS_LIMIT,
    LTC_TX_SIZE,
    NATIVE_RUNE_NETWORK_FEE,
    SWAP_CONTEXT,
    THORCHAIN_DECIMALS,
)
from ..domain import (
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
    CryptoAmount,
    LiquidityPool,
    SwapOutput,
    UnknownChain,
)


class UnsupportedChain(ValueError):
    """Raised when no network fee formula exists for a chain."""

    def __init__(self, chain: str):
        self.chain = chain
        super().__init__(f"Could not calculate network fee for chain {chain}")


def _depths(pool: LiquidityPool, to_rune: bool) -> tuple[Decimal, Decimal]:
    """(input side X, output side Y) for the swap direction."""
    if to_rune:
        return pool.asset_balance, pool.rune_balance
    return pool.rune_balance, pool.asset_balance


def _output_asset(pool: LiquidityPool, to_rune: bool) -> Asset:
    return ASSET_RUNE_NATIVE if to_rune else pool.asset


def get_swap_output(
    input_amount: CryptoAmount, pool: LiquidityPool, to_rune: bool
) -> CryptoAmount:
    """Output of swapping ``input_amount`` through ``pool``.

    Formula: ``(x * X * Y) / (x + X) ** 2``

    Args:
        input_amount: Amount to swap, in base units
        pool: Pool snapshot with RUNE and asset depths
        to_rune: True if swapping the pool asset into RUNE

    Returns:
        The output amount, truncated to whole base units. It is tagged
        with RUNE when ``to_rune`` is set and with ``pool.asset``
        otherwise, not with the input's asset, so a RUNE -> asset output
        (and its fee) carries the asset it is actually paid in.
    """
    x = input_amount.base_amount
    X, Y = _depths(pool, to_rune)
    with localcontext(SWAP_CONTEXT):
        numerator = x * X * Y
        denominator = (x + X) ** 2
        result = numerator / denominator
    return CryptoAmount(result, _output_asset(pool, to_rune), THORCHAIN_DECIMALS)


def get_swap_fee(
    input_amount: CryptoAmount, pool: LiquidityPool, to_rune: bool
) -> CryptoAmount:
    """Liquidity fee of a swap, denominated in the output asset.

    Formula: ``(x * x * Y) / (x + X) ** 2``
    """
    x = input_amount.base_amount
    X, Y = _depths(pool, to_rune)
    with localcontext(SWAP_CONTEXT):
        numerator = x * x * Y
        denominator = (x + X) ** 2
        result = numerator / denominator
    return CryptoAmount(result, _output_asset(pool, to_rune), THORCHAIN_DECIMALS)


def get_swap_slip(
    input_amount: CryptoAmount, pool: LiquidityPool, to_rune: bool
) -> Decimal:
    """Works out the slip of a swap as ``x / (x + X)``.

    Returns:
        The slip as a fraction. Multiply by 100 to get a percentage.
    """
    x = input_amount.base_amount
    X, _ = _depths(pool, to_rune)
    with localcontext(SWAP_CONTEXT):
        return x / (x + X)


def get_single_swap(
    input_amount: CryptoAmount, pool: LiquidityPool, to_rune: bool
) -> SwapOutput:
    return SwapOutput(
        output=get_swap_output(input_amount, pool, to_rune),
        swap_fee=get_swap_fee(input_amount, pool, to_rune),
        slip=get_swap_slip(input_amount, pool, to_rune),
    )


def get_double_swap_output(
    input_amount: CryptoAmount, pool1: LiquidityPool, pool2: LiquidityPool
) -> CryptoAmount:
    """Swap into RUNE through ``pool1``, then out of RUNE through ``pool2``."""
    rune = get_swap_output(input_amount, pool1, True)
    return get_swap_output(rune, pool2, False)


def get_double_swap_slip(
    input_amount: CryptoAmount, pool1: LiquidityPool, pool2: LiquidityPool
) -> Decimal:
    """Sum of both hops' slips; hop 2 is measured on hop 1's output."""
    first = get_single_swap(input_amount, pool1, True)
    second = get_single_swap(first.output, pool2, False)
    with localcontext(SWAP_CONTEXT):
        return first.slip + second.slip


async def get_double_swap_fee(
    input_amount: CryptoAmount,
    pool1: LiquidityPool,
    pool2: LiquidityPool,
    price_oracle: BasePriceOracle,
) -> CryptoAmount:
    """Total liquidity fee of a double swap, in RUNE.

    Each hop's fee is converted to RUNE through ``price_oracle`` before
    summing. Oracle errors propagate unchanged.
    """
    fee1 = get_swap_fee(input_amount, pool1, True)
    fee1_in_rune = await price_oracle.convert(fee1, ASSET_RUNE_NATIVE)
    rune = get_swap_output(input_amount, pool1, True)
    fee2 = get_swap_fee(rune, pool2, False)
    fee2_in_rune = await price_oracle.convert(fee2, ASSET_RUNE_NATIVE)
    return fee1_in_rune + fee2_in_rune


async def get_double_swap(
    input_amount: CryptoAmount,
    pool1: LiquidityPool,
    pool2: LiquidityPool,
    price_oracle: BasePriceOracle,
) -> SwapOutput:
    output = get_double_swap_output(input_amount, pool1, pool2)
    fee = await get_double_swap_fee(input_amount, pool1, pool2, price_oracle)
    slip = get_double_swap_slip(input_amount, pool1, pool2)
    return SwapOutput(output=output, swap_fee=fee, slip=slip)


def _evm_fee(gas_rate: Decimal, gas_asset: Asset) -> CryptoAmount:
    # gas rate is quoted in gwei
    fee_in_gwei = Decimal(gas_rate) * EVM_GAS_LIMIT
    fee_in_wei = to_wei(fee_in_gwei, "gwei")
    return CryptoAmount(Decimal(fee_in_wei), gas_asset, EVM_DECIMALS)


def calc_network_fee(asset: Asset, gas_rate: Decimal | int) -> CryptoAmount:
    """Outbound network fee for sending ``asset`` at the chain's ``gas_rate``.

    Synths always pay the flat RUNE fee. UTXO chains scale the sat/byte
    rate by an estimated tx size, EVM chains by a fixed gas limit.

    Raises:
        UnsupportedChain: If the asset's chain has no fee formula
    """
    if asset.synth:
        return CryptoAmount(Decimal(NATIVE_RUNE_NETWORK_FEE), ASSET_RUNE_NATIVE)

    rate = Decimal(gas_rate)
    match asset.chain:
        case Chain.BITCOIN:
            return CryptoAmount(rate * BTC_TX_SIZE, ASSET_BTC)
        case Chain.BITCOIN_CASH:
            return CryptoAmount(rate * BCH_TX_SIZE, ASSET_BCH)
        case Chain.LITECOIN:
            return CryptoAmount(rate * LTC_TX_SIZE, ASSET_LTC)
        case Chain.DOGE:
            return CryptoAmount(rate * DOGE_TX_SIZE, ASSET_DOGE)
        case Chain.BINANCE:
            # flat fee
            return CryptoAmount(rate, ASSET_BNB)
        case Chain.ETHEREUM:
            return _evm_fee(rate, ASSET_ETH)
        case Chain.AVALANCHE:
            return _evm_fee(rate, ASSET_AVAX)
        case Chain.TERRA:
            return CryptoAmount(rate, ASSET_LUNA)
        case Chain.COSMOS:
            return CryptoAmount(rate, ASSET_ATOM)
        case Chain.THORCHAIN:
            return CryptoAmount(Decimal(NATIVE_RUNE_NETWORK_FEE), ASSET_RUNE_NATIVE)
        case _:
            raise UnsupportedChain(asset.chain)


CHAIN_GAS_ASSETS: dict[Chain, Asset] = {
    Chain.BINANCE: ASSET_BNB,
    Chain.BITCOIN: ASSET_BTC,
    Chain.ETHEREUM: ASSET_ETH,
    Chain.THORCHAIN: ASSET_RUNE_NATIVE,
    Chain.COSMOS: ASSET_ATOM,
    Chain.BITCOIN_CASH: ASSET_BCH,
    Chain.LITECOIN: ASSET_LTC,
    Chain.DOGE: ASSET_DOGE,
    Chain.TERRA: ASSET_LUNA,
    Chain.AVALANCHE: ASSET_AVAX,
}


def get_chain_asset(chain: Chain | str) -> Asset:
    """Gas asset of ``chain``.

    Raises:
        UnknownChain: If ``chain`` is not a supported chain
    """
    resolved = Chain.parse(chain)
    try:
        return CHAIN_GAS_ASSETS[resolved]
    except KeyError:
        raise UnknownChain(resolved.value) from None
