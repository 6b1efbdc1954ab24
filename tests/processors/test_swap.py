from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, localcontext

import pytest

from thorchain_amm.adapters.price_oracles import BasePriceOracle, PoolPriceOracle
from thorchain_amm.constants import SWAP_CONTEXT
from thorchain_amm.domain import (
    ASSET_BTC,
    ASSET_ETH,
    ASSET_RUNE_NATIVE,
    Asset,
    CryptoAmount,
    LiquidityPool,
    SwapOutput,
)
from thorchain_amm.processors import (
    get_double_swap,
    get_double_swap_fee,
    get_double_swap_output,
    get_double_swap_slip,
    get_single_swap,
    get_swap_fee,
    get_swap_output,
    get_swap_slip,
)


class DoublingOracle(BasePriceOracle):
    """Prices every non-RUNE asset at 2 RUNE per base unit and records calls."""

    def __init__(self):
        self.calls: list[tuple[CryptoAmount, Asset]] = []

    @property
    def oracle_name(self) -> str:
        return "doubling"

    async def convert(self, amount: CryptoAmount, target_asset: Asset) -> CryptoAmount:
        self.calls.append((amount, target_asset))
        if amount.asset == target_asset:
            return amount
        return CryptoAmount(amount.base_amount * 2, target_asset)


class FailingOracle(BasePriceOracle):
    @property
    def oracle_name(self) -> str:
        return "failing"

    async def convert(self, amount: CryptoAmount, target_asset: Asset) -> CryptoAmount:
        raise ConnectionError("price source unavailable")


@pytest.fixture
def btc_pool():
    return LiquidityPool.from_balances(ASSET_BTC, 1_000_000_000, 2_000_000_000)


@pytest.fixture
def small_btc_pool():
    return LiquidityPool.from_balances(ASSET_BTC, 100, 100)


@pytest.fixture
def small_eth_pool():
    return LiquidityPool.from_balances(ASSET_ETH, 300, 75)


def btc(base_amount) -> CryptoAmount:
    return CryptoAmount(Decimal(base_amount), ASSET_BTC)


def test_swap_output_to_rune(btc_pool):
    output = get_swap_output(btc(100_000_000), btc_pool, to_rune=True)

    # (1e8 * 1e9 * 2e9) / (1.1e9) ** 2 = 165289256.19...
    assert output.asset == ASSET_RUNE_NATIVE
    assert output.base_amount == Decimal(165_289_256)


def test_swap_fee_to_rune(btc_pool):
    fee = get_swap_fee(btc(100_000_000), btc_pool, to_rune=True)

    # (1e8 * 1e8 * 2e9) / (1.1e9) ** 2 = 16528925.61...
    assert fee.asset == ASSET_RUNE_NATIVE
    assert fee.base_amount == Decimal(16_528_925)


def test_swap_slip_to_rune(btc_pool):
    slip = get_swap_slip(btc(100_000_000), btc_pool, to_rune=True)

    assert slip.quantize(Decimal("0.000001"), rounding=ROUND_DOWN) == Decimal("0.090909")


def test_swap_from_rune_uses_rune_depth_as_input_side(btc_pool):
    rune = CryptoAmount(Decimal(200_000_000), ASSET_RUNE_NATIVE)

    output = get_swap_output(rune, btc_pool, to_rune=False)
    fee = get_swap_fee(rune, btc_pool, to_rune=False)
    slip = get_swap_slip(rune, btc_pool, to_rune=False)

    # (2e8 * 2e9 * 1e9) / (2.2e9) ** 2 = 82644628.09...
    assert output.asset == ASSET_BTC
    assert output.base_amount == Decimal(82_644_628)
    assert fee.asset == ASSET_BTC
    assert slip == SWAP_CONTEXT.divide(Decimal(200_000_000), Decimal(2_200_000_000))


def test_zero_input_yields_nothing(btc_pool):
    swap = get_single_swap(btc(0), btc_pool, to_rune=True)

    assert swap.output.base_amount == 0
    assert swap.swap_fee.base_amount == 0
    assert swap.slip == 0


@pytest.mark.parametrize(
    "x, X, Y",
    [
        (1, 1, 1),
        (100_000_000, 1_000_000_000, 2_000_000_000),
        (7, 13, 17),
        (123_456_789_012, 987_654_321_098_765, 555_555_555_555_555),
        (10**30, 10**28, 10**29),
    ],
)
def test_output_and_fee_match_integer_formulas(x, X, Y):
    pool = LiquidityPool.from_balances(ASSET_BTC, X, Y)
    amount = btc(x)

    output = get_swap_output(amount, pool, to_rune=True)
    fee = get_swap_fee(amount, pool, to_rune=True)

    assert output.base_amount == Decimal((x * X * Y) // (x + X) ** 2)
    # fee is the output formula with x substituted for X in the numerator
    assert fee.base_amount == Decimal((x * x * Y) // (x + X) ** 2)


def test_output_rises_until_input_equals_depth_then_falls():
    X, Y = 1_000_000, 4_000_000
    pool = LiquidityPool.from_balances(ASSET_BTC, X, Y)

    outputs = [
        get_swap_output(btc(x), pool, to_rune=True).base_amount
        for x in range(0, X + 1, X // 20)
    ]
    assert outputs == sorted(outputs)
    # peak at x == X is Y / 4
    assert outputs[-1] == Decimal(Y // 4)

    beyond = get_swap_output(btc(10 * X), pool, to_rune=True).base_amount
    assert beyond < outputs[-1]


@pytest.mark.parametrize("x", [0, 1, 10**6, 10**12, 10**24])
def test_slip_is_a_fraction_below_one(btc_pool, x):
    slip = get_swap_slip(btc(x), btc_pool, to_rune=True)
    assert Decimal(0) <= slip < Decimal(1)


def test_output_never_exceeds_output_depth(btc_pool):
    for x in (1, 10**9, 10**15, 10**21):
        output = get_swap_output(btc(x), btc_pool, to_rune=True)
        assert output.base_amount < btc_pool.rune_balance


def test_single_swap_bundles_independent_results(btc_pool):
    amount = btc(100_000_000)

    swap = get_single_swap(amount, btc_pool, to_rune=True)

    assert isinstance(swap, SwapOutput)
    assert swap.output == get_swap_output(amount, btc_pool, True)
    assert swap.swap_fee == get_swap_fee(amount, btc_pool, True)
    assert swap.slip == get_swap_slip(amount, btc_pool, True)


def test_empty_pool_raises_arithmetic_error():
    pool = LiquidityPool.from_balances(ASSET_BTC, 0, 0)
    with pytest.raises(ArithmeticError):
        get_swap_output(btc(0), pool, to_rune=True)


def test_double_swap_output_small_numbers(small_btc_pool, small_eth_pool):
    # hop 1: 100*100*100 / 200**2 = 25 RUNE
    # hop 2: 25*75*300 / 100**2 = 56.25 -> 56 ETH
    output = get_double_swap_output(btc(100), small_btc_pool, small_eth_pool)

    assert output.asset == ASSET_ETH
    assert output.base_amount == Decimal(56)


def test_double_swap_output_is_sequential_composition(btc_pool):
    eth_pool = LiquidityPool.from_balances(ASSET_ETH, 5_000_000_000, 1_000_000_000)
    amount = btc(100_000_000)

    expected = get_swap_output(get_swap_output(amount, btc_pool, True), eth_pool, False)

    assert get_double_swap_output(amount, btc_pool, eth_pool) == expected


def test_double_swap_slip_is_sum_of_hops(small_btc_pool, small_eth_pool):
    slip = get_double_swap_slip(btc(100), small_btc_pool, small_eth_pool)

    # 100 / 200 + 25 / 100
    assert slip == Decimal("0.75")


def test_double_swap_slip_is_not_combined_depth_slip(btc_pool):
    eth_pool = LiquidityPool.from_balances(ASSET_ETH, 5_000_000_000, 1_000_000_000)
    amount = btc(100_000_000)

    first = get_swap_slip(amount, btc_pool, True)
    rune = get_swap_output(amount, btc_pool, True)
    second = get_swap_slip(rune, eth_pool, False)

    assert get_double_swap_slip(amount, btc_pool, eth_pool) == SWAP_CONTEXT.add(first, second)


def test_double_swap_slip_ignores_caller_decimal_context():
    btc_pool = LiquidityPool.from_balances(ASSET_BTC, 3, 7)
    eth_pool = LiquidityPool.from_balances(ASSET_ETH, 11, 13)
    amount = btc(1)

    # hop 1: 1 / (1 + 3); hop 2 swaps 1 RUNE: 1 / (1 + 13)
    expected = SWAP_CONTEXT.add(Decimal("0.25"), SWAP_CONTEXT.divide(1, 14))

    with localcontext() as ctx:
        ctx.prec = 3
        slip = get_double_swap_slip(amount, btc_pool, eth_pool)

    assert slip == expected
    assert slip == get_double_swap_slip(amount, btc_pool, eth_pool)


@pytest.mark.asyncio
async def test_double_swap_fee_converts_each_hop_to_rune(
    small_btc_pool, small_eth_pool
):
    oracle = DoublingOracle()

    fee = await get_double_swap_fee(btc(100), small_btc_pool, small_eth_pool, oracle)

    # hop 1 fee: 25 RUNE (unchanged); hop 2 fee: 18 ETH -> 36 RUNE
    assert fee.asset == ASSET_RUNE_NATIVE
    assert fee.base_amount == Decimal(61)
    assert [target for _, target in oracle.calls] == [
        ASSET_RUNE_NATIVE,
        ASSET_RUNE_NATIVE,
    ]
    assert oracle.calls[0][0].asset == ASSET_RUNE_NATIVE
    assert oracle.calls[1][0] == CryptoAmount(Decimal(18), ASSET_ETH)


@pytest.mark.asyncio
async def test_double_swap_fee_with_pool_oracle(small_btc_pool, small_eth_pool):
    oracle = PoolPriceOracle([small_btc_pool, small_eth_pool])

    fee = await get_double_swap_fee(btc(100), small_btc_pool, small_eth_pool, oracle)

    # 18 ETH at 75 / 300 RUNE per ETH = 4.5 -> 4, plus 25 RUNE from hop 1
    assert fee == CryptoAmount(Decimal(29), ASSET_RUNE_NATIVE)


@pytest.mark.asyncio
async def test_double_swap_bundles_results(small_btc_pool, small_eth_pool):
    oracle = DoublingOracle()
    amount = btc(100)

    swap = await get_double_swap(amount, small_btc_pool, small_eth_pool, oracle)

    assert swap.output == get_double_swap_output(amount, small_btc_pool, small_eth_pool)
    assert swap.slip == get_double_swap_slip(amount, small_btc_pool, small_eth_pool)
    assert swap.swap_fee.base_amount == Decimal(61)


@pytest.mark.asyncio
async def test_double_swap_fee_propagates_oracle_errors(small_btc_pool, small_eth_pool):
    with pytest.raises(ConnectionError, match="price source unavailable"):
        await get_double_swap_fee(
            btc(100), small_btc_pool, small_eth_pool, FailingOracle()
        )
