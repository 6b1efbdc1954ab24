"""Protocol constants for THORChain swap and fee calculations."""

from decimal import ROUND_DOWN, Context

# THORChain normalises every pool balance to 8 decimals
THORCHAIN_DECIMALS = 8
EVM_DECIMALS = 18

# Flat outbound fee charged in RUNE for native RUNE and all synths
NATIVE_RUNE_NETWORK_FEE = 2_000_000

# Estimated tx sizes (bytes) used to turn a sat/byte gas rate into a fee
BTC_TX_SIZE = 1000
BCH_TX_SIZE = 1500
LTC_TX_SIZE = 250
DOGE_TX_SIZE = 1000

# Gas limit applied to an EVM outbound; the gas rate is quoted in gwei
EVM_GAS_LIMIT = 80_000

# Large enough that products of three uint128-sized balances stay exact
SWAP_PRECISION = 120

SWAP_CONTEXT = Context(prec=SWAP_PRECISION, rounding=ROUND_DOWN)
