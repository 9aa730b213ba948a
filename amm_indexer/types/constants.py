# amm_indexer/types/constants.py

from .new import EvmAddress


ZERO_ADDRESS = EvmAddress("0x" + "0" * 40)

SECONDS_PER_DAY = 86400

# Liquidity tokens always use 18 decimals; swap fees and weights are 18-decimal fixed point
BPT_DECIMALS = 18
FIXED_POINT_DECIMALS = 18

DEFAULT_VAULT_ADDRESS = EvmAddress("0xba12222222228d8ba445958a75a0704d566bf2c8")
