# tests/factories.py
"""
Test doubles and event builders shared by the test suite
"""

from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from amm_indexer.clients.interfaces import PoolContractReader, TokenMetadataReader
from amm_indexer.types import events as ev
from amm_indexer.types.constants import DEFAULT_VAULT_ADDRESS, ZERO_ADDRESS
from amm_indexer.types.results import CallResult


BUSD = "0xe9e7cea3dedca5984780bafc599bd69add087d56"
USDC = "0x8ac76a51cc950d9822d68b83fe1ad97b32cd580d"
WBNB = "0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c"
BAL = "0x0ddef12012ed645f12aeb1b845cb5ad61c7423f5"
TKN = "0x" + "a1" * 20
OTHER = "0x" + "b2" * 20

VAULT_ADDRESS = DEFAULT_VAULT_ADDRESS

ALICE = "0x" + "11" * 20
BOB = "0x" + "22" * 20
CAROL = "0x" + "33" * 20
ASSET_MANAGER = "0x" + "44" * 20

WEIGHTED_FACTORY = "0x" + "f1" * 20
STABLE_FACTORY = "0x" + "f2" * 20
LBP_FACTORY = "0x" + "f3" * 20
COMPOSABLE_FACTORY = "0x" + "f4" * 20
LINEAR_FACTORY = "0x" + "f5" * 20
FX_FACTORY = "0x" + "f6" * 20

TOKEN_METADATA = {
    BUSD: ("Binance USD", "BUSD", 18),
    USDC: ("USD Coin", "USDC", 6),
    WBNB: ("Wrapped BNB", "WBNB", 18),
    BAL: ("Balancer", "BAL", 18),
    TKN: ("Test Token", "TKN", 18),
    OTHER: ("Other Token", "OTH", 8),
}

ONE = 10 ** 18


def raw(amount, decimals: int = 18) -> str:
    """Human amount to the raw integer string carried by events"""
    return str(int(Decimal(str(amount)).scaleb(decimals)))


def make_pool_id(pool_address: str, nonce: int, specialization: int = 1) -> str:
    return f"{pool_address}{specialization:04x}{nonce:020x}"


class FakeChain(PoolContractReader, TokenMetadataReader):
    """
    In-memory contract state.

    Any value not registered behaves like a reverted call.
    """

    def __init__(self):
        self.pool_ids: Dict[str, str] = {}
        self.swap_fees: Dict[str, int] = {}
        self.owners: Dict[str, str] = {}
        self.weights: Dict[str, List[int]] = {}
        self.amps: Dict[str, int] = {}
        self.pool_tokens: Dict[str, List[str]] = {}
        self.asset_managers: Dict[Tuple[str, str], str] = {}
        self.tokens: Dict[str, Tuple[str, str, int]] = dict(TOKEN_METADATA)
        self.calls: List[Tuple[str, str]] = []

    @staticmethod
    def _lookup(mapping, key) -> CallResult:
        if key in mapping:
            return CallResult.ok(mapping[key])
        return CallResult.failed()

    def get_pool_id(self, pool_address):
        self.calls.append(('get_pool_id', pool_address))
        return self._lookup(self.pool_ids, pool_address.lower())

    def get_swap_fee(self, pool_address):
        return self._lookup(self.swap_fees, pool_address.lower())

    def get_owner(self, pool_address):
        return self._lookup(self.owners, pool_address.lower())

    def get_normalized_weights(self, pool_address):
        self.calls.append(('get_normalized_weights', pool_address))
        return self._lookup(self.weights, pool_address.lower())

    def get_amplification_parameter(self, pool_address):
        self.calls.append(('get_amplification_parameter', pool_address))
        return self._lookup(self.amps, pool_address.lower())

    def get_pool_tokens(self, pool_id):
        return self._lookup(self.pool_tokens, pool_id.lower())

    def get_asset_manager(self, pool_id, token_address):
        return self._lookup(self.asset_managers, (pool_id.lower(), token_address.lower()))

    def get_name(self, token_address):
        metadata = self.tokens.get(token_address.lower())
        return CallResult.ok(metadata[0]) if metadata else CallResult.failed()

    def get_symbol(self, token_address):
        metadata = self.tokens.get(token_address.lower())
        return CallResult.ok(metadata[1]) if metadata else CallResult.failed()

    def get_decimals(self, token_address):
        metadata = self.tokens.get(token_address.lower())
        return CallResult.ok(metadata[2]) if metadata else CallResult.failed()

    def deploy_pool(self,
                    tokens: List[str],
                    weights: Optional[List[Decimal]] = None,
                    amp: Optional[int] = None,
                    swap_fee: Decimal = Decimal("0.003"),
                    include_own_token: bool = False,
                    skip_asset_managers: Tuple[str, ...] = ()) -> Tuple[str, str]:
        """Register a pool contract and its vault registration; returns (pool_address, pool_id)"""
        nonce = len(self.pool_ids) + 1
        pool_address = "0x" + f"{nonce:02x}" * 20
        pool_id = make_pool_id(pool_address, nonce)

        token_list = [t.lower() for t in tokens]
        if include_own_token:
            token_list.append(pool_address)

        self.pool_ids[pool_address] = pool_id
        self.swap_fees[pool_address] = int(swap_fee * ONE)
        self.owners[pool_address] = ZERO_ADDRESS
        self.pool_tokens[pool_id] = token_list
        self.tokens[pool_address] = (f"Pool {nonce}", f"BPT-{nonce}", 18)
        for token in token_list:
            if token not in skip_asset_managers:
                self.asset_managers[(pool_id, token)] = ASSET_MANAGER
        if weights is not None:
            self.weights[pool_address] = [int(Decimal(str(w)) * ONE) for w in weights]
        if amp is not None:
            self.amps[pool_address] = amp

        return pool_address, pool_id


class EventFactory:
    """Builds event records with increasing block numbers and unique log positions"""

    def __init__(self, timestamp: int = 1_650_000_000, block_number: int = 100):
        self.timestamp = timestamp
        self.block_number = block_number
        self._tx = 0

    def advance(self, seconds: int = 0, blocks: int = 1) -> None:
        self.timestamp += seconds
        self.block_number += blocks

    def _common(self, address: str, tx_from: Optional[str] = ALICE) -> dict:
        self._tx += 1
        return dict(
            address=address,
            block_number=self.block_number,
            timestamp=self.timestamp,
            tx_hash="0x" + f"{self._tx:064x}",
            log_index=self._tx % 7,
            tx_from=tx_from,
        )

    def pool_created(self, factory: str, pool_address: str) -> ev.PoolCreated:
        return ev.PoolCreated(pool=pool_address, **self._common(factory))

    def transfer(self, pool_address: str, sender: str, receiver: str, value) -> ev.Transfer:
        return ev.Transfer(from_=sender, to=receiver, value=raw(value), **self._common(pool_address))

    def mint(self, pool_address: str, receiver: str, value) -> ev.Transfer:
        return self.transfer(pool_address, ZERO_ADDRESS, receiver, value)

    def burn(self, pool_address: str, sender: str, value) -> ev.Transfer:
        return self.transfer(pool_address, sender, ZERO_ADDRESS, value)

    def balance_changed(self, pool_id: str, deltas: List[str], fees: Optional[List[str]] = None,
                        provider: str = ALICE) -> ev.PoolBalanceChanged:
        return ev.PoolBalanceChanged(
            pool_id=pool_id,
            liquidity_provider=provider,
            deltas=deltas,
            protocol_fee_amounts=fees or [],
            **self._common(VAULT_ADDRESS),
        )

    def balance_managed(self, pool_id: str, token: str, cash_delta: str, managed_delta: str) -> ev.PoolBalanceManaged:
        return ev.PoolBalanceManaged(
            pool_id=pool_id,
            asset_manager=ASSET_MANAGER,
            token=token,
            cash_delta=cash_delta,
            managed_delta=managed_delta,
            **self._common(VAULT_ADDRESS),
        )

    def internal_balance_changed(self, user: str, token: str, delta: str) -> ev.InternalBalanceChanged:
        return ev.InternalBalanceChanged(user=user, token=token, delta=delta, **self._common(VAULT_ADDRESS))

    def swap(self, pool_id: str, token_in: str, token_out: str, amount_in: str, amount_out: str) -> ev.Swap:
        return ev.Swap(
            pool_id=pool_id,
            token_in=token_in,
            token_out=token_out,
            amount_in=amount_in,
            amount_out=amount_out,
            **self._common(VAULT_ADDRESS),
        )

    def swap_fee_changed(self, pool_address: str, fee: Decimal) -> ev.SwapFeePercentageChanged:
        return ev.SwapFeePercentageChanged(swap_fee_percentage=raw(fee), **self._common(pool_address))

    def amp_update_started(self, pool_address: str, start: int, end: int, duration: int) -> ev.AmpUpdateStarted:
        return ev.AmpUpdateStarted(
            start_value=str(start),
            end_value=str(end),
            start_time=self.timestamp,
            end_time=self.timestamp + duration,
            **self._common(pool_address),
        )

    def amp_update_stopped(self, pool_address: str, current: int) -> ev.AmpUpdateStopped:
        return ev.AmpUpdateStopped(current_value=str(current), **self._common(pool_address))

CONFIG_DATA = {
    'network': 'bsc',
    'vault_id': '2',
    'pricing': {
        'stable_assets': [BUSD, USDC],
        'pricing_assets': [WBNB, BAL],
        'min_pool_liquidity_usd': '2000',
        'min_swap_value_usd': '1',
    },
    'factories': {
        WEIGHTED_FACTORY: {'pool_type': 'Weighted'},
        STABLE_FACTORY: {'pool_type': 'Stable'},
        LBP_FACTORY: {'pool_type': 'LiquidityBootstrapping'},
        COMPOSABLE_FACTORY: {'pool_type': 'ComposableStable', 'version': 2},
        LINEAR_FACTORY: {'pool_type': 'AaveLinear'},
        FX_FACTORY: {'pool_type': 'FX'},
    },
    'logging': {'level': 'DEBUG', 'console': False},
}
