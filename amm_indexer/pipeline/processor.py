# amm_indexer/pipeline/processor.py

from decimal import localcontext
from typing import Callable, Dict, Iterable, Optional, Type

from ..core.logging import LoggingMixin
from ..database.store import EntityStore
from ..services.ledger import BalanceLedger
from ..services.pools import PoolRegistry
from ..services.swaps import SwapProcessor
from ..types import events as ev
from ..types.errors import DataIntegrityError, ProcessingError
from ..types.events import normalize_event
from ..utils.amounts import SCALING_PRECISION


Handler = Callable[[ev.EventRecord], Optional[ProcessingError]]


class EventProcessor(LoggingMixin):
    """
    Dispatches each event to exactly one handler and commits it.

    Events are applied strictly one at a time. A recoverable drop is
    committed like any other event; a fatal error rolls back every mutation
    of the event and propagates.
    """

    def __init__(self,
                 store: EntityStore,
                 ledger: BalanceLedger,
                 pools: PoolRegistry,
                 swaps: SwapProcessor):
        self.store = store
        self.processed = 0
        self.skipped = 0

        self.handler_map: Dict[Type[ev.EventRecord], Handler] = {
            ev.PoolCreated: pools.handle_pool_created,
            ev.Transfer: ledger.handle_transfer,
            ev.SwapFeePercentageChanged: pools.handle_swap_fee_changed,
            ev.AmpUpdateStarted: pools.handle_amp_update_started,
            ev.AmpUpdateStopped: pools.handle_amp_update_stopped,
            ev.PoolBalanceChanged: ledger.handle_pool_balance_changed,
            ev.PoolBalanceManaged: ledger.handle_pool_balance_managed,
            ev.InternalBalanceChanged: ledger.handle_internal_balance_changed,
            ev.Swap: swaps.handle_swap,
        }

    def process(self, event: ev.EventRecord) -> Optional[ProcessingError]:
        event = normalize_event(event)
        handler = self.handler_map.get(type(event))
        if handler is None:
            raise ValueError(f"No handler registered for event type {event.event_type}")

        try:
            # ledger sums must stay exact at full uint256 width
            with localcontext() as ctx:
                ctx.prec = SCALING_PRECISION
                error = handler(event)
        except DataIntegrityError as e:
            self.store.rollback()
            context = self.log_event_context(event, event_type=event.event_type, error=str(e))
            context.update(e.context)
            self.log_error("Data integrity violation, event rolled back", **context)
            raise
        except Exception as e:
            self.store.rollback()
            self.log_error("Event processing failed, event rolled back",
                           **self.log_event_context(event,
                                                    event_type=event.event_type,
                                                    error=str(e),
                                                    exception_type=type(e).__name__))
            raise

        self.store.commit()

        if error is not None:
            self.skipped += 1
            context = self.log_event_context(event,
                                             event_type=event.event_type,
                                             error_type=error.error_type,
                                             error_id=error.error_id)
            context.update(error.context or {})
            self.log_warning(error.message, **context)
        else:
            self.processed += 1

        return error

    def process_many(self, events: Iterable[ev.EventRecord]) -> Dict[str, int]:
        """Process events in order, stopping at the first fatal error"""
        for event in events:
            self.process(event)

        self.log_info("Event batch complete", processed=self.processed, skipped=self.skipped)
        return self.stats()

    def stats(self) -> Dict[str, int]:
        return {'processed': self.processed, 'skipped': self.skipped}
