"""
transaction_scheduler.py
========================

Life cycle of the single schedule transaction (ST) the battery may hold.

    IDLE ──SOC crosses ST limit──▶ SCHEDULED ──t ≥ start──▶ ACTIVE
      ▲                                                       │
      └──────────────────────── t > end ──────────────────────┘

A transaction is announced ``lead_time_h`` before it starts and lasts
``contract_duration_h``.  Only one transaction exists at a time; there is
no queue.

The transition is evaluated *after* the power flows of a step have been
computed, so a transaction scheduled at step ``k`` can affect the flows of
step ``k + 1`` at the earliest.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Protocol

from .system_parameters import PCRParameters
from .transaction_state import TransactionState, TransactionType

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------- #
#  Transaction snapshot                                                 #
# --------------------------------------------------------------------- #
@dataclass(slots=True, frozen=True)
class Transaction:
    state: TransactionState = TransactionState.IDLE
    tx_type: Optional[TransactionType] = None
    power_mw: float = 0.0
    start_time: float = 0.0     # [s], absolute on the input time axis
    end_time: float = 0.0       # [s]

    @property
    def idle(self) -> bool:
        return self.state is TransactionState.IDLE

    @property
    def scheduled(self) -> bool:
        return self.state is TransactionState.SCHEDULED

    @property
    def active(self) -> bool:
        return self.state is TransactionState.ACTIVE

    def in_window(self, t: float) -> bool:
        """True while an active transaction delivers power at time ``t``."""
        return self.active and self.start_time <= t <= self.end_time


# --------------------------------------------------------------------- #
#  Event sink                                                           #
# --------------------------------------------------------------------- #
class TransactionObserver(Protocol):
    def transaction_activated(self, transaction: Transaction, t: float) -> None: ...


class LoggingTransactionObserver:
    """Default observer: one INFO record per activation."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger

    def transaction_activated(self, transaction: Transaction, t: float) -> None:
        self.log.info("%s transaction activated at t = %g", transaction.tx_type.label, t)


# --------------------------------------------------------------------- #
#  Transition function                                                  #
# --------------------------------------------------------------------- #
def schedule_transaction(
    params: PCRParameters, t: float, tx_type: TransactionType
) -> Transaction:
    """Return a SCHEDULED transaction announced at time ``t``."""
    start = t + params.lead_time_s
    return Transaction(
        state=TransactionState.SCHEDULED,
        tx_type=tx_type,
        power_mw=params.transaction_power_mw,
        start_time=start,
        end_time=start + params.contract_duration_s,
    )


def update_transaction_status(
    params: PCRParameters,
    t: float,
    energy_mwh: float,
    transaction: Transaction,
    observer: Optional[TransactionObserver] = None,
) -> Transaction:
    """
    Advance the transaction by one step and return the new snapshot.

    ``energy_mwh`` is the stored energy the flows of this step were computed
    from (not yet updated by the energy balance).  A transaction that
    completes in this call is not replaced by a new one before the next
    call.
    """
    if observer is None:
        observer = LoggingTransactionObserver()

    if transaction.active:
        if t > transaction.end_time:
            logger.debug("%s transaction completed at t = %g", transaction.tx_type.label, t)
            return Transaction()
        return transaction

    if transaction.idle:
        soc = params.soc_from_energy(energy_mwh)
        low, high = params.soc_limits_st
        if soc <= low:
            transaction = schedule_transaction(params, t, TransactionType.CHARGE)
        elif soc >= high:
            transaction = schedule_transaction(params, t, TransactionType.DISCHARGE)
        else:
            return transaction
        logger.debug(
            "%s transaction scheduled at t = %g (SOC %.2f %%), window [%g, %g]",
            transaction.tx_type.label, t, soc, transaction.start_time, transaction.end_time,
        )

    if transaction.scheduled and t >= transaction.start_time:
        transaction = replace(transaction, state=TransactionState.ACTIVE)
        observer.transaction_activated(transaction, t)

    return transaction
