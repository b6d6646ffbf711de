import logging

import pytest

from bess_pcr.system_parameters import PCRParameters
from bess_pcr.transaction_scheduler import (
    LoggingTransactionObserver,
    Transaction,
    schedule_transaction,
    update_transaction_status,
)
from bess_pcr.transaction_state import TransactionState, TransactionType

LOW_E = 0.7     # 35 %
MID_E = 0.8     # 40 %
HIGH_E = 1.0    # 50 %


def test_idle_inside_limits_stays_idle(params, observer):
    tx = Transaction()
    assert update_transaction_status(params, 10.0, MID_E, tx, observer) is tx
    assert observer.events == []


def test_low_soc_schedules_charge(params, observer):
    tx = update_transaction_status(params, 10.0, LOW_E, Transaction(), observer)
    assert tx.state is TransactionState.SCHEDULED
    assert tx.tx_type is TransactionType.CHARGE
    assert tx.power_mw == 0.5
    assert tx.start_time == 10.0 + 2700
    assert tx.end_time == tx.start_time + 1800
    assert observer.events == []


def test_high_soc_schedules_discharge(params, observer):
    tx = update_transaction_status(params, 10.0, HIGH_E, Transaction(), observer)
    assert tx.scheduled
    assert tx.tx_type is TransactionType.DISCHARGE


def test_threshold_is_inclusive(observer):
    p = PCRParameters(soc_limits_st=(40.0, 60.0))
    tx = update_transaction_status(p, 0.0, 0.8, Transaction(), observer)
    assert tx.tx_type is TransactionType.CHARGE


def test_scheduled_waits_for_start(params, observer):
    tx = schedule_transaction(params, 0.0, TransactionType.CHARGE)
    assert update_transaction_status(params, 2699.0, MID_E, tx, observer) is tx
    assert observer.events == []


def test_scheduled_activates_at_start(params, observer):
    tx = schedule_transaction(params, 0.0, TransactionType.CHARGE)
    active = update_transaction_status(params, 2700.0, MID_E, tx, observer)
    assert active.active
    assert (active.start_time, active.end_time) == (tx.start_time, tx.end_time)
    assert observer.events == [(active, 2700.0)]


def test_scheduled_ignores_soc(params, observer):
    tx = schedule_transaction(params, 0.0, TransactionType.CHARGE)
    assert update_transaction_status(params, 100.0, HIGH_E, tx, observer) is tx


def test_active_until_end(params, observer):
    tx = Transaction(TransactionState.ACTIVE, TransactionType.CHARGE, 0.5, 100.0, 200.0)
    assert update_transaction_status(params, 200.0, LOW_E, tx, observer) is tx


def test_completion_does_not_reschedule_in_same_call(params, observer):
    tx = Transaction(TransactionState.ACTIVE, TransactionType.CHARGE, 0.5, 100.0, 200.0)
    done = update_transaction_status(params, 201.0, LOW_E, tx, observer)
    assert done.idle
    again = update_transaction_status(params, 202.0, LOW_E, done, observer)
    assert again.scheduled
    assert again.start_time == 202.0 + 2700


def test_zero_lead_time_activates_immediately(observer):
    p = PCRParameters(lead_time_h=0.0)
    tx = update_transaction_status(p, 50.0, LOW_E, Transaction(), observer)
    assert tx.active
    assert tx.start_time == 50.0
    assert len(observer.events) == 1


def test_states_are_mutually_exclusive():
    for state in TransactionState:
        tx = Transaction(state=state)
        assert [tx.idle, tx.scheduled, tx.active].count(True) == 1


def test_in_window_requires_active():
    tx = Transaction(TransactionState.SCHEDULED, TransactionType.CHARGE, 0.5, 0.0, 10.0)
    assert not tx.in_window(5.0)
    tx = Transaction(TransactionState.ACTIVE, TransactionType.CHARGE, 0.5, 0.0, 10.0)
    assert tx.in_window(0.0) and tx.in_window(10.0)
    assert not tx.in_window(10.5)


def test_logging_observer(params, caplog):
    tx = schedule_transaction(params, 0.0, TransactionType.DISCHARGE)
    with caplog.at_level(logging.INFO, logger="bess_pcr.transaction_scheduler"):
        update_transaction_status(params, 2700.0, MID_E, tx, LoggingTransactionObserver())
    assert "Discharging transaction activated at t = 2700" in caplog.text


def test_default_observer_logs(params, caplog):
    tx = schedule_transaction(params, 0.0, TransactionType.CHARGE)
    with caplog.at_level(logging.INFO, logger="bess_pcr.transaction_scheduler"):
        update_transaction_status(params, 3000.0, MID_E, tx)
    assert "Charging transaction activated at t = 3000" in caplog.text


@pytest.mark.parametrize("tx_type, label", [(TransactionType.CHARGE, "Charging"), (TransactionType.DISCHARGE, "Discharging")])
def test_type_labels(tx_type, label):
    assert tx_type.label == label
    assert int(tx_type) in (1, -1)
