"""
transaction_state.py
====================

Enumerations describing a schedule transaction.

    • TransactionState  → IDLE / SCHEDULED / ACTIVE (mutually exclusive)
    • TransactionType   → CHARGE (+1) / DISCHARGE (−1)

The integer value of :class:`TransactionType` is the sign applied to the
transaction power when it is added to the battery power output.
"""

from enum import Enum, IntEnum


class TransactionState(Enum):
    IDLE = "IDLE"
    SCHEDULED = "SCHEDULED"
    ACTIVE = "ACTIVE"


class TransactionType(IntEnum):
    CHARGE = 1
    DISCHARGE = -1

    @property
    def label(self) -> str:
        """Human readable name used in log records."""
        return "Charging" if self is TransactionType.CHARGE else "Discharging"
