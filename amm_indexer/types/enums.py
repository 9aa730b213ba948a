# amm_indexer/types/enums.py

import enum


class JoinExitType(enum.Enum):
    JOIN = "Join"
    EXIT = "Exit"


class ManagementOperationType(enum.Enum):
    DEPOSIT = "Deposit"
    WITHDRAW = "Withdraw"
    UPDATE = "Update"

    @classmethod
    def from_cash_delta(cls, cash_delta: int) -> 'ManagementOperationType':
        if cash_delta > 0:
            return cls.DEPOSIT
        if cash_delta < 0:
            return cls.WITHDRAW
        return cls.UPDATE


class BalanceDirection(enum.Enum):
    """Whether an amount enters (swap in, join) or leaves (swap out, exit) a pool"""
    IN = "in"
    OUT = "out"
