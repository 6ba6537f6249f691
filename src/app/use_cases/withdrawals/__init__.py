"""Withdrawal settlement use cases"""
from .request_withdrawal import RequestWithdrawal
from .update_withdrawal_status import UpdateWithdrawalStatus
from .dtos import (
    RequestWithdrawalCommandDTO,
    UpdateWithdrawalStatusCommandDTO,
    WithdrawalResponseDTO,
)

__all__ = [
    "RequestWithdrawal",
    "UpdateWithdrawalStatus",
    "RequestWithdrawalCommandDTO",
    "UpdateWithdrawalStatusCommandDTO",
    "WithdrawalResponseDTO",
]
