"""Deposit settlement use cases"""
from .create_deposit import CreateDeposit
from .check_deposit_status import CheckDepositStatus
from .settle_deposit import SettleDeposit
from .process_gateway_event import ProcessGatewayEvent
from .dtos import (
    CreateDepositCommandDTO,
    DepositResponseDTO,
    DepositStatusResponseDTO,
    GatewayEventDTO,
    GatewayPaymentDTO,
    GatewayEventResultDTO,
)

__all__ = [
    "CreateDeposit",
    "CheckDepositStatus",
    "SettleDeposit",
    "ProcessGatewayEvent",
    "CreateDepositCommandDTO",
    "DepositResponseDTO",
    "DepositStatusResponseDTO",
    "GatewayEventDTO",
    "GatewayPaymentDTO",
    "GatewayEventResultDTO",
]
