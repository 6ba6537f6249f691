"""Gateway external reference

The application stores a small JSON document in the gateway's
externalReference field so that asynchronous events can be routed back to
the right account or withdrawal.
"""

import json
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ReferenceType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class PaymentReference(BaseModel):
    """{ userId | sellerId, type, withdrawalId? }"""

    model_config = ConfigDict(populate_by_name=True)

    type: ReferenceType
    user_id: Optional[str] = Field(default=None, alias="userId")
    seller_id: Optional[str] = Field(default=None, alias="sellerId")
    withdrawal_id: Optional[str] = Field(default=None, alias="withdrawalId")

    @classmethod
    def for_deposit(cls, account_id: str) -> "PaymentReference":
        return cls(type=ReferenceType.DEPOSIT, user_id=account_id)

    @classmethod
    def for_withdrawal(cls, withdrawal_id: str, seller_id: str) -> "PaymentReference":
        return cls(
            type=ReferenceType.WITHDRAWAL,
            withdrawal_id=withdrawal_id,
            seller_id=seller_id,
        )

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["PaymentReference"]:
        """Parse a raw externalReference; None when missing or malformed"""
        if not raw:
            return None
        try:
            return cls.model_validate(json.loads(raw))
        except (ValueError, TypeError, ValidationError):
            return None

    def dumps(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @property
    def is_deposit(self) -> bool:
        return self.type == ReferenceType.DEPOSIT and bool(self.user_id)

    @property
    def is_withdrawal(self) -> bool:
        return self.type == ReferenceType.WITHDRAWAL and bool(self.withdrawal_id)
