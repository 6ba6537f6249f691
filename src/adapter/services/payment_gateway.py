"""Asaas Payment Gateway Client

httpx implementation of PaymentGateway. Every call is a single request with
the configured timeout; nothing is retried here.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Optional
import httpx
from libs.result import Result, Return, Error
from src.app import errors
from src.app.services.payment_gateway import (
    BillingType,
    DepositIntent,
    PaymentGateway,
    PaymentStatus,
    TransferReceipt,
)
from src.domain.account import Account, normalize_tax_id
from src.domain.money import to_money
from src.domain.payment_reference import PaymentReference
from src.domain.withdrawal import PixKeyType

logger = logging.getLogger(__name__)


class AsaasPaymentGateway(PaymentGateway):
    """
    Payment gateway backed by the Asaas v3 REST API

    Endpoints used:
    - POST /customers (409 when the customer exists), GET /customers?email=
    - POST /payments, GET /payments/{id}, GET /payments/{id}/pixQrCode
    - POST /transfers

    Error mapping:
    - Timeout, transport error, 5xx -> GATEWAY_UNAVAILABLE
    - 4xx or an "errors" array in the body -> GATEWAY_REJECTED
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        min_deposit_amount: Decimal = Decimal("5.00"),
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize gateway client

        Args:
            base_url: API root, e.g. https://api.asaas.com/v3
            api_key: Static service credential sent as access_token header
            timeout: Request timeout in seconds
            min_deposit_amount: Smallest deposit accepted before calling out
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.min_deposit_amount = to_money(min_deposit_amount)
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"access_token": self.api_key, "Content-Type": "application/json"},
            transport=self.transport,
        )

    async def create_deposit(
        self,
        account: Account,
        amount: Decimal,
        billing_type: BillingType,
        tax_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Result[DepositIntent]:
        if amount is None or amount < self.min_deposit_amount:
            return Return.err(
                Error(
                    code=errors.INVALID_AMOUNT,
                    message=f"Minimum deposit is {self.min_deposit_amount}",
                    reason=f"amount={amount}",
                )
            )

        async with self._client() as client:
            customer_result = await self._ensure_customer(client, account, tax_id)
            if customer_result.is_err():
                return customer_result

            payment_body = {
                "customer": customer_result.value,
                "billingType": billing_type.value,
                "value": float(to_money(amount)),
                "dueDate": (date.today() + timedelta(days=1)).isoformat(),
                "description": description or f"Balance deposit - {account.username}",
                "externalReference": PaymentReference.for_deposit(account.id).dumps(),
            }
            response_result = await self._send(client, "POST", "/payments", json=payment_body)
            if response_result.is_err():
                return response_result
            payment = self._json(response_result.value)

            rejection = self._rejection(response_result.value, payment, "Failed to create payment")
            if rejection:
                return Return.err(rejection)

            logger.info(f"Gateway payment {payment.get('id')} created for account {account.id}")

            intent = DepositIntent(
                gateway_payment_id=payment["id"],
                status=payment.get("status", "PENDING"),
                billing_type=payment.get("billingType", billing_type.value),
                value=to_money(payment.get("value", amount)),
                due_date=self._parse_date(payment.get("dueDate")),
                invoice_url=payment.get("invoiceUrl"),
                bank_slip_url=payment.get("bankSlipUrl"),
            )

            if billing_type == BillingType.PIX:
                await self._attach_pix_code(client, intent)

            return Return.ok(intent)

    async def create_transfer(
        self,
        amount: Decimal,
        destination_key: str,
        destination_key_type: PixKeyType,
        reference: PaymentReference,
        description: Optional[str] = None,
    ) -> Result[TransferReceipt]:
        body = {
            "value": float(to_money(amount)),
            "pixAddressKey": destination_key,
            "pixAddressKeyType": destination_key_type.value,
            "description": description or "Seller withdrawal",
            "externalReference": reference.dumps(),
        }
        async with self._client() as client:
            response_result = await self._send(client, "POST", "/transfers", json=body)
            if response_result.is_err():
                return response_result
            transfer = self._json(response_result.value)

        rejection = self._rejection(response_result.value, transfer, "Transfer refused")
        if rejection:
            return Return.err(rejection)

        transfer_id = transfer.get("id")
        logger.info(f"Gateway transfer created: id={transfer_id}, status={transfer.get('status')}")
        return Return.ok(TransferReceipt(gateway_transfer_id=transfer_id, accepted=bool(transfer_id)))

    async def fetch_payment_status(self, gateway_payment_id: str) -> Result[PaymentStatus]:
        async with self._client() as client:
            response_result = await self._send(client, "GET", f"/payments/{gateway_payment_id}")
            if response_result.is_err():
                return response_result
            response = response_result.value
            payment = self._json(response)

        if response.status_code >= 400 or payment.get("errors") or "id" not in payment:
            return Return.err(
                Error(
                    code=errors.PAYMENT_NOT_FOUND,
                    message=f"Payment {gateway_payment_id} not found",
                    reason=f"status_code={response.status_code}",
                )
            )

        return Return.ok(
            PaymentStatus(
                gateway_payment_id=payment["id"],
                status=payment.get("status", ""),
                value=to_money(payment.get("value", 0)),
                billing_type=payment.get("billingType", ""),
                external_reference=payment.get("externalReference"),
                confirmed_date=self._parse_date(payment.get("confirmedDate")),
            )
        )

    async def _ensure_customer(
        self, client: httpx.AsyncClient, account: Account, tax_id: Optional[str]
    ) -> Result[str]:
        """
        Create the customer, or find it by email when it already exists

        Repeated calls for one account converge on the same customer id.
        """
        customer_data: dict[str, Any] = {
            "name": account.username,
            "email": account.email,
            "externalReference": account.id,
        }
        cpf = normalize_tax_id(tax_id) or normalize_tax_id(account.tax_id)
        if cpf:
            customer_data["cpfCnpj"] = cpf

        response_result = await self._send(client, "POST", "/customers", json=customer_data)
        if response_result.is_err():
            return response_result
        response = response_result.value

        if response.status_code == 409:
            lookup_result = await self._send(
                client, "GET", "/customers", params={"email": account.email}
            )
            if lookup_result.is_err():
                return lookup_result
            matches = self._json(lookup_result.value).get("data") or []
            customer = matches[0] if matches else {}
        else:
            customer = self._json(response)
            rejection = self._rejection(response, customer, "Failed to create gateway customer")
            if rejection:
                return Return.err(rejection)

        customer_id = customer.get("id")
        if not customer_id:
            logger.error(f"Gateway customer lookup failed for account {account.id}: {customer}")
            return Return.err(
                Error(
                    code=errors.GATEWAY_REJECTED,
                    message="Failed to create gateway customer",
                )
            )
        return Return.ok(customer_id)

    async def _attach_pix_code(self, client: httpx.AsyncClient, intent: DepositIntent) -> None:
        response_result = await self._send(
            client, "GET", f"/payments/{intent.gateway_payment_id}/pixQrCode"
        )
        if response_result.is_err() or response_result.value.status_code >= 400:
            logger.warning(f"PIX code unavailable for payment {intent.gateway_payment_id}")
            return
        pix = self._json(response_result.value)
        intent.pix_qr_code = pix.get("encodedImage")
        intent.pix_copy_paste = pix.get("payload")

    async def _send(self, client: httpx.AsyncClient, method: str, path: str, **kwargs) -> Result[httpx.Response]:
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"Gateway timeout on {method} {path}: {e}")
            return Return.err(
                Error(
                    code=errors.GATEWAY_UNAVAILABLE,
                    message="Payment gateway timed out",
                    reason=str(e),
                )
            )
        except httpx.HTTPError as e:
            logger.error(f"Gateway request failed on {method} {path}: {e}")
            return Return.err(
                Error(
                    code=errors.GATEWAY_UNAVAILABLE,
                    message="Payment gateway unreachable",
                    reason=str(e),
                )
            )

        if response.status_code >= 500:
            logger.error(f"Gateway {response.status_code} on {method} {path}")
            return Return.err(
                Error(
                    code=errors.GATEWAY_UNAVAILABLE,
                    message="Payment gateway unavailable",
                    reason=f"status_code={response.status_code}",
                )
            )
        return Return.ok(response)

    @staticmethod
    def _json(response: httpx.Response) -> dict:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    @staticmethod
    def _rejection(response: httpx.Response, body: dict, default_message: str) -> Optional[Error]:
        gateway_errors = body.get("errors")
        if response.status_code < 400 and not gateway_errors and body.get("id"):
            return None
        message = default_message
        if gateway_errors and isinstance(gateway_errors, list):
            message = gateway_errors[0].get("description") or default_message
        logger.error(f"Gateway rejected request: status={response.status_code}, body={body}")
        return Error(
            code=errors.GATEWAY_REJECTED,
            message=message,
            reason=f"status_code={response.status_code}",
        )

    @staticmethod
    def _parse_date(value: Optional[str]) -> Optional[date]:
        if not value:
            return None
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
