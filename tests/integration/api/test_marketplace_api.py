"""Integration tests for the HTTP API

Tests cover:
- Actor resolution from X-Account-Id
- Deposit creation and settlement through status check and webhook
- Purchase, order lifecycle and rating
- Seller withdrawals and admin overrides
- Error code to HTTP status mapping
"""

import pytest
from decimal import Decimal



def as_actor(account):
    return {"X-Account-Id": account.id}


def deposit_event(payment_id, account_id, event="PAYMENT_CONFIRMED", value=20.0):
    return {
        "event": event,
        "payment": {
            "id": payment_id,
            "value": value,
            "status": "CONFIRMED",
            "billingType": "PIX",
            "externalReference": f'{{"userId": "{account_id}", "type": "deposit"}}',
        },
    }


@pytest.mark.asyncio
class TestAccountsAPI:

    async def test_balance_requires_actor(self, client):
        response = await client.get("/api/accounts/me/balance")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_unknown_actor_is_rejected(self, client):
        response = await client.get("/api/accounts/me/balance", headers={"X-Account-Id": "nobody"})

        assert response.status_code == 401

    async def test_balance_and_history(self, client, create_account):
        account = await create_account(balance=Decimal("15.00"))

        balance = await client.get("/api/accounts/me/balance", headers=as_actor(account))
        history = await client.get("/api/accounts/me/transactions?limit=10", headers=as_actor(account))

        assert balance.status_code == 200
        assert Decimal(balance.json()["balance"]) == Decimal("15.00")
        assert history.status_code == 200
        assert history.json()["total"] == 1
        assert history.json()["transactions"][0]["transaction_type"] == "deposit"

    async def test_history_limit_is_bounded(self, client, create_account):
        account = await create_account()

        response = await client.get("/api/accounts/me/transactions?limit=101", headers=as_actor(account))

        assert response.status_code == 422


@pytest.mark.asyncio
class TestDepositsAPI:

    async def test_create_then_check_credits_once(self, client, gateway, create_account, get_account):
        """
        Given: A PIX deposit of 20.00 that the gateway later confirms
        When: The status is checked twice
        Then: Balance is 20.00 and only the first check reports credited
        """
        account = await create_account()

        created = await client.post(
            "/api/deposits", json={"amount": "20.00", "billing_type": "PIX"}, headers=as_actor(account)
        )
        assert created.status_code == 201
        payment_id = created.json()["payment_id"]
        assert created.json()["pix_copy_paste"]

        pending = await client.post(f"/api/deposits/{payment_id}/check", headers=as_actor(account))
        assert pending.json()["credited"] is False

        gateway.confirm(payment_id)
        first = await client.post(f"/api/deposits/{payment_id}/check", headers=as_actor(account))
        second = await client.post(f"/api/deposits/{payment_id}/check", headers=as_actor(account))

        assert first.json()["credited"] is True
        assert second.json()["credited"] is False
        assert (await get_account(account.id)).balance == Decimal("20.00")

    async def test_below_minimum_is_rejected(self, client, create_account):
        account = await create_account()

        response = await client.post("/api/deposits", json={"amount": "4.99"}, headers=as_actor(account))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_AMOUNT"

    async def test_more_than_two_decimals_is_rejected(self, client, create_account):
        account = await create_account()

        response = await client.post("/api/deposits", json={"amount": "10.001"}, headers=as_actor(account))

        assert response.status_code == 422

    async def test_unknown_payment(self, client, create_account):
        account = await create_account()

        response = await client.post("/api/deposits/pay_missing/check", headers=as_actor(account))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PAYMENT_NOT_FOUND"


@pytest.mark.asyncio
class TestWebhookAPI:

    async def test_webhook_and_check_settle_once(self, client, gateway, create_account, get_account, webhook_headers):
        account = await create_account()
        created = await client.post("/api/deposits", json={"amount": "20.00"}, headers=as_actor(account))
        payment_id = created.json()["payment_id"]
        gateway.confirm(payment_id, status="RECEIVED")

        webhook = await client.post(
            "/webhooks/payment-gateway",
            json=deposit_event(payment_id, account.id, event="PAYMENT_RECEIVED"),
            headers=webhook_headers,
        )
        check = await client.post(f"/api/deposits/{payment_id}/check", headers=as_actor(account))

        assert webhook.status_code == 200
        assert webhook.json() == {"received": True}
        assert check.json()["credited"] is False
        assert (await get_account(account.id)).balance == Decimal("20.00")

    async def test_redelivered_event_credits_once(self, client, create_account, get_account, webhook_headers):
        account = await create_account()
        body = deposit_event("pay_redelivered", account.id)
        headers = webhook_headers

        for _ in range(3):
            response = await client.post("/webhooks/payment-gateway", json=body, headers=headers)
            assert response.status_code == 200

        assert (await get_account(account.id)).balance == Decimal("20.00")

    async def test_wrong_token_is_rejected(self, client, create_account, get_account):
        account = await create_account()

        response = await client.post(
            "/webhooks/payment-gateway",
            json=deposit_event("pay_forged", account.id),
            headers={"asaas-access-token": "forged"},
        )

        assert response.status_code == 401
        assert (await get_account(account.id)).balance == Decimal("0.00")

    @pytest.mark.parametrize(
        "body",
        [
            {"event": "PAYMENT_CONFIRMED", "payment": {"id": "pay_1", "value": 20.0}},
            {"event": "PAYMENT_CONFIRMED", "payment": {"id": "pay_1", "externalReference": "not-json"}},
            {"unexpected": "shape"},
        ],
    )
    async def test_unusable_payloads_are_acknowledged(self, client, body, webhook_headers):
        response = await client.post(
            "/webhooks/payment-gateway", json=body, headers=webhook_headers
        )

        assert response.status_code == 200
        assert response.json() == {"received": True}


@pytest.mark.asyncio
class TestOrdersAPI:

    async def test_order_lifecycle(self, client, create_account, create_seller, get_account):
        buyer = await create_account(balance=Decimal("15.00"))
        seller_account = await create_account()
        seller = await create_seller(seller_account)

        created = await client.post(
            "/api/orders",
            json={"seller_id": seller.id, "quantity": 2000, "delivery_method": "gamepass"},
            headers=as_actor(buyer),
        )
        assert created.status_code == 201
        order_id = created.json()["order"]["id"]
        assert Decimal(created.json()["balance_after"]) == Decimal("5.00")

        for status in ("processing", "completed"):
            response = await client.patch(
                f"/api/orders/{order_id}/status", json={"status": status}, headers=as_actor(seller_account)
            )
            assert response.status_code == 200

        rating = await client.post(
            f"/api/orders/{order_id}/rating", json={"rating": 5, "comment": "fast"}, headers=as_actor(buyer)
        )
        again = await client.post(f"/api/orders/{order_id}/rating", json={"rating": 4}, headers=as_actor(buyer))
        viewed = await client.get(f"/api/orders/{order_id}", headers=as_actor(seller_account))

        assert rating.status_code == 201
        assert Decimal(rating.json()["seller_average_rating"]) == Decimal("5.00")
        assert again.status_code == 409
        assert viewed.json()["status"] == "completed"
        assert (await get_account(seller_account.id)).balance == Decimal("10.00")

    async def test_insufficient_balance(self, client, create_account, create_seller):
        buyer = await create_account(balance=Decimal("5.00"))
        seller = await create_seller(await create_account())

        response = await client.post(
            "/api/orders",
            json={"seller_id": seller.id, "quantity": 2000, "delivery_method": "donation"},
            headers=as_actor(buyer),
        )

        assert response.status_code == 402
        assert response.json()["error"]["code"] == "INSUFFICIENT_BALANCE"

    async def test_buyer_cannot_complete_own_order(self, client, create_account, create_seller):
        buyer = await create_account(balance=Decimal("15.00"))
        seller = await create_seller(await create_account())
        created = await client.post(
            "/api/orders",
            json={"seller_id": seller.id, "quantity": 1000, "delivery_method": "gamepass"},
            headers=as_actor(buyer),
        )

        response = await client.patch(
            f"/api/orders/{created.json()['order']['id']}/status",
            json={"status": "processing"},
            headers=as_actor(buyer),
        )

        assert response.status_code == 401

    async def test_unknown_order(self, client, create_account):
        account = await create_account()

        response = await client.get("/api/orders/missing", headers=as_actor(account))

        assert response.status_code == 404


@pytest.mark.asyncio
class TestSellersAndWithdrawalsAPI:

    async def test_register_seller_then_withdraw(self, client, gateway, create_account, get_account):
        admin = await create_account(is_admin=True)
        account = await create_account(balance=Decimal("100.00"))

        registered = await client.post("/api/sellers", json={"account_id": account.id}, headers=as_actor(admin))
        offer = await client.patch(
            "/api/sellers/me", json={"price_per_1k": "4.50", "is_online": True}, headers=as_actor(account)
        )
        withdrawal = await client.post(
            "/api/withdrawals",
            json={"amount": "50.00", "destination_key": " seller@example.com ", "destination_key_type": "EMAIL"},
            headers=as_actor(account),
        )

        assert registered.status_code == 201
        assert offer.status_code == 200
        assert Decimal(offer.json()["price_per_1k"]) == Decimal("4.50")
        assert withdrawal.status_code == 201
        body = withdrawal.json()
        assert body["status"] == "approved"
        assert Decimal(body["fee_amount"]) == Decimal("2.50")
        assert Decimal(body["net_amount"]) == Decimal("47.50")
        assert body["destination_key"] == "seller@example.com"
        assert (await get_account(account.id)).balance == Decimal("50.00")

    async def test_non_seller_cannot_withdraw(self, client, create_account):
        account = await create_account(balance=Decimal("100.00"))

        response = await client.post(
            "/api/withdrawals",
            json={"amount": "50.00", "destination_key": "k", "destination_key_type": "EVP"},
            headers=as_actor(account),
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "NOT_A_SELLER"

    async def test_admin_rejects_pending_withdrawal(self, client, gateway, create_account, create_seller):
        admin = await create_account(is_admin=True)
        account = await create_account(balance=Decimal("30.00"))
        await create_seller(account)
        gateway.transfer_accepted = False

        created = await client.post(
            "/api/withdrawals",
            json={"amount": "20.00", "destination_key": "k", "destination_key_type": "EVP"},
            headers=as_actor(account),
        )
        withdrawal_id = created.json()["id"]

        by_seller = await client.patch(
            f"/api/withdrawals/{withdrawal_id}/status", json={"status": "rejected"}, headers=as_actor(account)
        )
        by_admin = await client.patch(
            f"/api/withdrawals/{withdrawal_id}/status", json={"status": "rejected"}, headers=as_actor(admin)
        )

        assert created.json()["status"] == "pending"
        assert by_seller.status_code == 401
        assert by_admin.status_code == 200
        assert by_admin.json()["status"] == "rejected"


@pytest.mark.asyncio
class TestListingsAPI:

    async def place_order(self, client, buyer, seller, quantity=1000):
        response = await client.post(
            "/api/orders",
            json={"seller_id": seller.id, "quantity": quantity, "delivery_method": "gamepass"},
            headers=as_actor(buyer),
        )
        assert response.status_code == 201
        return response.json()["order"]["id"]

    async def test_order_history_for_buyer_seller_and_admin(self, client, create_account, create_seller):
        """
        Given: Two buyers each with an order at the same seller
        When: Listing orders as a buyer, as the seller and as an admin
        Then: The buyer sees one, the seller and the admin see both
        """
        first_buyer = await create_account(balance=Decimal("20.00"))
        second_buyer = await create_account(balance=Decimal("20.00"))
        seller_account = await create_account()
        admin = await create_account(is_admin=True)
        seller = await create_seller(seller_account)

        first_order = await self.place_order(client, first_buyer, seller)
        second_order = await self.place_order(client, second_buyer, seller)

        mine = await client.get("/api/orders", headers=as_actor(first_buyer))
        incoming = await client.get("/api/orders?scope=seller", headers=as_actor(seller_account))
        everything = await client.get("/api/orders?scope=all&limit=1", headers=as_actor(admin))

        assert mine.status_code == 200
        assert [o["id"] for o in mine.json()["orders"]] == [first_order]
        assert {o["id"] for o in incoming.json()["orders"]} == {first_order, second_order}
        assert everything.json()["total"] == 2
        assert len(everything.json()["orders"]) == 1

    async def test_order_status_filter(self, client, create_account, create_seller):
        buyer = await create_account(balance=Decimal("20.00"))
        seller_account = await create_account()
        seller = await create_seller(seller_account)
        processing = await self.place_order(client, buyer, seller)
        await self.place_order(client, buyer, seller)
        await client.patch(
            f"/api/orders/{processing}/status", json={"status": "processing"}, headers=as_actor(seller_account)
        )

        response = await client.get("/api/orders?status=processing", headers=as_actor(buyer))

        assert response.json()["total"] == 1
        assert response.json()["orders"][0]["id"] == processing

    async def test_listing_all_orders_requires_admin(self, client, create_account):
        buyer = await create_account()

        response = await client.get("/api/orders?scope=all", headers=as_actor(buyer))

        assert response.status_code == 401

    async def test_seller_scope_requires_registration(self, client, create_account):
        buyer = await create_account()

        response = await client.get("/api/orders?scope=seller", headers=as_actor(buyer))

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "NOT_A_SELLER"

    async def test_marketplace_lists_cheapest_first(self, client, create_account, create_seller):
        viewer = await create_account()
        dear = await create_seller(await create_account(), price_per_1k=Decimal("7.00"))
        cheap = await create_seller(await create_account(), price_per_1k=Decimal("3.50"))
        offline_account = await create_account()
        offline = await create_seller(offline_account, price_per_1k=Decimal("1.00"))
        await client.patch("/api/sellers/me", json={"is_online": False}, headers=as_actor(offline_account))

        listed = await client.get("/api/sellers", headers=as_actor(viewer))
        online = await client.get("/api/sellers?online_only=true", headers=as_actor(viewer))

        assert listed.status_code == 200
        assert [s["id"] for s in listed.json()["sellers"]] == [offline.id, cheap.id, dear.id]
        assert [s["id"] for s in online.json()["sellers"]] == [cheap.id, dear.id]
        assert online.json()["total"] == 2

    async def test_admin_promotes_account(self, client, create_account, get_account):
        admin = await create_account(is_admin=True)
        user = await create_account(balance=Decimal("12.00"))

        response = await client.patch(
            f"/api/accounts/{user.id}/admin", json={"is_admin": True}, headers=as_actor(admin)
        )

        assert response.status_code == 200
        assert response.json() == {"account_id": user.id, "is_admin": True}
        promoted = await get_account(user.id)
        assert promoted.is_admin is True
        assert promoted.balance == Decimal("12.00")

    async def test_non_admin_cannot_promote(self, client, create_account):
        user = await create_account()

        response = await client.patch(
            f"/api/accounts/{user.id}/admin", json={"is_admin": True}, headers=as_actor(user)
        )

        assert response.status_code == 401

    async def test_promoting_unknown_account(self, client, create_account):
        admin = await create_account(is_admin=True)

        response = await client.patch(
            "/api/accounts/missing/admin", json={"is_admin": True}, headers=as_actor(admin)
        )

        assert response.status_code == 404
