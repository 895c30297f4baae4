"""Storage-level uniqueness backstops, exercised on the default database.

The services check for duplicates before inserting; a concurrent request
can slip past that check, leaving the database constraint to reject the
second insert.  These tests disable the application check so the insert
reaches the constraint, then assert the API still answers 409 and only
one row exists.

Covers:
- uniq_product_customer_seller_order: repeated (customer, seller, order id)
- uniq_active_claim_per_product: second non-terminal claim on a product
"""

from __future__ import annotations

from unittest import mock

import pytest
import requests

from modules.claims.models import WarrantyClaim
from modules.claims.repositories import ClaimDjangoRepository
from modules.products.models import RegisteredProduct
from modules.products.repositories import RegisteredProductDjangoRepository

pytestmark = pytest.mark.integration


def _seller_confirms():
    response = mock.MagicMock(status_code=200, ok=True)
    response.json.return_value = {
        "data": {
            "authoritativePurchaseDate": "2024-07-20",
            "warrantyPeriodMonths": 12,
            "customerPhoneNumber": "+15550001",
            "productName": "Blender X",
        }
    }
    return response


class TestRegistrationConstraint:
    def test_duplicate_triple_rejected_by_database(self, client_for, customer, seller):
        client = client_for(customer)
        payload = {
            "sellerId": str(seller.id),
            "orderId": "ORD-1",
            "purchaseDate": "2024-07-20",
        }

        with mock.patch.object(
            requests.Session, "post", return_value=_seller_confirms()
        ), mock.patch.object(
            RegisteredProductDjangoRepository, "find_registration", return_value=None
        ):
            first = client.post("/api/v1/customer/products/register", payload, format="json")
            second = client.post("/api/v1/customer/products/register", payload, format="json")

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["message"] == (
            "This product has already been registered by you for this seller "
            "and order."
        )
        assert RegisteredProduct.objects.count() == 1


class TestActiveClaimConstraint:
    def test_second_active_claim_rejected_by_database(
        self, client_for, customer, seller, make_product
    ):
        product = make_product(customer, seller)
        client = client_for(customer)
        payload = {
            "registeredProductId": str(product.id),
            "issueDescription": "Motor stopped.",
        }

        with mock.patch.object(
            ClaimDjangoRepository, "find_active_for_product", return_value=None
        ):
            first = client.post("/api/v1/customer/claims", payload, format="json")
            second = client.post("/api/v1/customer/claims", payload, format="json")

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["message"] == (
            "An active claim already exists for this product."
        )
        assert WarrantyClaim.objects.filter(registered_product=product).count() == 1
