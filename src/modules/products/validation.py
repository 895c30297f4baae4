"""Outbound purchase validation against a seller's own system.

POST ``{api_base_url}/api/v1/validate-purchase`` with the seller's API key
in the ``SELLER_API_KEY_HEADER`` header.  Every failure mode (non-2xx,
timeout, connection error, non-JSON body, incomplete payload) comes back
as ``Err(FailedDependency)``; nothing is retried.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Optional

import requests
import structlog
from django.conf import settings
from pydantic import ValidationError as PydanticValidationError

from modules.core.exceptions import FailedDependency
from modules.products.dtos import ValidatedPurchase
from modules.products.exceptions import (
    IncompleteSellerResponse,
    SellerUnreachable,
    SellerValidationFailed,
)
from shared.domain.result import Err, Ok, Result

if TYPE_CHECKING:
    from modules.sellers.models import Seller

logger = structlog.get_logger(__name__)

VALIDATION_PATH = "/api/v1/validate-purchase"


class SellerValidationClient:
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        api_key_header: Optional[str] = None,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout or settings.SELLER_VALIDATION_TIMEOUT
        self._header = api_key_header or settings.SELLER_API_KEY_HEADER

    def endpoint(self, seller: Seller) -> str:
        return seller.api_base_url.rstrip("/") + VALIDATION_PATH

    def validate(
        self,
        seller: Seller,
        order_id: str,
        customer_phone: str,
        purchase_date: date,
    ) -> Result[ValidatedPurchase, FailedDependency]:
        url = self.endpoint(seller)
        log = logger.bind(seller_id=str(seller.id), order_id=order_id)
        log.info("seller_validation.request", url=url)

        try:
            response = self._session.post(
                url,
                json={
                    "orderId": order_id,
                    "customerPhone": customer_phone,
                    "purchaseDate": purchase_date.isoformat(),
                },
                headers={self._header: seller.api_key},
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout:
            log.warning("seller_validation.timeout", timeout=self._timeout)
            return Err(SellerUnreachable())
        except requests.exceptions.RequestException as exc:
            log.warning("seller_validation.unreachable", error=str(exc))
            return Err(SellerUnreachable())

        body = _json_or_none(response)

        if not response.ok:
            log.warning("seller_validation.rejected", status_code=response.status_code)
            message = body.get("message") if isinstance(body, dict) else None
            return Err(SellerValidationFailed(message if isinstance(message, str) else None))

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            log.warning("seller_validation.malformed_body", status_code=response.status_code)
            return Err(IncompleteSellerResponse())

        try:
            purchase = ValidatedPurchase.model_validate(data)
        except PydanticValidationError as exc:
            log.warning("seller_validation.incomplete", errors=exc.error_count())
            return Err(IncompleteSellerResponse())

        log.info("seller_validation.confirmed")
        return Ok(purchase)


def _json_or_none(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
