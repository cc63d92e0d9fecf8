#   Copyright 2026 UCP Authors
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

"""Checkout service for charging customers and recording their orders.

This module provides the `CheckoutService` class, which runs one checkout from
the storefront through the payment gateway and into the document store:

- Rejecting requests that lack required fields before any remote call.
- Charging the payment method with settlement on success.
- Building and persisting the order document once the charge went through.
- Issuing client tokens for the storefront's payment form.

The charge and the document write are each wrapped in their own fixed-delay
retry sequence. When the charge succeeds but the write keeps failing, the
charge is left in place and the transaction id is reported so support can
reconcile it. Nothing is refunded or voided automatically.

Every method returns a `kungfu` `Ok` or `Error` result instead of raising, so
callers can map each outcome to a response.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from exceptions import ClientTokenError
from exceptions import GatewayDeclineError
from exceptions import GatewayTransportError
from exceptions import PersistenceError
from exceptions import RelayError
from exceptions import ValidationError
from kungfu import Error
from kungfu import Ok
from kungfu import Result
from models import CheckoutReceipt
from models import CheckoutRequest
from models import Order
import order_ids
from retry import retry_async
from retry import RetryPolicy
from retry import Sleep
from services.order_store import OrderStore
from services.payment_gateway import ChargeClient
from services.payment_gateway import ChargeResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CheckoutService:
  """Service for running checkouts against the gateway and the order store."""

  def __init__(
      self,
      charge_client: ChargeClient,
      order_store: OrderStore,
      retry_policy: RetryPolicy,
      sleep: Sleep = asyncio.sleep,
      id_factory: Callable[[], str] = order_ids.generate_order_id,
  ):
    self.charge_client = charge_client
    self.order_store = order_store
    self.retry_policy = retry_policy
    self.sleep = sleep
    self.id_factory = id_factory

  async def _retry(
      self, operation: Callable[[], Awaitable[T]], description: str
  ) -> T:
    return await retry_async(
        operation, self.retry_policy, sleep=self.sleep, description=description
    )

  async def checkout(
      self, request: CheckoutRequest
  ) -> Result[CheckoutReceipt, RelayError]:
    """Charges the customer and stores the order."""
    missing = request.missing_fields()
    if missing:
      logger.info("Rejecting checkout, missing fields: %s", ", ".join(missing))
      return Error(ValidationError(missing))

    logger.info("Charging %s", request.amount)
    try:
      charge: ChargeResult = await self._retry(
          lambda: self.charge_client.charge(
              str(request.amount),
              request.payment_method_nonce,
              request.device_data,
          ),
          description="Payment charge",
      )
    except Exception as e:  # pylint: disable=broad-exception-caught
      logger.error("Payment charge failed after retries: %s", e)
      return Error(GatewayTransportError(str(e)))

    if not charge.success:
      return Error(GatewayDeclineError(charge.status or "Payment failed"))

    order = Order.from_checkout(
        request,
        order_id=self.id_factory(),
        transaction_id=charge.transaction_id,
    )
    logger.info(
        "Storing order %s for transaction %s",
        order.order_id,
        order.transaction_id,
    )
    try:
      await self._retry(
          lambda: self.order_store.create_document(
              order.order_id, order.document()
          ),
          description="Order create",
      )
    except Exception as e:  # pylint: disable=broad-exception-caught
      # The charge stays settled; support reconciles from this log line.
      logger.error(
          "Payment processed but order %s was not stored (transaction %s): %s",
          order.order_id,
          order.transaction_id,
          e,
      )
      return Error(
          PersistenceError(
              transaction_id=order.transaction_id,
              order_id=order.order_id,
              cause=str(e),
          )
      )

    logger.info("Order %s stored", order.order_id)
    return Ok(
        CheckoutReceipt(
            order_id=order.order_id, transaction_id=order.transaction_id
        )
    )

  async def generate_client_token(self) -> Result[str, RelayError]:
    """Issues a client token for the storefront's payment form."""
    try:
      token = await self._retry(
          self.charge_client.generate_client_token,
          description="Client token generation",
      )
    except Exception as e:  # pylint: disable=broad-exception-caught
      logger.error("Error generating client token: %s", e)
      return Error(ClientTokenError(str(e)))
    return Ok(token)
