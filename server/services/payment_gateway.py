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

"""Payment gateway access for the checkout relay.

`ChargeClient` is the capability the checkout service depends on.
`BraintreeChargeClient` implements it with the Braintree SDK. The SDK is
blocking, so each call is pushed to a worker thread.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Protocol

import braintree
import config
from enums import GatewayEnvironment
from pydantic import BaseModel

logger = logging.getLogger(__name__)

_ENVIRONMENTS = {
    GatewayEnvironment.SANDBOX: braintree.Environment.Sandbox,
    GatewayEnvironment.PRODUCTION: braintree.Environment.Production,
}


class ChargeResult(BaseModel):
  """Business outcome of a charge that reached the gateway."""

  success: bool
  transaction_id: Optional[str] = None
  status: Optional[str] = None


class ChargeClient(Protocol):
  """Capability for charging a customer's payment method."""

  async def charge(
      self, amount: str, nonce: str, device_data: Optional[str] = None
  ) -> ChargeResult:
    ...

  async def generate_client_token(self) -> str:
    ...


class BraintreeChargeClient:
  """`ChargeClient` backed by a `braintree.BraintreeGateway`."""

  def __init__(self, gateway: braintree.BraintreeGateway):
    self.gateway = gateway

  @classmethod
  def from_settings(cls, settings: config.Settings) -> "BraintreeChargeClient":
    return cls(
        braintree.BraintreeGateway(
            braintree.Configuration(
                environment=_ENVIRONMENTS[settings.gateway_environment],
                merchant_id=settings.braintree_merchant_id,
                public_key=settings.braintree_public_key,
                private_key=settings.braintree_private_key,
            )
        )
    )

  async def charge(
      self, amount: str, nonce: str, device_data: Optional[str] = None
  ) -> ChargeResult:
    """Runs a sale that is submitted for settlement when it succeeds."""
    params: Dict[str, Any] = {
        "amount": amount,
        "payment_method_nonce": nonce,
        "options": {"submit_for_settlement": True},
    }
    if device_data:
      params["device_data"] = device_data

    result = await asyncio.to_thread(self.gateway.transaction.sale, params)
    return to_charge_result(result)

  async def generate_client_token(self) -> str:
    return await asyncio.to_thread(self.gateway.client_token.generate, {})


def to_charge_result(result: Any) -> ChargeResult:
  """Maps a Braintree `SuccessfulResult` or `ErrorResult`."""
  transaction = getattr(result, "transaction", None)
  transaction_id = getattr(transaction, "id", None)
  status = getattr(transaction, "status", None)

  if result.is_success:
    return ChargeResult(
        success=True, transaction_id=transaction_id, status=status
    )

  # Validation failures carry no transaction, only a message.
  if not status:
    status = getattr(result, "message", None) or "Payment failed"
  logger.info("Charge declined with status %s", status)
  return ChargeResult(success=False, transaction_id=transaction_id, status=status)
