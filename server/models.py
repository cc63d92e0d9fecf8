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

"""Request, order and response models for the checkout relay.

Field names on the wire are the storefront's camelCase names (plus the
gateway-style `payment_method_nonce`). Python attributes are snake_case and the
models are dumped with `by_alias=True`.
"""

import datetime
from typing import Any, List, Optional, Union

from enums import CheckoutState
from enums import OrderStatus
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

Amount = Union[str, int, float]

REQUIRED_FIELDS = (
    "name",
    "email",
    "shipping_address",
    "order_details",
    "payment_method_nonce",
    "amount",
)


def is_blank(value: Any) -> bool:
  """Whether a required field should be treated as absent."""
  if value is None:
    return True
  if isinstance(value, (str, int, float)):
    return not value
  return False


class CheckoutRequest(BaseModel):
  """Checkout submitted by the storefront.

  Every field is optional at parse time so that missing fields can be reported
  with the relay's own 400 response instead of a schema error.
  """

  model_config = ConfigDict(populate_by_name=True, extra="ignore")

  name: Optional[str] = None
  email: Optional[str] = None
  phone: Optional[str] = None
  shipping_address: Any = Field(default=None, alias="shippingAddress")
  billing_address: Any = Field(default=None, alias="billingAddress")
  order_details: Any = Field(default=None, alias="orderDetails")
  payment_method_nonce: Optional[str] = None
  amount: Optional[Amount] = None
  device_data: Optional[str] = Field(default=None, alias="deviceData")

  def missing_fields(self) -> List[str]:
    """Returns the wire names of required fields that are absent."""
    missing = []
    for field_name in REQUIRED_FIELDS:
      if is_blank(getattr(self, field_name)):
        field = type(self).model_fields[field_name]
        missing.append(field.alias or field_name)
    return missing


class Order(BaseModel):
  """Order document written to the document store after a successful charge."""

  model_config = ConfigDict(populate_by_name=True, frozen=True)

  order_id: str = Field(alias="orderId")
  name: str
  email: str
  phone: Optional[str] = None
  shipping_address: Any = Field(alias="shippingAddress")
  billing_address: Any = Field(default=None, alias="billingAddress")
  order_details: Any = Field(alias="orderDetails")
  creation_time: str = Field(alias="creationTime")
  status: OrderStatus = OrderStatus.PENDING
  transaction_id: Optional[str] = Field(default=None, alias="transactionId")

  @classmethod
  def from_checkout(
      cls,
      request: CheckoutRequest,
      order_id: str,
      transaction_id: Optional[str],
      now: Optional[datetime.datetime] = None,
  ) -> "Order":
    now = now or datetime.datetime.now(datetime.timezone.utc)
    return cls(
        order_id=order_id,
        name=request.name,
        email=request.email,
        phone=request.phone,
        shipping_address=request.shipping_address,
        billing_address=request.billing_address,
        order_details=request.order_details,
        creation_time=now.isoformat(timespec="milliseconds").replace(
            "+00:00", "Z"
        ),
        transaction_id=transaction_id,
    )

  def document(self) -> dict[str, Any]:
    """Payload stored in the document store."""
    return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CheckoutReceipt(BaseModel):
  order_id: str
  transaction_id: Optional[str] = None
  state: CheckoutState = CheckoutState.PERSISTED


class CheckoutResponse(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  ok: bool = True
  order_id: str = Field(alias="orderId")
  transaction_id: Optional[str] = Field(default=None, alias="transactionId")


class ClientTokenResponse(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  ok: bool = True
  client_token: str = Field(alias="clientToken")


class PingResponse(BaseModel):
  ok: bool = True
  message: str = "pong"
