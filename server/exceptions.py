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

"""Custom exceptions for the checkout relay."""

from typing import Any, Dict, Optional, Sequence

from enums import CheckoutState

MISSING_FIELDS_MESSAGE = "Missing required fields"
PERSISTENCE_FAILED_MESSAGE = (
    "Payment processed but order creation failed. Please contact support."
)
CLIENT_TOKEN_FAILED_MESSAGE = "Error generating client token"


class RelayError(Exception):
  """Base class for all checkout relay exceptions."""

  def __init__(
      self,
      message: str,
      code: str = "INTERNAL_ERROR",
      status_code: int = 500,
      state: Optional[CheckoutState] = None,
  ):
    self.message = message
    self.code = code
    self.status_code = status_code
    self.state = state
    super().__init__(self.message)

  def body(self) -> Dict[str, Any]:
    """Renders the JSON payload returned to the storefront."""
    return {"ok": False, "message": self.message}


class ConfigurationError(RelayError):
  """Raised at startup when required settings are missing or malformed."""

  def __init__(self, message: str):
    super().__init__(message, code="CONFIGURATION_ERROR")


class ValidationError(RelayError):
  """Raised when a checkout request lacks required fields."""

  def __init__(self, missing_fields: Sequence[str]):
    super().__init__(
        MISSING_FIELDS_MESSAGE,
        code="MISSING_FIELDS",
        status_code=400,
        state=CheckoutState.VALIDATION_FAILED,
    )
    self.missing_fields = list(missing_fields)


class GatewayDeclineError(RelayError):
  """Raised when the gateway answered but refused the charge."""

  def __init__(self, status: str):
    super().__init__(
        status,
        code="PAYMENT_DECLINED",
        status_code=400,
        state=CheckoutState.DECLINED,
    )


class GatewayTransportError(RelayError):
  """Raised when the charge call could not be completed."""

  def __init__(self, message: str):
    super().__init__(
        message,
        code="GATEWAY_ERROR",
        status_code=500,
        state=CheckoutState.CHARGE_ERROR,
    )

  def body(self) -> Dict[str, Any]:
    return {"ok": False, "error": self.message}


class PersistenceError(RelayError):
  """Raised when the order could not be stored after a successful charge.

  The charge is not refunded or voided. The transaction id is surfaced so
  support can reconcile the payment by hand.
  """

  def __init__(
      self, transaction_id: Optional[str], order_id: str, cause: str
  ):
    super().__init__(
        PERSISTENCE_FAILED_MESSAGE,
        code="ORDER_PERSIST_FAILED",
        status_code=500,
        state=CheckoutState.PERSIST_FAILED,
    )
    self.transaction_id = transaction_id
    self.order_id = order_id
    self.cause = cause

  def body(self) -> Dict[str, Any]:
    return {
        "ok": False,
        "message": self.message,
        "transactionId": self.transaction_id,
    }


class ClientTokenError(RelayError):
  """Raised when the gateway could not issue a client token."""

  def __init__(self, error: str):
    super().__init__(
        CLIENT_TOKEN_FAILED_MESSAGE, code="CLIENT_TOKEN_FAILED", status_code=500
    )
    self.error = error

  def body(self) -> Dict[str, Any]:
    return {"ok": False, "message": self.message, "error": self.error}


class DocumentStoreError(RelayError):
  """Raised by the document store adapter for non-success responses."""

  def __init__(
      self, message: str, status_code: int, error_type: Optional[str] = None
  ):
    super().__init__(message, code="DOCUMENT_STORE_ERROR", status_code=502)
    self.upstream_status = status_code
    self.error_type = error_type
