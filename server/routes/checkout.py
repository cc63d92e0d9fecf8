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

"""Storefront-facing routes: health check, client token and checkout."""

from typing import Optional

import dependencies
from exceptions import RelayError
from fastapi import APIRouter
from fastapi import Body
from fastapi import Depends
from fastapi.responses import JSONResponse
from kungfu import Error
from kungfu import Ok
from kungfu import Result
from models import CheckoutRequest
from models import CheckoutResponse
from models import ClientTokenResponse
from models import PingResponse
from services.checkout_service import CheckoutService

router = APIRouter()


def _error_response(error: RelayError) -> JSONResponse:
  return JSONResponse(status_code=error.status_code, content=error.body())


def _render(result: Result, to_body) -> JSONResponse:
  match result:
    case Ok(value):
      return JSONResponse(content=to_body(value))
    case Error(error):
      return _error_response(error)


@router.get("/ping", response_model=PingResponse, operation_id="ping")
async def ping() -> PingResponse:
  """Health check. Touches no remote service."""
  return PingResponse()


@router.get(
    "/client_token",
    response_model=ClientTokenResponse,
    operation_id="client_token",
)
async def client_token(
    checkout_service: CheckoutService = Depends(
        dependencies.get_checkout_service
    ),
) -> JSONResponse:
  """Issue a payment-form client token."""
  result = await checkout_service.generate_client_token()
  return _render(
      result,
      lambda token: ClientTokenResponse(client_token=token).model_dump(
          by_alias=True
      ),
  )


@router.post(
    "/checkout",
    response_model=CheckoutResponse,
    operation_id="checkout",
)
async def checkout(
    request: Optional[CheckoutRequest] = Body(None),
    checkout_service: CheckoutService = Depends(
        dependencies.get_checkout_service
    ),
) -> JSONResponse:
  """Charge the customer and record the order."""
  # An absent body is reported as missing fields, not as a malformed body.
  result = await checkout_service.checkout(request or CheckoutRequest())
  return _render(
      result,
      lambda receipt: CheckoutResponse(
          order_id=receipt.order_id, transaction_id=receipt.transaction_id
      ).model_dump(by_alias=True),
  )
