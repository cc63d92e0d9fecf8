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

"""FastAPI dependencies for the checkout relay.

The settings and the remote clients live on `app.state`, where `server.main`
and `config.lifespan` put them. Tests replace these providers through
`app.dependency_overrides`.
"""

import config
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Request
from retry import RetryPolicy
from services.checkout_service import CheckoutService
from services.order_store import OrderStore
from services.payment_gateway import ChargeClient


def _state_attr(request: Request, name: str):
  value = getattr(request.app.state, name, None)
  if value is None:
    raise HTTPException(status_code=500, detail=f"Server not configured: {name}")
  return value


def get_settings(request: Request) -> config.Settings:
  """Dependency provider for the process settings."""
  return _state_attr(request, "settings")


def get_retry_policy(
    settings: config.Settings = Depends(get_settings),
) -> RetryPolicy:
  """Dependency provider for the retry policy of remote calls."""
  return settings.retry_policy


def get_charge_client(request: Request) -> ChargeClient:
  """Dependency provider for the payment gateway client."""
  return _state_attr(request, "charge_client")


def get_order_store(request: Request) -> OrderStore:
  """Dependency provider for the order document store."""
  return _state_attr(request, "order_store")


def get_checkout_service(
    charge_client: ChargeClient = Depends(get_charge_client),
    order_store: OrderStore = Depends(get_order_store),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
) -> CheckoutService:
  """Dependency provider for CheckoutService."""
  return CheckoutService(charge_client, order_store, retry_policy)
