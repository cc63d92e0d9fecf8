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

"""Shared configuration and startup logic for the checkout relay.

Settings are read once from the process environment (optionally seeded from a
`.env` file) into an immutable `Settings` object. The server stores it on
`app.state` and the lifespan builds the remote clients from it.
"""

import contextlib
import logging
import os
from typing import Mapping, Optional

from absl import flags
from enums import GatewayEnvironment
from exceptions import ConfigurationError
from fastapi import FastAPI
import httpx
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from retry import RetryPolicy

logger = logging.getLogger(__name__)

FLAGS = flags.FLAGS

DEFAULT_PORT = 3000

# Define flags only if they haven't been defined yet (to avoid duplicates
# during tests or re-imports)
try:
  flags.DEFINE_integer("port", None, "Port to run the server on")
  flags.DEFINE_string(
      "env_file", None, "Optional .env file loaded before reading settings"
  )
except flags.DuplicateFlagError:
  pass

_REQUIRED_ENV = {
    "braintree_merchant_id": "BRAINTREE_MERCHANT_ID",
    "braintree_public_key": "BRAINTREE_PUBLIC_KEY",
    "braintree_private_key": "BRAINTREE_PRIVATE_KEY",
    "appwrite_endpoint": "APPWRITE_ENDPOINT",
    "appwrite_project": "APPWRITE_PROJECT",
    "appwrite_api_key": "APPWRITE_API_KEY",
    "appwrite_database_id": "APPWRITE_DATABASE_ID",
    "appwrite_orders_collection_id": "APPWRITE_ORDERS_COLLECTION_ID",
}


class Settings(BaseModel):
  """Immutable process configuration."""

  model_config = ConfigDict(frozen=True)

  gateway_environment: GatewayEnvironment = GatewayEnvironment.SANDBOX
  braintree_merchant_id: str
  braintree_public_key: str
  braintree_private_key: str
  appwrite_endpoint: str
  appwrite_project: str
  appwrite_api_key: str
  appwrite_database_id: str
  appwrite_orders_collection_id: str
  port: int = DEFAULT_PORT
  retry_max_attempts: int = Field(default=3, ge=1)
  retry_delay_seconds: float = Field(default=1.0, ge=0)
  http_timeout_seconds: float = Field(default=10.0, gt=0)

  @property
  def retry_policy(self) -> RetryPolicy:
    return RetryPolicy(
        max_attempts=self.retry_max_attempts,
        delay_seconds=self.retry_delay_seconds,
    )


def parse_gateway_environment(value: Optional[str]) -> GatewayEnvironment:
  """Anything other than "Production" selects the sandbox."""
  if value == GatewayEnvironment.PRODUCTION.value:
    return GatewayEnvironment.PRODUCTION
  return GatewayEnvironment.SANDBOX


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
  """Builds `Settings` from environment variables.

  Args:
    environ: Mapping to read from. Defaults to `os.environ`.

  Returns:
    The validated settings.

  Raises:
    ConfigurationError: If a required variable is missing or a value does not
      parse.
  """
  environ = os.environ if environ is None else environ

  missing = [name for name in _REQUIRED_ENV.values() if not environ.get(name)]
  if missing:
    raise ConfigurationError(
        "Missing required environment variables: " + ", ".join(missing)
    )

  values = {field: environ[name] for field, name in _REQUIRED_ENV.items()}
  values["gateway_environment"] = parse_gateway_environment(
      environ.get("BRAINTREE_ENVIRONMENT")
  )
  optional = {
      "port": "PORT",
      "retry_max_attempts": "RETRY_MAX_ATTEMPTS",
      "retry_delay_seconds": "RETRY_DELAY_SECONDS",
      "http_timeout_seconds": "HTTP_TIMEOUT_SECONDS",
  }
  for field, name in optional.items():
    if environ.get(name):
      values[field] = environ[name]

  try:
    return Settings(**values)
  except PydanticValidationError as e:
    raise ConfigurationError(f"Invalid configuration: {e}") from e


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
  """Builds the remote clients for the configured settings."""
  # pylint: disable=g-import-not-at-top
  from services.order_store import AppwriteOrderStore
  from services.payment_gateway import BraintreeChargeClient

  settings: Optional[Settings] = getattr(app.state, "settings", None)
  # In tests the clients are supplied through dependency overrides.
  if settings is None:
    yield
    return

  http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
  app.state.charge_client = BraintreeChargeClient.from_settings(settings)
  app.state.order_store = AppwriteOrderStore.from_settings(
      settings, http_client
  )
  logger.info(
      "Relay configured for %s gateway environment",
      settings.gateway_environment.value,
  )
  try:
    yield
  finally:
    await http_client.aclose()
