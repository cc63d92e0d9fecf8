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

"""Tests for loading settings from the environment."""

from absl.testing import absltest
import config
from enums import GatewayEnvironment
from exceptions import ConfigurationError

_ENV = {
    "BRAINTREE_MERCHANT_ID": "merchant",
    "BRAINTREE_PUBLIC_KEY": "public",
    "BRAINTREE_PRIVATE_KEY": "private",
    "APPWRITE_ENDPOINT": "https://cloud.appwrite.io/v1",
    "APPWRITE_PROJECT": "shop",
    "APPWRITE_API_KEY": "secret",
    "APPWRITE_DATABASE_ID": "main",
    "APPWRITE_ORDERS_COLLECTION_ID": "orders",
}


class LoadSettingsTest(absltest.TestCase):

  def test_defaults(self) -> None:
    settings = config.load_settings(_ENV)

    self.assertEqual(settings.gateway_environment, GatewayEnvironment.SANDBOX)
    self.assertEqual(settings.port, 3000)
    self.assertEqual(settings.appwrite_orders_collection_id, "orders")
    self.assertEqual(settings.retry_policy.max_attempts, 3)
    self.assertEqual(settings.retry_policy.delay_seconds, 1.0)

  def test_production_environment(self) -> None:
    env = dict(_ENV, BRAINTREE_ENVIRONMENT="Production")
    settings = config.load_settings(env)
    self.assertEqual(
        settings.gateway_environment, GatewayEnvironment.PRODUCTION
    )

  def test_anything_else_is_sandbox(self) -> None:
    for value in ("Sandbox", "production", "live", ""):
      with self.subTest(value=value):
        env = dict(_ENV, BRAINTREE_ENVIRONMENT=value)
        self.assertEqual(
            config.load_settings(env).gateway_environment,
            GatewayEnvironment.SANDBOX,
        )

  def test_optional_overrides(self) -> None:
    env = dict(
        _ENV,
        PORT="8080",
        RETRY_MAX_ATTEMPTS="5",
        RETRY_DELAY_SECONDS="0.2",
        HTTP_TIMEOUT_SECONDS="3",
    )
    settings = config.load_settings(env)

    self.assertEqual(settings.port, 8080)
    self.assertEqual(settings.retry_policy.max_attempts, 5)
    self.assertEqual(settings.retry_policy.delay_seconds, 0.2)
    self.assertEqual(settings.http_timeout_seconds, 3.0)

  def test_missing_variables_are_listed(self) -> None:
    env = dict(_ENV)
    del env["APPWRITE_API_KEY"]
    del env["BRAINTREE_PRIVATE_KEY"]

    with self.assertRaises(ConfigurationError) as cm:
      config.load_settings(env)

    self.assertIn("APPWRITE_API_KEY", cm.exception.message)
    self.assertIn("BRAINTREE_PRIVATE_KEY", cm.exception.message)

  def test_invalid_retry_attempts(self) -> None:
    for value in ("0", "three"):
      with self.subTest(value=value):
        with self.assertRaises(ConfigurationError):
          config.load_settings(dict(_ENV, RETRY_MAX_ATTEMPTS=value))

  def test_settings_are_immutable(self) -> None:
    settings = config.load_settings(_ENV)
    with self.assertRaises(ValueError):
      settings.port = 1


if __name__ == "__main__":
  absltest.main()
