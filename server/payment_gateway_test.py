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

"""Tests for the Braintree charge client."""

import asyncio
from types import SimpleNamespace

from absl.testing import absltest
import braintree
import config
from services.payment_gateway import BraintreeChargeClient
from services.payment_gateway import to_charge_result


class _RecordingGateway:
  """Mimics the parts of `braintree.BraintreeGateway` the client calls."""

  def __init__(self, sale_result):
    self.sales = []
    self.transaction = SimpleNamespace(sale=self._sale)
    self.client_token = SimpleNamespace(generate=lambda params: "token-123")
    self.sale_result = sale_result

  def _sale(self, params):
    self.sales.append(params)
    return self.sale_result


class ToChargeResultTest(absltest.TestCase):

  def test_success(self) -> None:
    result = to_charge_result(
        SimpleNamespace(
            is_success=True,
            transaction=SimpleNamespace(
                id="TX1", status="submitted_for_settlement"
            ),
        )
    )
    self.assertTrue(result.success)
    self.assertEqual(result.transaction_id, "TX1")
    self.assertEqual(result.status, "submitted_for_settlement")

  def test_processor_decline_uses_transaction_status(self) -> None:
    result = to_charge_result(
        SimpleNamespace(
            is_success=False,
            message="Do Not Honor",
            transaction=SimpleNamespace(id="TX9", status="processor_declined"),
        )
    )
    self.assertFalse(result.success)
    self.assertEqual(result.status, "processor_declined")

  def test_validation_failure_uses_message(self) -> None:
    result = to_charge_result(
        SimpleNamespace(
            is_success=False,
            message="Unknown or expired payment_method_nonce.",
            transaction=None,
        )
    )
    self.assertFalse(result.success)
    self.assertIsNone(result.transaction_id)
    self.assertEqual(result.status, "Unknown or expired payment_method_nonce.")


class BraintreeChargeClientTest(absltest.TestCase):

  def test_sale_is_submitted_for_settlement(self) -> None:
    gateway = _RecordingGateway(
        SimpleNamespace(
            is_success=True,
            transaction=SimpleNamespace(id="TX1", status="authorized"),
        )
    )
    client = BraintreeChargeClient(gateway)

    result = asyncio.run(client.charge("10.00", "nonce-1", "device-1"))

    self.assertTrue(result.success)
    self.assertEqual(
        gateway.sales,
        [{
            "amount": "10.00",
            "payment_method_nonce": "nonce-1",
            "device_data": "device-1",
            "options": {"submit_for_settlement": True},
        }],
    )

  def test_device_data_is_optional(self) -> None:
    gateway = _RecordingGateway(
        SimpleNamespace(
            is_success=True,
            transaction=SimpleNamespace(id="TX1", status="authorized"),
        )
    )
    asyncio.run(BraintreeChargeClient(gateway).charge("5", "nonce-2"))
    self.assertNotIn("device_data", gateway.sales[0])

  def test_client_token(self) -> None:
    client = BraintreeChargeClient(_RecordingGateway(sale_result=None))
    self.assertEqual(asyncio.run(client.generate_client_token()), "token-123")

  def test_from_settings_selects_environment(self) -> None:
    env = {
        "BRAINTREE_ENVIRONMENT": "Production",
        "BRAINTREE_MERCHANT_ID": "merchant",
        "BRAINTREE_PUBLIC_KEY": "public",
        "BRAINTREE_PRIVATE_KEY": "private",
        "APPWRITE_ENDPOINT": "https://cloud.appwrite.io/v1",
        "APPWRITE_PROJECT": "shop",
        "APPWRITE_API_KEY": "secret",
        "APPWRITE_DATABASE_ID": "main",
        "APPWRITE_ORDERS_COLLECTION_ID": "orders",
    }
    client = BraintreeChargeClient.from_settings(config.load_settings(env))

    self.assertEqual(
        client.gateway.config.environment, braintree.Environment.Production
    )
    self.assertEqual(client.gateway.config.merchant_id, "merchant")


if __name__ == "__main__":
  absltest.main()
