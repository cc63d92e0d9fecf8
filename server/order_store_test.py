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

"""Tests for the Appwrite order store adapter."""

import asyncio
import json

from absl.testing import absltest
from exceptions import DocumentStoreError
import httpx
from services.order_store import AppwriteOrderStore


class AppwriteOrderStoreTest(absltest.TestCase):

  def setUp(self) -> None:
    super().setUp()
    self.requests = []
    self.response = httpx.Response(201, json={"$id": "ORDER-1"})

  def _handler(self, request: httpx.Request) -> httpx.Response:
    self.requests.append(request)
    return self.response

  def _create(self, document_id="ORDER-1", payload=None):
    async def run():
      async with httpx.AsyncClient(
          transport=httpx.MockTransport(self._handler)
      ) as client:
        store = AppwriteOrderStore(
            client,
            endpoint="https://cloud.appwrite.io/v1/",
            project="shop",
            api_key="secret",
            database_id="main",
            collection_id="orders",
        )
        await store.create_document(document_id, payload or {"name": "Jane"})

    asyncio.run(run())

  def test_posts_document(self) -> None:
    self._create(payload={"name": "Jane", "status": "Pending"})

    self.assertLen(self.requests, 1)
    request = self.requests[0]
    self.assertEqual(request.method, "POST")
    self.assertEqual(
        str(request.url),
        "https://cloud.appwrite.io/v1/databases/main/collections/orders/documents",
    )
    self.assertEqual(request.headers["x-appwrite-project"], "shop")
    self.assertEqual(request.headers["x-appwrite-key"], "secret")
    self.assertEqual(
        json.loads(request.content),
        {
            "documentId": "ORDER-1",
            "data": {"name": "Jane", "status": "Pending"},
        },
    )

  def test_conflict_raises_document_store_error(self) -> None:
    self.response = httpx.Response(
        409,
        json={
            "message": "Document with the requested ID already exists.",
            "code": 409,
            "type": "document_already_exists",
        },
    )

    with self.assertRaises(DocumentStoreError) as cm:
      self._create()

    self.assertEqual(
        cm.exception.message, "Document with the requested ID already exists."
    )
    self.assertEqual(cm.exception.upstream_status, 409)
    self.assertEqual(cm.exception.error_type, "document_already_exists")

  def test_non_json_error_keeps_text(self) -> None:
    self.response = httpx.Response(502, text="Bad Gateway")

    with self.assertRaises(DocumentStoreError) as cm:
      self._create()

    self.assertEqual(cm.exception.message, "Bad Gateway")
    self.assertIsNone(cm.exception.error_type)

  def test_transport_errors_propagate(self) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
      raise httpx.ConnectError("connection refused", request=request)

    self._handler = refuse

    with self.assertRaises(httpx.ConnectError):
      self._create()


if __name__ == "__main__":
  absltest.main()
