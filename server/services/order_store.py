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

"""Order persistence in the hosted document database.

`OrderStore` is the capability the checkout service depends on.
`AppwriteOrderStore` writes documents through the Appwrite Databases REST API.
"""

import logging
from typing import Any, Dict, Protocol

import config
from exceptions import DocumentStoreError
import httpx

logger = logging.getLogger(__name__)


class OrderStore(Protocol):
  """Capability for creating order documents."""

  async def create_document(
      self, document_id: str, payload: Dict[str, Any]
  ) -> None:
    ...


class AppwriteOrderStore:
  """`OrderStore` writing to one Appwrite collection."""

  def __init__(
      self,
      client: httpx.AsyncClient,
      endpoint: str,
      project: str,
      api_key: str,
      database_id: str,
      collection_id: str,
  ):
    self.client = client
    self.endpoint = endpoint.rstrip("/")
    self.project = project
    self.api_key = api_key
    self.database_id = database_id
    self.collection_id = collection_id

  @classmethod
  def from_settings(
      cls, settings: config.Settings, client: httpx.AsyncClient
  ) -> "AppwriteOrderStore":
    return cls(
        client,
        endpoint=settings.appwrite_endpoint,
        project=settings.appwrite_project,
        api_key=settings.appwrite_api_key,
        database_id=settings.appwrite_database_id,
        collection_id=settings.appwrite_orders_collection_id,
    )

  @property
  def documents_url(self) -> str:
    return (
        f"{self.endpoint}/databases/{self.database_id}"
        f"/collections/{self.collection_id}/documents"
    )

  def _headers(self) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "X-Appwrite-Project": self.project,
        "X-Appwrite-Key": self.api_key,
    }

  async def create_document(
      self, document_id: str, payload: Dict[str, Any]
  ) -> None:
    """Creates a document with a caller-chosen id.

    Raises:
      DocumentStoreError: If Appwrite answers with a non-2xx status, including
        409 when the id is already taken.
      httpx.HTTPError: If the request could not be completed.
    """
    response = await self.client.post(
        self.documents_url,
        headers=self._headers(),
        json={"documentId": document_id, "data": payload},
    )
    if response.is_success:
      logger.info("Stored document %s", document_id)
      return

    message = response.text
    error_type = None
    try:
      body = response.json()
    except ValueError:
      body = None  # Non-JSON error page; keep the raw text.
    if isinstance(body, dict):
      message = body.get("message") or message
      error_type = body.get("type")
    raise DocumentStoreError(
        message or f"Appwrite returned HTTP {response.status_code}",
        status_code=response.status_code,
        error_type=error_type,
    )
