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

"""In-memory stand-ins for the remote clients, used by the tests."""

from typing import Any, Dict, List, Optional, Tuple

from services.payment_gateway import ChargeResult


class FakeChargeClient:
  """Scripted `ChargeClient`.

  Each call pops the next entry of `outcomes`; an exception entry is raised,
  anything else is returned. The last entry repeats once the script runs out.
  """

  def __init__(self, outcomes=None, tokens=None):
    self.outcomes = list(
        outcomes or [ChargeResult(success=True, transaction_id="TX1")]
    )
    self.tokens = list(tokens or ["client-token-1"])
    self.charges: List[Tuple[str, str, Optional[str]]] = []
    self.token_calls = 0

  @staticmethod
  def _next(script):
    outcome = script.pop(0) if len(script) > 1 else script[0]
    if isinstance(outcome, BaseException):
      raise outcome
    return outcome

  async def charge(
      self, amount: str, nonce: str, device_data: Optional[str] = None
  ) -> ChargeResult:
    self.charges.append((amount, nonce, device_data))
    return self._next(self.outcomes)

  async def generate_client_token(self) -> str:
    self.token_calls += 1
    return self._next(self.tokens)


class FakeOrderStore:
  """`OrderStore` that keeps documents in a dict.

  The first `failures` calls raise `error`; later calls store the document.
  """

  def __init__(self, failures: int = 0, error: Optional[Exception] = None):
    self.failures = failures
    self.error = error or ConnectionError("document store unreachable")
    self.calls = 0
    self.documents: Dict[str, Dict[str, Any]] = {}

  async def create_document(
      self, document_id: str, payload: Dict[str, Any]
  ) -> None:
    self.calls += 1
    if self.calls <= self.failures:
      raise self.error
    if document_id in self.documents:
      raise ValueError(f"Document {document_id} already exists")
    self.documents[document_id] = payload


class RecordingSleep:
  """Replacement for `asyncio.sleep` that records the requested delays."""

  def __init__(self):
    self.delays: List[float] = []

  async def __call__(self, delay: float) -> None:
    self.delays.append(delay)
