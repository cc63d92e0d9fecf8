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

"""Fixed-delay retries for calls to remote services.

Every exception is treated the same way: the operation is attempted again after
a constant delay until the attempt budget is spent, and the last exception is
re-raised as is.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class RetryPolicy(BaseModel):
  """Attempt budget and constant pause between attempts."""

  model_config = ConfigDict(frozen=True)

  max_attempts: int = Field(default=3, ge=1)
  delay_seconds: float = Field(default=1.0, ge=0)


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    sleep: Sleep = asyncio.sleep,
    description: str = "operation",
) -> T:
  """Runs `operation` until it succeeds or the policy is exhausted.

  Args:
    operation: Zero-argument coroutine factory. Called once per attempt.
    policy: How many attempts to make and how long to wait between them.
    sleep: Awaitable used for the pause, injectable for tests.
    description: Label used in log lines.

  Returns:
    The result of the first successful attempt.

  Raises:
    Exception: The exception raised by the final attempt, unchanged.
  """
  last_error = None
  for attempt in range(1, policy.max_attempts + 1):
    try:
      return await operation()
    except Exception as e:  # pylint: disable=broad-exception-caught
      last_error = e
      logger.warning(
          "%s failed (attempt %d/%d): %s",
          description,
          attempt,
          policy.max_attempts,
          e,
      )
      if attempt < policy.max_attempts:
        await sleep(policy.delay_seconds)
  raise last_error
