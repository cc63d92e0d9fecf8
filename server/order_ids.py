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

"""Order identifier generation.

Ids look like `LZ3K9Q1A-7F2KQ9XD`: a base-36 millisecond timestamp followed by a
random base-36 suffix. They are URL-safe and short enough to read out over the
phone. The store is not consulted for existing ids; a clash shows up as a failed
create.
"""

import secrets
import string
import time
from typing import Optional

_ALPHABET = string.digits + string.ascii_uppercase
RANDOM_LENGTH = 8


def to_base36(value: int) -> str:
  """Encodes a non-negative integer in upper-case base 36."""
  if value < 0:
    raise ValueError("value must be non-negative")
  if value == 0:
    return "0"
  digits = []
  while value:
    value, remainder = divmod(value, 36)
    digits.append(_ALPHABET[remainder])
  return "".join(reversed(digits))


def generate_order_id(now_ms: Optional[int] = None) -> str:
  """Returns a new practically-unique order id."""
  if now_ms is None:
    now_ms = time.time_ns() // 1_000_000
  suffix = "".join(secrets.choice(_ALPHABET) for _ in range(RANDOM_LENGTH))
  return f"{to_base36(now_ms)}-{suffix}"
