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

"""Enumerations for the checkout relay.

This module defines the enums used to describe the progress of a checkout
request, the state of stored orders, and the payment gateway environment.
"""

import enum


class CheckoutState(str, enum.Enum):
  VALIDATION_FAILED = "validation_failed"
  DECLINED = "declined"
  CHARGE_ERROR = "charge_error"
  PERSISTED = "persisted"
  PERSIST_FAILED = "persist_failed"


class OrderStatus(str, enum.Enum):
  PENDING = "Pending"


class GatewayEnvironment(str, enum.Enum):
  SANDBOX = "Sandbox"
  PRODUCTION = "Production"
