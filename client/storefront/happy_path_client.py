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

"""Happy Path Client Script for the checkout relay.

This script walks the storefront's side of a checkout:
0. Health check against `/ping`.
1. Fetching a client token for the payment form.
2. Submitting a checkout with a Braintree sandbox test nonce.

Usage:
  uv run happy_path_client.py --server_url=http://localhost:3000
"""

import argparse
import json
import logging

import httpx

# Braintree's sandbox accepts this nonce as a valid card.
SANDBOX_NONCE = "fake-valid-nonce"


def build_checkout_payload(nonce: str, amount: str) -> dict[str, object]:
  """Builds a sample checkout body as the storefront would send it."""
  return {
      "name": "Jane Doe",
      "email": "jane@example.com",
      "phone": "+1 555 0100",
      "shippingAddress": "1 Market St, San Francisco, CA 94105, US",
      "orderDetails": json.dumps([{"sku": "rose", "quantity": 2}]),
      "payment_method_nonce": nonce,
      "amount": amount,
  }


def log_interaction(
    filename: str,
    method: str,
    url: str,
    json_body: dict[str, object] | None,
    response: httpx.Response,
    step_description: str,
):
  """Appends the request as curl and the response as JSON to a markdown file."""
  with open(filename, "a", encoding="utf-8") as f:
    f.write(f"## {step_description}\n\n")

    curl_cmd = f"curl -s -X {method} {url}"
    if json_body:
      curl_cmd += " \\\n  -H 'Content-Type: application/json' \\\n"
      curl_cmd += f"  -d '{json.dumps(json_body, indent=2)}'"
    f.write("### Request\n\n```bash\n" + curl_cmd + "\n```\n\n")

    f.write(f"### Response ({response.status_code})\n\n")
    try:
      f.write("```json\n" + json.dumps(response.json(), indent=2) + "\n```\n\n")
    except json.JSONDecodeError:
      f.write(f"```\n{response.text}\n```\n\n")


def main() -> None:
  parser = argparse.ArgumentParser()
  parser.add_argument(
      "--server_url",
      default="http://localhost:3000",
      help="Base URL of the checkout relay",
  )
  parser.add_argument(
      "--amount", default="10.00", help="Amount to charge, as a decimal string"
  )
  parser.add_argument(
      "--nonce", default=SANDBOX_NONCE, help="Payment method nonce to charge"
  )
  parser.add_argument(
      "--export_requests_to",
      default=None,
      help="Path to export requests and responses as markdown.",
  )
  args = parser.parse_args()

  logging.basicConfig(
      level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
  )
  logger = logging.getLogger(__name__)

  if args.export_requests_to:
    with open(args.export_requests_to, "w", encoding="utf-8") as f:
      f.write("# Checkout Relay Interaction Log\n\n")

  def record(method, path, body, response, description):
    if args.export_requests_to:
      log_interaction(
          args.export_requests_to,
          method,
          f"{args.server_url}{path}",
          body,
          response,
          description,
      )

  client = httpx.Client(base_url=args.server_url)
  try:
    # STEP 0: Health check
    logger.info("STEP 0: Pinging the relay...")
    response = client.get("/ping")
    record("GET", "/ping", None, response, "Step 0: Ping")
    if response.status_code != 200:
      logger.error("Relay is not healthy: %s", response.text)
      return

    # STEP 1: Client token
    logger.info("STEP 1: Fetching a client token...")
    response = client.get("/client_token")
    record("GET", "/client_token", None, response, "Step 1: Client token")
    if response.status_code != 200:
      logger.error("Client token failed: %s", response.text)
      return
    logger.info(
        "Received client token (%d chars)", len(response.json()["clientToken"])
    )

    # STEP 2: Checkout
    logger.info("STEP 2: Submitting checkout for %s...", args.amount)
    payload = build_checkout_payload(args.nonce, args.amount)
    response = client.post("/checkout", json=payload)
    record("POST", "/checkout", payload, response, "Step 2: Checkout")
    data = response.json()
    if response.status_code != 200:
      logger.error("Checkout failed (%d): %s", response.status_code, data)
      if data.get("transactionId"):
        logger.error(
            "Payment went through as transaction %s; contact support.",
            data["transactionId"],
        )
      return

    logger.info("Order ID: %s", data["orderId"])
    logger.info("Transaction ID: %s", data["transactionId"])
    logger.info("Happy Path completed successfully.")

  except Exception:  # pylint: disable=broad-exception-caught
    logger.exception("An unexpected error occurred:")

  finally:
    client.close()


if __name__ == "__main__":
  main()
