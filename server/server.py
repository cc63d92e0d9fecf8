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

"""Checkout relay server (Python/FastAPI)."""

import logging
import sys
from typing import Sequence

from absl import app as absl_app
import config
from dotenv import load_dotenv
from exceptions import ConfigurationError
from exceptions import RelayError
from fastapi import FastAPI
from fastapi import Request
from fastapi import Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from routes.checkout import router as checkout_router
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

# --- App Setup ---

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

app = FastAPI(
    title="Checkout Relay",
    version="1.0.0",
    description="Relays storefront checkouts to Braintree and Appwrite",
    lifespan=config.lifespan,
)


@app.middleware("http")
async def cors_middleware(request: Request, call_next):
  """Allows every origin; answers any OPTIONS request directly."""
  if request.method == "OPTIONS":
    response = Response(status_code=200)
  else:
    response = await call_next(request)
  response.headers.update(CORS_HEADERS)
  return response


@app.exception_handler(RelayError)
async def relay_exception_handler(request: Request, exc: RelayError):
  """Handles relay exceptions and converts them to JSON responses."""
  del request  # Unused.
  return JSONResponse(status_code=exc.status_code, content=exc.body())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
  """Malformed bodies get the relay's 400 shape instead of FastAPI's 422."""
  del request  # Unused.
  return JSONResponse(
      status_code=400,
      content={
          "ok": False,
          "message": "Invalid request body",
          "errors": [
              {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
              for err in exc.errors()
          ],
      },
  )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
):
  del request  # Unused.
  return JSONResponse(
      status_code=exc.status_code,
      content={"ok": False, "message": str(exc.detail)},
      headers=getattr(exc, "headers", None),
  )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
  """Last resort so that no failure escapes as an unstructured response."""
  logger.exception("Unhandled error on %s %s", request.method, request.url.path)
  return JSONResponse(
      status_code=500,
      content={"ok": False, "error": str(exc)},
      headers=CORS_HEADERS,
  )


app.include_router(checkout_router)


def main(argv: Sequence[str]) -> None:
  """Main entry point for the checkout relay."""
  del argv  # Unused.

  load_dotenv(config.FLAGS.env_file)
  try:
    settings = config.load_settings()
  except ConfigurationError as e:
    logger.error("%s", e.message)
    print("\nUsage:")
    print(config.FLAGS.main_module_help())
    sys.exit(1)

  port = config.FLAGS.port or settings.port
  app.state.settings = settings
  logger.info("Server running on port %d", port)
  uvicorn.run(app, host="0.0.0.0", port=port)


def run() -> None:
  absl_app.run(main)


if __name__ == "__main__":
  run()
