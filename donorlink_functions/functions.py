# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Firebase callable function entry points.

Deploy with the Firebase CLI; each decorated function below becomes one
callable endpoint.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from firebase_functions import https_fn, params

from donorlink_functions.config import EnvApiKeySource, PLACES_API_KEY_ENV
from donorlink_functions.exceptions import CallableError
from donorlink_functions.handlers import (
    AccountDeletionHandler,
    PlaceDetailHandler,
    PlaceSearchHandler,
)

logger = logging.getLogger(__name__)

GOOGLE_PLACES_API_KEY = params.SecretParam(PLACES_API_KEY_ENV)

# Bound secrets are exposed to the function as environment variables.
_places_key_source = EnvApiKeySource(GOOGLE_PLACES_API_KEY.name)
_search_handler = PlaceSearchHandler(_places_key_source)
_detail_handler = PlaceDetailHandler(_places_key_source)
_deletion_handler = AccountDeletionHandler()


def to_https_error(error: CallableError) -> https_fn.HttpsError:
    return https_fn.HttpsError(
        code=https_fn.FunctionsErrorCode(error.code.value),
        message=error.message,
    )


def run_callable(make_call: Callable[[], Awaitable[Any]]) -> Any:
    """Runs one handler coroutine and maps its errors onto HttpsError."""
    try:
        return asyncio.run(make_call())
    except CallableError as e:
        raise to_https_error(e) from e
    except Exception as e:  # noqa: BLE001
        logger.exception("Unhandled error in callable")
        raise https_fn.HttpsError(
            code=https_fn.FunctionsErrorCode.INTERNAL,
            message=str(e) or "An unexpected error occurred",
        ) from e


def caller_uid(req: https_fn.CallableRequest) -> str | None:
    """Returns the uid of the verified caller, if any."""
    return req.auth.uid if req.auth else None


@https_fn.on_call(secrets=[GOOGLE_PLACES_API_KEY])
def google_places_autocomplete(req: https_fn.CallableRequest) -> Any:
    return run_callable(lambda: _search_handler.handle(req.data))


@https_fn.on_call(secrets=[GOOGLE_PLACES_API_KEY])
def get_place_details(req: https_fn.CallableRequest) -> Any:
    return run_callable(lambda: _detail_handler.handle(req.data))


@https_fn.on_call()
def delete_user(req: https_fn.CallableRequest) -> Any:
    return run_callable(lambda: _deletion_handler.handle(caller_uid(req)))
