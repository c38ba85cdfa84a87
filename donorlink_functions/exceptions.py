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
Exception types raised by the callable handlers.

Every error that reaches a caller is a `CallableError` carrying one of the
callable error codes below.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes understood by callable-function clients."""

    INVALID_ARGUMENT = "invalid-argument"
    UNAUTHENTICATED = "unauthenticated"
    FAILED_PRECONDITION = "failed-precondition"
    NOT_FOUND = "not-found"
    INTERNAL = "internal"


class CallableError(Exception):
    """Base class for typed errors returned to the caller."""

    code: ErrorCode = ErrorCode.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(CallableError):
    """The request payload is malformed or missing a required field."""

    code = ErrorCode.INVALID_ARGUMENT


class UnauthenticatedError(CallableError):
    """The caller has no verified identity."""

    code = ErrorCode.UNAUTHENTICATED


class FailedPreconditionError(CallableError):
    """Required configuration, such as the API key, is unavailable."""

    code = ErrorCode.FAILED_PRECONDITION


class NotFoundError(CallableError):
    """The request was valid but no matching data exists."""

    code = ErrorCode.NOT_FOUND


class InternalError(CallableError):
    code = ErrorCode.INTERNAL


class PlacesApiError(Exception):
    """The Places API answered with a non-2xx status."""

    def __init__(
        self, message: str, status_code: int, upstream_message: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.upstream_message = upstream_message


class InvalidAPIKeyError(Exception):
    """The Places API rejected the configured API key."""


class APIKeyValidationError(Exception):
    """The API key could not be validated because of a server or network error."""
