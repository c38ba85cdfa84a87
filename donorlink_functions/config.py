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
Configuration module for the callable handlers.

The Places API key is exposed to handlers through an `ApiKeySource` so the
lookup is an explicit dependency instead of ambient global state.
"""

import os
from typing import Protocol

from dotenv import load_dotenv

from .data_models.config import PlacesConfig

# Environment variable names
PLACES_API_KEY_ENV = "GOOGLE_PLACES_API_KEY"
PLACES_BASE_URL_ENV = "PLACES_API_BASE_URL"
PLACES_TIMEOUT_ENV = "PLACES_API_TIMEOUT"


def _load_env_file() -> None:
    """Load .env file if present in the current directory."""
    load_dotenv()


class ApiKeySource(Protocol):
    def get(self) -> str | None:
        """Return the API key, or None when it is not configured."""
        ...


class StaticApiKeySource:
    """Key source backed by a fixed value."""

    def __init__(self, api_key: str | None) -> None:
        self._api_key = api_key

    def get(self) -> str | None:
        if self._api_key is None or not self._api_key.strip():
            return None
        return self._api_key.strip()


class EnvApiKeySource:
    """Key source that reads an environment variable on every lookup."""

    def __init__(self, env_var: str = PLACES_API_KEY_ENV) -> None:
        self.env_var = env_var

    def get(self) -> str | None:
        return StaticApiKeySource(os.getenv(self.env_var)).get()


def get_places_config() -> PlacesConfig:
    """
    Get Places API configuration from environment variables.

    A missing API key is not an error here; handlers report it as a failed
    precondition when they need the key.

    Returns:
        PlacesConfig object containing the configuration

    Raises:
        ValueError: If a provided value is invalid
    """
    _load_env_file()

    config_data = {"api_key": os.getenv(PLACES_API_KEY_ENV)}

    base_url = os.getenv(PLACES_BASE_URL_ENV)
    if base_url:
        config_data["base_url"] = base_url

    timeout = os.getenv(PLACES_TIMEOUT_ENV)
    if timeout:
        try:
            config_data["timeout_seconds"] = float(timeout)
        except ValueError:
            raise ValueError(
                f"{PLACES_TIMEOUT_ENV} must be a number of seconds, got '{timeout}'"
            ) from None

    return PlacesConfig.model_validate(config_data)
