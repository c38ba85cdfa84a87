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
Global pytest configuration and fixtures.

Pytest automatically discovers and loads this file. Fixtures defined here are
available to all tests in this directory and its subdirectories without
needing to import them explicitly.
"""

import json
import os
from unittest.mock import patch

import httpx
import pytest


@pytest.fixture(autouse=True)
def clean_env():
    """
    Automatically clear environment variables for all tests to ensure
    tests are hermetic and don't depend on the host environment.
    """
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.fixture(autouse=True)
def mock_load_dotenv():
    """
    Automatically mock load_dotenv for all tests to prevent
    loading environment variables from local .env files.
    """
    with patch("donorlink_functions.config.load_dotenv"):
        yield


@pytest.fixture
def places_api():
    """
    A fake Places API served through httpx.MockTransport.

    Tests register place records and autocomplete suggestions on the returned
    object; every request is recorded in `requests`.
    """

    class FakePlacesApi:
        def __init__(self) -> None:
            self.suggestions: list[dict] = []
            self.places: dict[str, dict] = {}
            self.requests: list[httpx.Request] = []
            self.autocomplete_status = 200
            self.autocomplete_error: dict | None = None

        def handler(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if request.url.path.endswith("places:autocomplete"):
                if self.autocomplete_status != 200:
                    return httpx.Response(
                        self.autocomplete_status, json=self.autocomplete_error or {}
                    )
                return httpx.Response(200, json={"suggestions": self.suggestions})

            place_id = request.url.path.rsplit("/", 1)[-1]
            if place_id not in self.places:
                return httpx.Response(
                    404, json={"error": {"code": 404, "message": "Not found"}}
                )
            return httpx.Response(200, json=self.places[place_id])

        def http_client(self) -> httpx.AsyncClient:
            return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

        def autocomplete_bodies(self) -> list[dict]:
            return [
                json.loads(r.content)
                for r in self.requests
                if r.url.path.endswith("places:autocomplete")
            ]

    return FakePlacesApi()


@pytest.fixture
def make_suggestion():
    """Builds one autocomplete suggestion in the Places API wire format."""

    def _make(
        place_id: str, main: str = "", secondary: str = "", description: str = ""
    ) -> dict:
        return {
            "placePrediction": {
                "placeId": place_id,
                "text": {"text": description or f"{main}, {secondary}"},
                "structuredFormat": {
                    "mainText": {"text": main},
                    "secondaryText": {"text": secondary},
                },
            }
        }

    return _make
