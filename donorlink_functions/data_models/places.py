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
Data models for the place search and place detail handlers.

Two groups of models live here: the request/response records exchanged with
callers, and the subset of the Places API (New) payloads the handlers read.
Upstream payloads use camelCase keys, so both groups share a camelCase alias
generator.
"""

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    field_validator,
)
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Places API payloads


class LocalizedText(_CamelModel):
    text: str = ""


class StructuredFormat(_CamelModel):
    main_text: LocalizedText | None = None
    secondary_text: LocalizedText | None = None


class PlacePrediction(_CamelModel):
    place_id: str = ""
    text: LocalizedText | None = None
    structured_format: StructuredFormat | None = None


class Suggestion(_CamelModel):
    place_prediction: PlacePrediction | None = None


class AutocompleteResponse(_CamelModel):
    suggestions: list[Suggestion] = Field(default_factory=list)


class LatLng(_CamelModel):
    # Zero-valued coordinates are omitted from the JSON payload.
    latitude: float = 0.0
    longitude: float = 0.0


class Place(_CamelModel):
    """A place record as returned by the detail endpoint for a field mask."""

    id: str | None = None
    location: LatLng | None = None
    display_name: LocalizedText | None = None


# Handler requests and responses


class SearchRequest(_CamelModel):
    """Free-text place search with optional filters."""

    input_text: StrictStr = Field(
        min_length=1,
        validation_alias=AliasChoices("input", "inputText", "input_text"),
        description="Text typed by the user",
    )
    location_type: str | None = Field(
        default=None, description="One of city, neighborhood, address, facility"
    )
    region_code: str | None = Field(
        default=None, description="CLDR region code restricting results"
    )
    city_context: str | None = Field(
        default=None, description="City name appended to the query text"
    )

    @field_validator("location_type", mode="before")
    @classmethod
    def unknown_location_type_is_unset(cls, v):
        """Non-string values select no filter, like any other unknown value."""
        return v if isinstance(v, str) else None

    @property
    def query_text(self) -> str:
        if self.city_context:
            return f"{self.input_text}, {self.city_context}"
        return self.input_text


class AutocompleteRequest(_CamelModel):
    """Body of the upstream autocomplete POST."""

    input: str
    included_region_codes: list[str] | None = None
    included_primary_types: list[str] | None = None


class Enriched(BaseModel):
    lat: float
    lng: float


class Unenriched(BaseModel):
    reason: str


Enrichment = Enriched | Unenriched


class SearchResultItem(_CamelModel):
    place_id: str
    description: str
    main_text: str
    secondary_text: str
    lat: float | None = None
    lng: float | None = None
    enriched: bool = False

    @classmethod
    def from_suggestion(
        cls, suggestion: Suggestion, enrichment: Enrichment
    ) -> "SearchResultItem":
        prediction = suggestion.place_prediction or PlacePrediction()
        structured = prediction.structured_format or StructuredFormat()
        coordinates = {}
        if isinstance(enrichment, Enriched):
            coordinates = {"lat": enrichment.lat, "lng": enrichment.lng, "enriched": True}
        return cls(
            place_id=prediction.place_id,
            description=prediction.text.text if prediction.text else "",
            main_text=structured.main_text.text if structured.main_text else "",
            secondary_text=(
                structured.secondary_text.text if structured.secondary_text else ""
            ),
            **coordinates,
        )


class SearchResponse(_CamelModel):
    suggestions: list[SearchResultItem] = Field(default_factory=list)


class PlaceDetailRequest(_CamelModel):
    place_id: StrictStr = Field(min_length=1)


class PlaceDetailResult(_CamelModel):
    lat: float
    lng: float
    name: str = ""
