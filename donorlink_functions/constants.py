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

from datetime import timedelta

from donorlink_functions.data_models.enums import LocationType

# Places API
AUTOCOMPLETE_PATH = "/places:autocomplete"
PLACE_PATH = "/places/{place_id}"
API_KEY_HEADER = "X-Goog-Api-Key"
FIELD_MASK_HEADER = "X-Goog-FieldMask"
ENRICHMENT_FIELD_MASK = "location"
DETAIL_FIELD_MASK = "id,location,displayName"

# Primary type filters sent for each location type.
PRIMARY_TYPES_BY_LOCATION = {
    LocationType.CITY: ["locality", "administrative_area_level_3"],
    LocationType.NEIGHBORHOOD: ["neighborhood", "sublocality", "locality"],
    # Broad on purpose: sparse areas often only resolve to an establishment.
    LocationType.ADDRESS: [
        "street_address",
        "premise",
        "subpremise",
        "route",
        "establishment",
        "point_of_interest",
        "hospital",
        "health",
    ],
    LocationType.FACILITY: [
        "hospital",
        "health",
        "doctor",
        "clinic",
        "pharmacy",
        "medical_lab",
    ],
}

# Firestore collections
USERS_COLLECTION = "users"
DONORS_COLLECTION = "donors"
PROVIDERS_COLLECTION = "healthcare_providers"
REQUESTS_COLLECTION = "blood_requests"
REQUESTER_FIELD = "requesterId"
DONOR_ROLE_SUFFIXES = ("daytime", "nighttime")

DELETION_GRACE_PERIOD = timedelta(days=30)
DELETION_MESSAGE = (
    "Account deleted. Your data will be permanently removed from our servers "
    "in 30 days."
)
