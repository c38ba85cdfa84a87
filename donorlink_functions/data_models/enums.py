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
from enum import Enum


class LocationType(str, Enum):
    """Kinds of place a search can be restricted to."""

    CITY = "city"
    NEIGHBORHOOD = "neighborhood"
    ADDRESS = "address"
    FACILITY = "facility"


class DeletionStep(str, Enum):
    """Ordered steps of the account deletion workflow."""

    MARK_PROFILE = "mark_profile"
    DELETE_DONOR_RECORDS = "delete_donor_records"
    DELETE_PROVIDER_RECORD = "delete_provider_record"
    DELETE_REQUESTS = "delete_requests"
    DELETE_IDENTITY = "delete_identity"
