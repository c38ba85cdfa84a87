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
Data models for the account deletion workflow.
"""

from pydantic import BaseModel, Field

from .enums import DeletionStep


class DeletionRequest(BaseModel):
    """Deletion of the caller's own account.

    `user_id` always comes from the verified caller identity.
    """

    user_id: str = Field(min_length=1)


class DeletionResponse(BaseModel):
    success: bool
    message: str
    completed_steps: list[DeletionStep] = Field(default_factory=list, exclude=True)
