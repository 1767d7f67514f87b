# Copyright 2026 Justin Cook
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
The three AI operations: profile extraction, CV generation and CV revision.
"""

import logging

from ats_cv.errors import ATSCVError, GenerationError
from ats_cv.llm_client import LLMClient
from ats_cv.models import Profile
from ats_cv.prompts import (
    PROFILE_SCHEMA,
    build_extraction_prompt,
    build_generation_prompt,
    build_revision_prompt,
)

logger = logging.getLogger(__name__)


def _require_text(value: str, name: str) -> None:
    if not value or not value.strip():
        raise ValueError(f"{name} must not be empty")


class CVWriter:
    """
    Builds prompts, sends them through the gateway and shapes the result.
    Generated markdown is returned as-is; its structure is only enforced
    by the prompt.
    """
    def __init__(self, client: LLMClient):
        self.client = client

    def extract_profile(self, cv_text: str) -> Profile:
        """
        Extracts a structured profile from free-form CV text.
        Work and education entries get fresh ids in source order.
        """
        _require_text(cv_text, "cv_text")
        logger.info("Extracting profile from CV text...")
        try:
            raw = self.client.invoke(build_extraction_prompt(cv_text), schema=PROFILE_SCHEMA)
        except ATSCVError as e:
            raise GenerationError("analyze CV", e) from e
        profile = Profile.from_dict(raw)
        logger.info(f"    > Extracted {len(profile.work_experience)} roles, "
                    f"{len(profile.education)} education entries, {len(profile.skills)} skills")
        return profile

    def generate_document(self, profile: Profile, job_description: str) -> str:
        """Drafts a tailored markdown CV for `job_description`."""
        _require_text(job_description, "job_description")
        logger.info("Generating tailored CV (this may take a moment)...")
        try:
            return self.client.invoke(build_generation_prompt(profile, job_description))
        except ATSCVError as e:
            raise GenerationError("generate CV", e) from e

    def revise_document(self, original_markdown: str, change_request: str,
                        profile: Profile, job_description: str) -> str:
        """Rewrites `original_markdown` according to `change_request`."""
        _require_text(change_request, "change_request")
        logger.info("Revising CV...")
        try:
            return self.client.invoke(
                build_revision_prompt(original_markdown, change_request, profile, job_description)
            )
        except ATSCVError as e:
            raise GenerationError("regenerate CV", e) from e
