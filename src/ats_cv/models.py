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
Data models for the ATS CV Generator.

Serialised forms use the camelCase keys shared with the AI extraction schema,
so a stored profile and an extracted one have the same shape.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import List, Optional

MIN_ATS_SCORE = 0
MAX_ATS_SCORE = 100


def new_id() -> str:
    """Generates a unique identifier for list entries and documents."""
    return uuid.uuid4().hex


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _str_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


@dataclass
class PersonalInfo:
    """Contact block at the top of the CV."""
    name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "linkedin": self.linkedin,
            "github": self.github,
            "portfolio": self.portfolio,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "PersonalInfo":
        raw = raw or {}
        return cls(
            name=str(raw.get("name") or ""),
            email=str(raw.get("email") or ""),
            phone=str(raw.get("phone") or ""),
            linkedin=str(raw.get("linkedin") or ""),
            github=str(raw.get("github") or ""),
            portfolio=str(raw.get("portfolio") or ""),
        )


@dataclass
class WorkExperience:
    """A single role. `id` keeps list edits stable across reorders."""
    id: str = field(default_factory=new_id)
    job_title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    responsibilities: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "jobTitle": self.job_title,
            "company": self.company,
            "location": self.location,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "responsibilities": list(self.responsibilities),
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "WorkExperience":
        return cls(
            id=str(raw.get("id") or new_id()),
            job_title=str(raw.get("jobTitle") or ""),
            company=str(raw.get("company") or ""),
            location=str(raw.get("location") or ""),
            start_date=str(raw.get("startDate") or ""),
            end_date=str(raw.get("endDate") or ""),
            responsibilities=_str_list(raw.get("responsibilities")),
        )


@dataclass
class Education:
    """A degree or qualification."""
    id: str = field(default_factory=new_id)
    degree: str = ""
    institution: str = ""
    location: str = ""
    graduation_date: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "degree": self.degree,
            "institution": self.institution,
            "location": self.location,
            "graduationDate": self.graduation_date,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "Education":
        return cls(
            id=str(raw.get("id") or new_id()),
            degree=str(raw.get("degree") or ""),
            institution=str(raw.get("institution") or ""),
            location=str(raw.get("location") or ""),
            graduation_date=str(raw.get("graduationDate") or ""),
        )


@dataclass
class Profile:
    """
    The user's structured career data, used as input for every generation.
    Saved wholesale; there is no field-level merge.
    """
    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    summary: str = ""
    work_experience: List[WorkExperience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)

    @property
    def is_configured(self) -> bool:
        """A profile is usable for generation once it has a name and a summary."""
        return bool(self.personal_info.name.strip() and self.summary.strip())

    def to_dict(self) -> dict:
        return {
            "personalInfo": self.personal_info.to_dict(),
            "summary": self.summary,
            "workExperience": [w.to_dict() for w in self.work_experience],
            "education": [e.to_dict() for e in self.education],
            "skills": list(self.skills),
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "Profile":
        """
        Builds a Profile from stored or extracted JSON.
        Entries without an id (AI extraction output) get a fresh one.
        """
        raw = raw or {}
        return cls(
            personal_info=PersonalInfo.from_dict(raw.get("personalInfo")),
            summary=str(raw.get("summary") or ""),
            work_experience=[WorkExperience.from_dict(w) for w in raw.get("workExperience") or [] if isinstance(w, dict)],
            education=[Education.from_dict(e) for e in raw.get("education") or [] if isinstance(e, dict)],
            skills=_str_list(raw.get("skills")),
        )


@dataclass
class CVDocument:
    """
    A generated CV.
    `id` and `job_description` never change; a revision replaces
    `markdown` and `generated_date` together.
    """
    id: str
    job_description: str
    markdown: str
    ats_score: int
    generated_date: str

    def __post_init__(self):
        if not isinstance(self.ats_score, int) or isinstance(self.ats_score, bool):
            raise TypeError(f"ats_score must be an int, got {type(self.ats_score).__name__}")
        if not MIN_ATS_SCORE <= self.ats_score <= MAX_ATS_SCORE:
            raise ValueError(f"ats_score {self.ats_score} outside [{MIN_ATS_SCORE}, {MAX_ATS_SCORE}]")

    @classmethod
    def create(cls, job_description: str, markdown: str, ats_score: int,
               generated_date: Optional[str] = None) -> "CVDocument":
        return cls(
            id=new_id(),
            job_description=job_description,
            markdown=markdown,
            ats_score=ats_score,
            generated_date=generated_date or utc_now(),
        )

    def revised(self, markdown: str, generated_date: Optional[str] = None) -> "CVDocument":
        """Returns a copy with a new body and timestamp, same id and job description."""
        return replace(self, markdown=markdown, generated_date=generated_date or utc_now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "jobDescription": self.job_description,
            "markdown": self.markdown,
            "atsScore": self.ats_score,
            "generatedDate": self.generated_date,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "CVDocument":
        return cls(
            id=str(raw["id"]),
            job_description=str(raw.get("jobDescription") or ""),
            markdown=str(raw.get("markdown") or ""),
            ats_score=int(raw.get("atsScore") or 0),
            generated_date=str(raw.get("generatedDate") or ""),
        )
