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
Typed edit commands for a Profile.

Each command describes one change; `apply_edit` returns a new Profile and
never mutates the one passed in. List entries are addressed by id, not index.
"""

import copy
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Union

from ats_cv.models import Education, Profile, WorkExperience


class PersonalField(Enum):
    NAME = "name"
    EMAIL = "email"
    PHONE = "phone"
    LINKEDIN = "linkedin"
    GITHUB = "github"
    PORTFOLIO = "portfolio"


class Section(Enum):
    WORK_EXPERIENCE = "work_experience"
    EDUCATION = "education"


@dataclass(frozen=True)
class SetPersonalInfo:
    field: PersonalField
    value: str


@dataclass(frozen=True)
class SetSummary:
    value: str


@dataclass(frozen=True)
class SetSkills:
    skills: List[str]


@dataclass(frozen=True)
class AddWorkExperience:
    """Appends an entry; a blank one with a single empty responsibility by default."""
    entry: Optional[WorkExperience] = None


@dataclass(frozen=True)
class AddEducation:
    entry: Optional[Education] = None


@dataclass(frozen=True)
class UpdateWorkExperience:
    entry_id: str
    job_title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    responsibilities: Optional[List[str]] = None


@dataclass(frozen=True)
class UpdateEducation:
    entry_id: str
    degree: Optional[str] = None
    institution: Optional[str] = None
    location: Optional[str] = None
    graduation_date: Optional[str] = None


@dataclass(frozen=True)
class RemoveEntry:
    section: Section
    entry_id: str


@dataclass(frozen=True)
class MoveEntry:
    section: Section
    entry_id: str
    index: int


ProfileEdit = Union[
    SetPersonalInfo, SetSummary, SetSkills, AddWorkExperience, AddEducation,
    UpdateWorkExperience, UpdateEducation, RemoveEntry, MoveEntry,
]


def parse_skills(text: str) -> List[str]:
    """Comma-separated skills text to a list, dropping blanks."""
    return [s.strip() for s in text.split(",") if s.strip()]


def parse_responsibilities(text: str) -> List[str]:
    """One responsibility per line."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def _index_of(entries: list, entry_id: str) -> int:
    for i, entry in enumerate(entries):
        if entry.id == entry_id:
            return i
    raise KeyError(entry_id)


def _changes(command) -> dict:
    return {
        name: list(value) if isinstance(value, list) else value
        for name, value in vars(command).items()
        if name != "entry_id" and value is not None
    }


def apply_edit(profile: Profile, command: ProfileEdit) -> Profile:
    """
    Applies one edit command and returns the updated copy.

    Raises:
        KeyError: the command names an entry id that is not in the profile.
        TypeError: unknown command type.
    """
    updated = copy.deepcopy(profile)

    if isinstance(command, SetPersonalInfo):
        setattr(updated.personal_info, command.field.value, command.value)
    elif isinstance(command, SetSummary):
        updated.summary = command.value
    elif isinstance(command, SetSkills):
        updated.skills = list(command.skills)
    elif isinstance(command, AddWorkExperience):
        entry = copy.deepcopy(command.entry) if command.entry else WorkExperience(responsibilities=[""])
        updated.work_experience.append(entry)
    elif isinstance(command, AddEducation):
        entry = copy.deepcopy(command.entry) if command.entry else Education()
        updated.education.append(entry)
    elif isinstance(command, UpdateWorkExperience):
        i = _index_of(updated.work_experience, command.entry_id)
        updated.work_experience[i] = replace(updated.work_experience[i], **_changes(command))
    elif isinstance(command, UpdateEducation):
        i = _index_of(updated.education, command.entry_id)
        updated.education[i] = replace(updated.education[i], **_changes(command))
    elif isinstance(command, RemoveEntry):
        entries = getattr(updated, command.section.value)
        del entries[_index_of(entries, command.entry_id)]
    elif isinstance(command, MoveEntry):
        entries = getattr(updated, command.section.value)
        entry = entries.pop(_index_of(entries, command.entry_id))
        index = max(0, min(command.index, len(entries)))
        entries.insert(index, entry)
    else:
        raise TypeError(f"Unknown profile edit: {command!r}")

    return updated
