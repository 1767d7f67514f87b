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
Prompt templates and response schemas for the three AI operations.
"""

import json

from ats_cv.models import Profile

_STRING = {"type": "STRING"}
_STRING_ARRAY = {"type": "ARRAY", "items": _STRING}

# Shape of extract_profile output. Entries carry no ids; the caller assigns them.
PROFILE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "personalInfo": {
            "type": "OBJECT",
            "properties": {
                "name": _STRING,
                "email": _STRING,
                "phone": _STRING,
                "linkedin": _STRING,
                "github": _STRING,
                "portfolio": _STRING,
            },
            "required": ["name", "email", "phone"],
        },
        "summary": _STRING,
        "workExperience": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "jobTitle": _STRING,
                    "company": _STRING,
                    "location": _STRING,
                    "startDate": _STRING,
                    "endDate": _STRING,
                    "responsibilities": _STRING_ARRAY,
                },
                "required": ["jobTitle", "company", "startDate", "endDate", "responsibilities"],
            },
        },
        "education": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "degree": _STRING,
                    "institution": _STRING,
                    "location": _STRING,
                    "graduationDate": _STRING,
                },
                "required": ["degree", "institution", "graduationDate"],
            },
        },
        "skills": _STRING_ARRAY,
    },
    "required": ["personalInfo", "summary", "workExperience", "education", "skills"],
}

SAMPLE_CV_FORMAT = """# JANE DOE

<p class="contact-info">jane.doe@email.com | 555-123-4567 | linkedin.com/in/janedoe</p>

## Professional Summary

[A tailored summary based on the user's profile and the job description.]

## Work Experience

### **Job Title** | Company Name | Location
*Start Date - End Date*

- Responsibility or achievement 1, tailored to the job description.
- Responsibility or achievement 2, tailored to the job description.
- Responsibility or achievement 3, tailored to the job description.

### **Another Job Title** | Another Company | Location
*Start Date - End Date*

- Responsibility or achievement.

## Education

### **Degree Name** | Institution Name | Location
*Graduation Date*

## Skills

**Category:** Skill 1, Skill 2, Skill 3
**Another Category:** Skill A, Skill B"""


def _profile_json(profile: Profile) -> str:
    return json.dumps(profile.to_dict(), ensure_ascii=False)


def build_extraction_prompt(cv_text: str) -> str:
    return (
        "Analyze the following CV text and extract the information into a valid JSON object. "
        "Extract the contact details (name, email, phone, and LinkedIn, GitHub and portfolio URLs when present), "
        "the professional summary, the work history in the order it appears, the education history "
        "and the list of skills. "
        "The output must be only the JSON object.\n"
        f'CV Text: """{cv_text}"""'
    )


def build_generation_prompt(profile: Profile, job_description: str) -> str:
    return f"""Generate a professional, ATS-compliant CV in Markdown format based on the user's profile and the provided job description.
The output MUST be ONLY the Markdown code for the CV, with no other text or explanations.
The Markdown structure MUST EXACTLY match the following format and conventions. Pay close attention to headings, bolding, italics, and lists.

--- SAMPLE CV FORMAT ---
{SAMPLE_CV_FORMAT}

--- END OF SAMPLE ---

Now, generate the CV for the following user, strictly adhering to the format above.

User Profile: \"\"\"{_profile_json(profile)}\"\"\"

Job Description: \"\"\"{job_description}\"\"\"
"""


def build_revision_prompt(original_markdown: str, change_request: str,
                          profile: Profile, job_description: str) -> str:
    return f"""Revise the original Markdown CV based on the user's change request.
The output MUST be ONLY the revised Markdown code, with no other text or explanations.
Crucially, you MUST maintain the exact same formatting structure as the original CV. Adhere strictly to the use of headings, bolding, italics, and lists as seen in the original.

User's Change Request:
\"\"\"
{change_request}
\"\"\"

Original Markdown CV:
\"\"\"
{original_markdown}
\"\"\"

User Profile that was used for original CV:
\"\"\"
{_profile_json(profile)}
\"\"\"

Job Description that was used for original CV:
\"\"\"
{job_description}
\"\"\"
"""
