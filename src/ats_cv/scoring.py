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
Estimated ATS score: how many of the job description's keywords the CV covers.
"""

import re
from typing import Set

from ats_cv.models import MAX_ATS_SCORE, MIN_ATS_SCORE

_WORD = re.compile(r"[a-z][a-z0-9+#.-]*[a-z0-9+#]|[a-z]")

STOP_WORDS = frozenset("""
a about above after all also an and any are as at be been being both but by can could did do does
doing for from further had has have having he her here hers him his how if in into is it its itself
just more most must need needs not of on once only or other our ours out over own same she should
so some such than that the their theirs them then there these they this those through to too under
until up very was we were what when where which while who whom why will with within without would
you your yours able across etc per role team work working job position candidate candidates
ideal looking join including include includes well strong experience years year
""".split())


def keywords(text: str) -> Set[str]:
    """Distinct lower-cased words of three or more characters, minus stop words."""
    return {
        w for w in _WORD.findall(text.lower())
        if len(w) >= 3 and w not in STOP_WORDS
    }


def ats_score(markdown: str, job_description: str) -> int:
    """Percentage of job-description keywords found in the CV body."""
    wanted = keywords(job_description)
    if not wanted:
        return MIN_ATS_SCORE
    found = wanted & keywords(markdown)
    score = round(MAX_ATS_SCORE * len(found) / len(wanted))
    return max(MIN_ATS_SCORE, min(MAX_ATS_SCORE, score))
