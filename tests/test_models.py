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

import unittest

from ats_cv.models import CVDocument, Profile
from ats_cv.scoring import ats_score, keywords


class TestCVDocument(unittest.TestCase):
    def test_ids_are_unique(self):
        ids = {CVDocument.create("JD", "# CV", 80).id for _ in range(50)}
        self.assertEqual(len(ids), 50)

    def test_score_range_enforced(self):
        with self.assertRaises(ValueError):
            CVDocument.create("JD", "# CV", 101)
        with self.assertRaises(TypeError):
            CVDocument.create("JD", "# CV", 80.5)

    def test_revised_keeps_identity(self):
        doc = CVDocument("abc", "JD", "# Old", 80, "2026-01-01T00:00:00+00:00")
        new = doc.revised("# New", generated_date="2026-02-01T00:00:00+00:00")
        self.assertEqual((new.id, new.job_description, new.ats_score), ("abc", "JD", 80))
        self.assertEqual((new.markdown, new.generated_date), ("# New", "2026-02-01T00:00:00+00:00"))
        self.assertEqual(doc.markdown, "# Old")

    def test_from_dict_uses_camel_case(self):
        doc = CVDocument.from_dict({"id": "x", "jobDescription": "JD", "markdown": "# M",
                                    "atsScore": 91, "generatedDate": "d"})
        self.assertEqual(doc.to_dict()["atsScore"], 91)
        self.assertEqual(doc.job_description, "JD")


class TestProfile(unittest.TestCase):
    def test_lenient_loading(self):
        profile = Profile.from_dict({"personalInfo": {"name": "Jane"}, "skills": "not a list",
                                     "workExperience": [{"jobTitle": "Dev"}, "junk"], "extra": 1})
        self.assertEqual(profile.personal_info.name, "Jane")
        self.assertEqual(profile.skills, [])
        self.assertEqual(len(profile.work_experience), 1)
        self.assertTrue(profile.work_experience[0].id)

    def test_is_configured(self):
        self.assertFalse(Profile().is_configured)
        profile = Profile.from_dict({"personalInfo": {"name": "Jane"}, "summary": "Engineer"})
        self.assertTrue(profile.is_configured)


class TestScoring(unittest.TestCase):
    def test_keywords_drop_stop_words(self):
        self.assertEqual(keywords("We are looking for a Senior Python engineer with C++"),
                         {"senior", "python", "engineer", "c++"})

    def test_full_and_partial_coverage(self):
        self.assertEqual(ats_score("Senior engineer", "Senior Engineer"), 100)
        self.assertEqual(ats_score("Python developer", "Senior Python Engineer Kubernetes"), 25)

    def test_no_keywords_scores_zero(self):
        self.assertEqual(ats_score("anything", "a an the"), 0)


if __name__ == '__main__':
    unittest.main()
