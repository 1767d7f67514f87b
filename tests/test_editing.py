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

from ats_cv import editing
from ats_cv.models import Education, Profile, WorkExperience


class TestApplyEdit(unittest.TestCase):
    def setUp(self):
        self.profile = Profile(
            work_experience=[
                WorkExperience(id="w1", job_title="First"),
                WorkExperience(id="w2", job_title="Second"),
                WorkExperience(id="w3", job_title="Third"),
            ],
            education=[Education(id="e1", degree="BSc")],
        )

    def test_set_personal_info(self):
        updated = editing.apply_edit(self.profile, editing.SetPersonalInfo(editing.PersonalField.GITHUB, "github.com/jane"))
        self.assertEqual(updated.personal_info.github, "github.com/jane")
        self.assertEqual(self.profile.personal_info.github, "")

    def test_set_summary_and_skills(self):
        updated = editing.apply_edit(self.profile, editing.SetSummary("Builder of things"))
        updated = editing.apply_edit(updated, editing.SetSkills(["Python", "Go"]))
        self.assertEqual(updated.summary, "Builder of things")
        self.assertEqual(updated.skills, ["Python", "Go"])

    def test_add_entries_append_in_order(self):
        updated = editing.apply_edit(self.profile, editing.AddWorkExperience())
        self.assertEqual(len(updated.work_experience), 4)
        self.assertEqual(updated.work_experience[-1].responsibilities, [""])
        self.assertNotIn(updated.work_experience[-1].id, {"w1", "w2", "w3"})

        updated = editing.apply_edit(updated, editing.AddEducation(Education(id="e2", degree="MSc")))
        self.assertEqual([e.id for e in updated.education], ["e1", "e2"])

    def test_update_by_id_only_touches_given_fields(self):
        updated = editing.apply_edit(self.profile, editing.UpdateWorkExperience("w2", company="Acme", responsibilities=["Led"]))
        entry = updated.work_experience[1]
        self.assertEqual(entry.id, "w2")
        self.assertEqual(entry.job_title, "Second")
        self.assertEqual(entry.company, "Acme")
        self.assertEqual(entry.responsibilities, ["Led"])

    def test_update_copies_responsibilities(self):
        duties = ["Led"]
        updated = editing.apply_edit(self.profile, editing.UpdateWorkExperience("w1", responsibilities=duties))
        duties.append("Shipped")
        self.assertEqual(updated.work_experience[0].responsibilities, ["Led"])

    def test_update_education(self):
        updated = editing.apply_edit(self.profile, editing.UpdateEducation("e1", institution="Uni"))
        self.assertEqual(updated.education[0].institution, "Uni")
        self.assertEqual(updated.education[0].degree, "BSc")

    def test_remove_keeps_remaining_order(self):
        updated = editing.apply_edit(self.profile, editing.RemoveEntry(editing.Section.WORK_EXPERIENCE, "w2"))
        self.assertEqual([w.id for w in updated.work_experience], ["w1", "w3"])
        self.assertEqual(len(self.profile.work_experience), 3)

    def test_move_entry(self):
        updated = editing.apply_edit(self.profile, editing.MoveEntry(editing.Section.WORK_EXPERIENCE, "w3", 0))
        self.assertEqual([w.id for w in updated.work_experience], ["w3", "w1", "w2"])
        updated = editing.apply_edit(updated, editing.MoveEntry(editing.Section.WORK_EXPERIENCE, "w3", 99))
        self.assertEqual([w.id for w in updated.work_experience], ["w1", "w2", "w3"])

    def test_unknown_id_raises(self):
        with self.assertRaises(KeyError):
            editing.apply_edit(self.profile, editing.RemoveEntry(editing.Section.EDUCATION, "nope"))

    def test_unknown_command_raises(self):
        with self.assertRaises(TypeError):
            editing.apply_edit(self.profile, "personalInfo.name")


class TestParsers(unittest.TestCase):
    def test_parse_skills(self):
        self.assertEqual(editing.parse_skills(" Python, Go ,, SQL "), ["Python", "Go", "SQL"])

    def test_parse_responsibilities(self):
        self.assertEqual(editing.parse_responsibilities("Led team\n\n  Shipped v2 \n"), ["Led team", "Shipped v2"])


if __name__ == '__main__':
    unittest.main()
