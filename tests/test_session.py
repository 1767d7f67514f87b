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

from ats_cv.errors import NotSignedInError
from ats_cv.models import CVDocument, PersonalInfo, Profile
from ats_cv.session import AuthState, Session
from ats_cv.storage import LocalStore, MemoryBackend


class TestSession(unittest.TestCase):
    def setUp(self):
        self.store = LocalStore(MemoryBackend())
        self.session = Session(self.store)

    def test_starts_signed_out(self):
        self.assertEqual(self.session.state, AuthState.SIGNED_OUT)
        self.assertIsNone(self.session.profile)
        self.assertEqual(self.session.documents, [])
        self.assertFalse(self.session.is_pro)

    def test_restores_persisted_session(self):
        self.store.create_account("a@x.com", "pw")
        self.store.write_entitlement("a@x.com")
        session = Session(self.store)
        self.assertEqual(session.user, "a@x.com")
        self.assertTrue(session.is_pro)

    def test_sign_up_login_logout_cycle(self):
        self.assertTrue(self.session.sign_up("a@x.com", "pw"))
        self.assertEqual(self.session.state, AuthState.SIGNED_IN)

        self.session.logout()
        self.assertEqual(self.session.state, AuthState.SIGNED_OUT)
        self.assertIsNone(self.store.current_user())

        self.assertTrue(self.session.login("a@x.com", "pw"))
        self.assertEqual(self.session.user, "a@x.com")

    def test_failed_login_keeps_state(self):
        self.session.sign_up("a@x.com", "pw")
        epoch = self.session.epoch
        self.assertFalse(self.session.login("ghost@x.com", "pw"))
        self.assertEqual(self.session.user, "a@x.com")
        self.assertEqual(self.session.epoch, epoch)

    def test_identity_change_reloads_everything(self):
        self.session.sign_up("a@x.com", "pw")
        self.session.save_profile(Profile(personal_info=PersonalInfo(name="Alice")))
        self.session.add_document(CVDocument.create("JD", "# A", 80))
        self.session.grant_entitlement()

        self.session.sign_up("b@x.com", "pw")
        self.assertIsNone(self.session.profile)
        self.assertEqual(self.session.documents, [])
        self.assertFalse(self.session.is_pro)

        self.session.login("a@x.com", "pw")
        self.assertEqual(self.session.profile.personal_info.name, "Alice")
        self.assertEqual(len(self.session.documents), 1)
        self.assertTrue(self.session.is_pro)

    def test_epoch_increments_on_identity_change(self):
        start = self.session.epoch
        self.session.sign_up("a@x.com", "pw")
        self.session.logout()
        self.assertEqual(self.session.epoch, start + 2)

    def test_grant_entitlement_is_monotonic(self):
        self.session.sign_up("a@x.com", "pw")
        self.assertTrue(self.session.grant_entitlement())
        self.assertTrue(self.session.grant_entitlement())
        self.assertTrue(self.session.is_pro)
        self.session.refresh()
        self.assertTrue(self.session.is_pro)

    def test_grant_entitlement_requires_user(self):
        self.assertFalse(self.session.grant_entitlement())

    def test_mutations_require_user(self):
        with self.assertRaises(NotSignedInError):
            self.session.save_profile(Profile())
        with self.assertRaises(NotSignedInError):
            self.session.add_document(CVDocument.create("JD", "# A", 80))

    def test_saved_profile_is_a_copy(self):
        self.session.sign_up("a@x.com", "pw")
        profile = Profile(summary="Original")
        self.session.save_profile(profile)
        profile.summary = "Changed after save"
        self.assertEqual(self.session.profile.summary, "Original")
        self.assertEqual(self.store.read_profile("a@x.com").summary, "Original")

    def test_update_document(self):
        self.session.sign_up("a@x.com", "pw")
        doc = CVDocument.create("JD", "# A", 80)
        self.session.add_document(doc)
        revised = doc.revised("# A v2", generated_date="2026-01-01T00:00:00+00:00")

        self.assertTrue(self.session.update_document(revised))
        self.assertEqual(self.session.find_document(doc.id).markdown, "# A v2")
        self.assertIsNone(self.session.find_document("missing"))


if __name__ == '__main__':
    unittest.main()
