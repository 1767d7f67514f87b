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
Signed-in identity and the state loaded for it.
"""

import copy
import logging
from enum import Enum
from typing import List, Optional

from ats_cv.errors import NotSignedInError
from ats_cv.models import CVDocument, Profile
from ats_cv.storage import LocalStore

logger = logging.getLogger(__name__)


class AuthState(Enum):
    SIGNED_OUT = "signed_out"
    SIGNED_IN = "signed_in"


class Session:
    """
    Session context passed to everything that needs the current user.

    Holds copies of the user's profile, CVs and pro status. Every change
    is written through the store first and then reloaded, so the copies
    never drift from what is persisted.
    """
    def __init__(self, store: LocalStore):
        self.store = store
        self.user: Optional[str] = None
        self.profile: Optional[Profile] = None
        self.documents: List[CVDocument] = []
        self.is_pro = False
        # Bumped on every identity change; callers compare it to drop stale results
        self.epoch = 0
        self._set_identity(store.current_user())

    @property
    def state(self) -> AuthState:
        return AuthState.SIGNED_IN if self.user else AuthState.SIGNED_OUT

    def _set_identity(self, user: Optional[str]) -> None:
        self.user = user
        self.epoch += 1
        self.refresh()

    def refresh(self) -> None:
        """Reloads profile, CVs and pro status from the store."""
        if self.user:
            self.profile = self.store.read_profile(self.user)
            self.documents = self.store.read_documents(self.user)
            self.is_pro = self.store.read_entitlement(self.user)
        else:
            self.profile = None
            self.documents = []
            self.is_pro = False

    def _require_user(self) -> str:
        if not self.user:
            raise NotSignedInError("Please log in first.")
        return self.user

    def sign_up(self, email: str, password: str) -> bool:
        if not self.store.create_account(email, password):
            return False
        self._set_identity(email)
        logger.info(f"Signed in as {email}")
        return True

    def login(self, email: str, password: str) -> bool:
        if not self.store.authenticate(email, password):
            return False
        self._set_identity(email)
        logger.info(f"Signed in as {email}")
        return True

    def logout(self) -> None:
        self.store.clear_session()
        if self.user:
            logger.info(f"Signed out {self.user}")
        self._set_identity(None)

    def grant_entitlement(self) -> bool:
        """Unlocks pro features for the current user. False if nobody is signed in."""
        if not self.user:
            return False
        if self.store.write_entitlement(self.user):
            self.is_pro = True
            logger.info(f"Pro features unlocked for {self.user}")
            return True
        return False

    def save_profile(self, profile: Profile) -> None:
        user = self._require_user()
        self.store.write_profile(user, profile)
        self.profile = copy.deepcopy(profile)

    def add_document(self, document: CVDocument) -> None:
        user = self._require_user()
        self.documents = self.store.add_document(user, document)

    def update_document(self, document: CVDocument) -> bool:
        user = self._require_user()
        if not self.store.replace_document(user, document):
            return False
        self.documents = self.store.read_documents(user)
        return True

    def find_document(self, document_id: str) -> Optional[CVDocument]:
        for document in self.documents:
            if document.id == document_id:
                return document
        return None
