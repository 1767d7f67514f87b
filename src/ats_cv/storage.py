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
Local key-value persistence for accounts, session, profiles, CVs and pro status.

Every value is replaced wholesale on write; there is no partial update,
versioning or migration. Missing keys read as defaults.
"""

import json
import os
import logging
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from ats_cv.errors import StoreCorruptedError
from ats_cv.models import CVDocument, Profile

logger = logging.getLogger(__name__)

KEY_PREFIX = "ats_cv_generator_pro_"
USERS_KEY = KEY_PREFIX + "users"
CURRENT_USER_KEY = KEY_PREFIX + "current_user"
PROFILE_KEY_PREFIX = KEY_PREFIX + "profile_"
CVS_KEY_PREFIX = KEY_PREFIX + "cvs_"
PRO_KEY_PREFIX = KEY_PREFIX + "status_"

CREDENTIAL_PLACEHOLDER = "dummy_hash"


class MemoryBackend:
    """Non-durable backend, used by tests."""
    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data = dict(data or {})

    def get(self, key: str) -> Any:
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileBackend:
    """
    Stores every key in a single JSON file.
    Each write goes to a temporary file that is then renamed over the
    original, so readers see either the old or the new state.
    """
    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreCorruptedError(f"Store file {self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise StoreCorruptedError(f"Store file {self.path} does not hold an object")
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get(self, key: str) -> Any:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


class LocalStore:
    """
    Owns the persisted state of every entity.
    Expected failures (duplicate account, unknown account, missing data)
    are reported through return values, not exceptions.
    """
    def __init__(self, backend):
        self.backend = backend

    @classmethod
    def open(cls, path: Path) -> "LocalStore":
        logger.debug(f"Opening store at {path}")
        return cls(JsonFileBackend(path))

    # --- Accounts & session ---

    def _users(self) -> Dict[str, str]:
        users = self.backend.get(USERS_KEY)
        return users if isinstance(users, dict) else {}

    def has_account(self, email: str) -> bool:
        return email in self._users()

    def create_account(self, email: str, credential: str) -> bool:
        """
        Registers `email` and signs it in. Returns False if it already exists,
        leaving the stored account and the session untouched.
        """
        users = self._users()
        if email in users:
            logger.info(f"Sign-up rejected: account {email} already exists")
            return False
        # The credential itself is never stored or checked; see DESIGN.md.
        users[email] = CREDENTIAL_PLACEHOLDER
        self.backend.set(USERS_KEY, users)
        self.backend.set(CURRENT_USER_KEY, email)
        logger.info(f"Created account {email}")
        return True

    def authenticate(self, email: str, credential: str) -> bool:
        """
        Signs in `email` if the account exists.
        The credential is NOT verified: any password opens an existing account.
        """
        if email not in self._users():
            logger.info(f"Login rejected: no account for {email}")
            return False
        logger.warning("Password is not verified; any credential opens an existing account.")
        self.backend.set(CURRENT_USER_KEY, email)
        return True

    def current_user(self) -> Optional[str]:
        user = self.backend.get(CURRENT_USER_KEY)
        return user if isinstance(user, str) and user else None

    def clear_session(self) -> None:
        self.backend.delete(CURRENT_USER_KEY)

    # --- Profile ---

    def read_profile(self, email: str) -> Optional[Profile]:
        raw = self.backend.get(PROFILE_KEY_PREFIX + email)
        return Profile.from_dict(raw) if isinstance(raw, dict) else None

    def write_profile(self, email: str, profile: Profile) -> None:
        self.backend.set(PROFILE_KEY_PREFIX + email, profile.to_dict())

    # --- CVs ---

    def read_documents(self, email: str) -> List[CVDocument]:
        raw = self.backend.get(CVS_KEY_PREFIX + email)
        if not isinstance(raw, list):
            return []
        return [CVDocument.from_dict(d) for d in raw]

    def write_documents(self, email: str, documents: List[CVDocument]) -> None:
        self.backend.set(CVS_KEY_PREFIX + email, [d.to_dict() for d in documents])

    def add_document(self, email: str, document: CVDocument) -> List[CVDocument]:
        """Stores `document` at the front of the list (most recent first)."""
        documents = [document] + self.read_documents(email)
        self.write_documents(email, documents)
        return documents

    def replace_document(self, email: str, document: CVDocument) -> bool:
        """Swaps in `document` for the stored entry with the same id."""
        documents = self.read_documents(email)
        for i, existing in enumerate(documents):
            if existing.id == document.id:
                documents[i] = document
                self.write_documents(email, documents)
                return True
        logger.warning(f"No stored CV with id {document.id} for {email}")
        return False

    # --- Pro status ---

    def read_entitlement(self, email: str) -> bool:
        if not email:
            return False
        return self.backend.get(PRO_KEY_PREFIX + email) == "true"

    def write_entitlement(self, email: str) -> bool:
        """Grants pro status. There is no way to revoke it."""
        if not email:
            return False
        self.backend.set(PRO_KEY_PREFIX + email, "true")
        return True
