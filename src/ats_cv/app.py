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
Application shell: wires the session, the AI operations, the router and
the exporters together. Every user action in the console maps to one
method here.
"""

import logging
from pathlib import Path
from typing import Optional

from ats_cv import export
from ats_cv.config import AppConfig
from ats_cv.editing import ProfileEdit, apply_edit
from ats_cv.errors import NoDocumentSelectedError, NotSignedInError
from ats_cv.generation import CVWriter
from ats_cv.ingest import read_cv_file
from ats_cv.llm_client import LLMClient
from ats_cv.models import CVDocument, Profile
from ats_cv.navigation import Navigator, Screen
from ats_cv.scoring import ats_score
from ats_cv.session import Session
from ats_cv.storage import LocalStore

logger = logging.getLogger(__name__)


class CVStudio:
    def __init__(self, session: Session, writer: CVWriter, export_dir: Path):
        self.session = session
        self.writer = writer
        self.export_dir = Path(export_dir)
        self.nav = Navigator(lambda: self.session.user is not None)

    @classmethod
    def from_config(cls, config: AppConfig) -> "CVStudio":
        store = LocalStore.open(config.store_path)
        writer = CVWriter(LLMClient(config))
        return cls(Session(store), writer, config.export_dir)

    @property
    def screen(self) -> Screen:
        return self.nav.screen

    def _is_stale(self, epoch: int) -> bool:
        if epoch != self.session.epoch:
            logger.warning("Session changed while the AI request was running; discarding the result.")
            return True
        return False

    # --- Account ---

    def sign_up(self, email: str, password: str) -> bool:
        ok = self.session.sign_up(email, password)
        if ok:
            self.nav.reset()
        return ok

    def login(self, email: str, password: str) -> bool:
        ok = self.session.login(email, password)
        if ok:
            self.nav.reset()
        return ok

    def logout(self) -> None:
        self.session.logout()
        self.nav.reset()

    def greeting(self) -> str:
        if not self.session.user:
            return "Welcome"
        name = ""
        if self.session.profile:
            name = self.session.profile.personal_info.name.strip()
        username = name.split(" ")[0] if name else self.session.user.split("@")[0]
        return f"Welcome, {username}"

    # --- Profile ---

    def current_profile(self) -> Profile:
        """The saved profile, or a blank one to start editing from."""
        return self.session.profile or Profile()

    def analyze_cv(self, cv_text: str) -> Optional[Profile]:
        """
        Extracts a profile from pasted CV text. The result is not saved;
        the caller reviews it and passes it to `save_profile`.
        Returns None if the session changed while waiting.
        """
        epoch = self.session.epoch
        profile = self.writer.extract_profile(cv_text)
        if self._is_stale(epoch):
            return None
        return profile

    def analyze_cv_file(self, path: str) -> Optional[Profile]:
        text = read_cv_file(path)
        if not text.strip():
            raise ValueError(f"Could not extract any text from {path}")
        return self.analyze_cv(text)

    def save_profile(self, profile: Profile) -> None:
        self.session.save_profile(profile)
        logger.info("Profile saved.")

    def edit_profile(self, command: ProfileEdit) -> Profile:
        """Applies one edit to the saved profile and saves the result."""
        profile = apply_edit(self.current_profile(), command)
        self.save_profile(profile)
        return profile

    # --- CVs ---

    def generate_cv(self, job_description: str) -> Optional[CVDocument]:
        """
        Drafts a CV for `job_description`, stores it first in the list and
        opens it in the preview.
        """
        if not self.session.user:
            raise NotSignedInError("Please log in first.")
        profile = self.current_profile()
        if not profile.is_configured:
            logger.warning("Profile has no name or summary; the CV will be mostly generic.")

        epoch = self.session.epoch
        markdown = self.writer.generate_document(profile, job_description)
        if self._is_stale(epoch):
            return None

        document = CVDocument.create(
            job_description=job_description,
            markdown=markdown,
            ats_score=ats_score(markdown, job_description),
        )
        self.session.add_document(document)
        logger.info(f"CV {document.id} generated (ATS score {document.ats_score})")
        self.nav.navigate(Screen.CV_PREVIEW, document)
        return document

    def open_cv(self, document_id: str) -> CVDocument:
        document = self.session.find_document(document_id)
        if document is None:
            raise KeyError(document_id)
        self.nav.navigate(Screen.CV_PREVIEW, document)
        return document

    def _selected(self) -> CVDocument:
        if self.nav.selected is None:
            raise NoDocumentSelectedError("No CV selected.")
        return self.nav.selected

    def revise_cv(self, change_request: str) -> Optional[CVDocument]:
        """Rewrites the selected CV; id and job description are kept."""
        current = self._selected()

        epoch = self.session.epoch
        markdown = self.writer.revise_document(
            current.markdown, change_request, self.current_profile(), current.job_description
        )
        if self._is_stale(epoch):
            return None

        updated = current.revised(markdown)
        if not self.session.update_document(updated):
            raise NoDocumentSelectedError(f"CV {current.id} is no longer stored; the revision was not saved.")
        self.nav.selected = updated
        logger.info(f"CV {updated.id} revised")
        return updated

    # --- Export & payment ---

    def export_markdown(self) -> Path:
        return export.write_markdown(self._selected(), self.export_dir)

    def export_docx(self) -> Path:
        """Pro users get the DOCX; everyone else is sent to the payment screen."""
        document = self._selected()
        if not self.session.is_pro:
            self.nav.navigate(Screen.PAYMENT)
        return export.write_docx(document, self.export_dir, self.session.is_pro)

    def complete_checkout(self) -> bool:
        """Called when a checkout reports success: unlock pro and go home."""
        granted = self.session.grant_entitlement()
        self.nav.navigate(Screen.HOME)
        return granted
