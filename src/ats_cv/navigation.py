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
Screen router. Holds the current screen and the selected CV, nothing else.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from ats_cv.models import CVDocument

logger = logging.getLogger(__name__)


class Screen(Enum):
    AUTH = "auth"
    HOME = "home"
    SETTINGS = "settings"
    JOB_INPUT = "job_input"
    CV_PREVIEW = "cv_preview"
    CV_LIST = "cv_list"
    PAYMENT = "payment"


class Navigator:
    """
    `is_signed_in` is consulted on every read so the auth gate always
    reflects the live session.
    """
    def __init__(self, is_signed_in: Callable[[], bool]):
        self._is_signed_in = is_signed_in
        self._screen = Screen.HOME
        self.selected: Optional[CVDocument] = None

    @property
    def screen(self) -> Screen:
        """The screen to show; AUTH whenever nobody is signed in."""
        if not self._is_signed_in():
            return Screen.AUTH
        if self._screen is Screen.CV_PREVIEW and self.selected is None:
            return Screen.HOME
        return self._screen

    def navigate(self, screen: Screen, document: Optional[CVDocument] = None) -> Screen:
        if screen is Screen.AUTH:
            raise ValueError("The auth screen is shown automatically when signed out")
        if document is not None:
            self.selected = document
        if screen is Screen.CV_PREVIEW and self.selected is None:
            logger.debug("No CV selected; falling back to home")
            screen = Screen.HOME
        self._screen = screen
        return self.screen

    def reset(self) -> None:
        """Back to home with nothing selected (after login or logout)."""
        self._screen = Screen.HOME
        self.selected = None
