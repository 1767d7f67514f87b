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
Exception types shared across the ATS CV Generator.
"""

from typing import Optional


class ATSCVError(Exception):
    """Base class for all application errors."""


class ConfigurationError(ATSCVError):
    """Raised when the AI service cannot be used at all (e.g. no API key). Never retried."""


class TransientAIError(ATSCVError):
    """A single failed attempt: empty response, malformed JSON or transport failure."""


class ServiceUnavailableError(ATSCVError):
    """Raised once every retry attempt against the AI service has failed."""

    def __init__(self, attempts: int, last_error: Optional[BaseException] = None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"API request failed after {attempts} retries. "
            "The AI service may be temporarily unavailable."
        )


class GenerationError(ATSCVError):
    """Wraps a gateway failure with the name of the operation that hit it."""

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Failed to {operation}: {cause}")

    @property
    def is_configuration_error(self) -> bool:
        return isinstance(self.cause, ConfigurationError)


class NotSignedInError(ATSCVError):
    """An operation needs a signed-in account."""


class NoDocumentSelectedError(ATSCVError):
    """A document operation was requested with nothing selected."""


class EntitlementRequiredError(ATSCVError):
    """A pro-only feature was requested without the pro entitlement."""


class ExportError(ATSCVError):
    """Writing an export file failed. Stored documents are unaffected."""


class StoreCorruptedError(ATSCVError):
    """The persisted store could not be decoded."""
