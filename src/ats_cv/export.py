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
Writes a generated CV to disk: the raw markdown for everyone, a styled
MS Word (DOCX) file for pro users. Exports never touch stored CVs.
"""

import re
import logging
from pathlib import Path

from docx import Document
from docx.enum.text import WD_PARAGRAPH_ALIGNMENT
from docx.shared import Pt

from ats_cv.errors import EntitlementRequiredError, ExportError
from ats_cv.models import CVDocument

logger = logging.getLogger(__name__)

_INLINE = re.compile(r"(\*\*[^*]+\*\*|\*[^*]+\*)")
_TAG = re.compile(r"<[^>]+>")
_BULLET = re.compile(r"^\s*[-*+]\s+")


def _file_stem(document: CVDocument) -> str:
    safe_id = re.sub(r"[^\w-]", "_", document.id)
    return f"cv_{safe_id}"


def write_markdown(document: CVDocument, directory: Path) -> Path:
    """Saves the raw CV body as `cv_<id>.md`."""
    directory = Path(directory)
    target = directory / f"{_file_stem(document)}.md"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        target.write_text(document.markdown, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to write {target}: {e}") from e
    logger.info(f"Markdown saved: {target}")
    return target


class DocxRenderer:
    """
    Renders the markdown-like CV body into a DOCX document.
    Understands the conventions the generation prompt asks for: `#` name,
    `##` sections, `###` role lines, bold/italic runs, bullets and the
    HTML contact line.
    """
    def __init__(self):
        self.document = Document()
        self.styles = {
            'title': 'Title',
            'h1': 'Heading 1',
            'h2': 'Heading 2',
            'body': 'Normal',
            'bullet': 'List Bullet',
        }
        self._setup_styles()

    def _setup_styles(self):
        style = self.document.styles['Normal']
        style.font.name = 'Calibri'
        style.font.size = Pt(11)

    def _add_runs(self, paragraph, text: str):
        for part in _INLINE.split(text):
            if not part:
                continue
            if part.startswith("**") and part.endswith("**"):
                paragraph.add_run(part[2:-2]).bold = True
            elif part.startswith("*") and part.endswith("*") and len(part) > 1:
                paragraph.add_run(part[1:-1]).italic = True
            else:
                paragraph.add_run(part)

    def render(self, markdown: str):
        for raw_line in markdown.splitlines():
            line = raw_line.rstrip()
            if not line.strip():
                continue

            if line.startswith("### "):
                p = self.document.add_paragraph(style=self.styles['h2'])
                self._add_runs(p, line[4:].strip())
                p.paragraph_format.keep_with_next = True
            elif line.startswith("## "):
                p = self.document.add_paragraph(line[3:].strip().upper(), style=self.styles['h1'])
                p.paragraph_format.keep_with_next = True
            elif line.startswith("# "):
                p = self.document.add_paragraph(line[2:].strip(), style=self.styles['title'])
            elif line.lstrip().startswith("<"):
                # Contact line arrives as an HTML paragraph
                p = self.document.add_paragraph(_TAG.sub("", line).strip(), style=self.styles['body'])
                p.alignment = WD_PARAGRAPH_ALIGNMENT.CENTER
            elif _BULLET.match(line):
                p = self.document.add_paragraph(style=self.styles['bullet'])
                self._add_runs(p, _BULLET.sub("", line, count=1))
                p.paragraph_format.widow_control = True
            else:
                p = self.document.add_paragraph(style=self.styles['body'])
                self._add_runs(p, line.strip())
        return self.document


def write_docx(document: CVDocument, directory: Path, entitled: bool) -> Path:
    """
    Saves a styled `cv_<id>.docx`. Pro only.

    Raises:
        EntitlementRequiredError: the user has not unlocked pro features.
        ExportError: rendering or saving failed.
    """
    if not entitled:
        raise EntitlementRequiredError("DOCX export is a Pro feature. Upgrade to unlock it.")

    directory = Path(directory)
    target = directory / f"{_file_stem(document)}.docx"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        DocxRenderer().render(document.markdown).save(str(target))
    except Exception as e:
        logger.error(f"Failed to generate DOCX: {e}")
        raise ExportError(f"Failed to generate DOCX: {e}") from e
    logger.info(f"DOCX saved: {target}")
    return target
