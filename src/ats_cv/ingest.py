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
Reads an existing CV from disk so it can be analyzed into a profile.
"""

import logging
from docx import Document
from pypdf import PdfReader

logger = logging.getLogger(__name__)


def read_docx(file_path: str) -> str:
    """
    Extracts text from a DOCX file.
    """
    try:
        doc = Document(file_path)
        return '\n'.join(para.text for para in doc.paragraphs)
    except Exception as e:
        logger.error(f"Error reading {file_path}: {e}")
        return ""


def read_pdf(file_path: str) -> str:
    """
    Extracts text from every page of a PDF file.
    """
    try:
        reader = PdfReader(file_path)
        pages = [page.extract_text() or "" for page in reader.pages]
        return '\n'.join(pages).strip()
    except Exception as e:
        logger.error(f"Error reading PDF {file_path}: {e}")
        return ""


def read_text(file_path: str) -> str:
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading {file_path}: {e}")
        return ""


def read_cv_file(file_path: str) -> str:
    """
    Returns the text of a CV file (.docx, .pdf, or plain text).
    Unreadable files yield an empty string.
    """
    lower = file_path.lower()
    if lower.endswith(".docx"):
        text = read_docx(file_path)
    elif lower.endswith(".pdf"):
        text = read_pdf(file_path)
    else:
        text = read_text(file_path)
    logger.info(f"Read {len(text)} characters from {file_path}")
    return text
