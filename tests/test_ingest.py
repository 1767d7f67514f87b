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
from unittest.mock import patch, MagicMock
import os
import shutil
import tempfile

from docx import Document

from ats_cv import ingest


class TestIngest(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_read_docx(self):
        path = os.path.join(self.test_dir, "cv.docx")
        doc = Document()
        doc.add_paragraph("Jane Doe")
        doc.add_paragraph("Senior Engineer")
        doc.save(path)

        self.assertEqual(ingest.read_cv_file(path), "Jane Doe\nSenior Engineer")

    def test_missing_docx_returns_empty(self):
        content = ingest.read_docx(os.path.join(self.test_dir, "nonexistent.docx"))
        self.assertEqual(content, "")

    @patch('ats_cv.ingest.PdfReader')
    def test_read_pdf(self, mock_reader):
        page_one, page_two = MagicMock(), MagicMock()
        page_one.extract_text.return_value = "Page one"
        page_two.extract_text.return_value = None
        mock_reader.return_value.pages = [page_one, page_two]

        self.assertEqual(ingest.read_cv_file("/tmp/CV.PDF"), "Page one")

    def test_read_plain_text(self):
        path = os.path.join(self.test_dir, "cv.md")
        with open(path, "w", encoding="utf-8") as f:
            f.write("# Jane Doe\nEngineer")
        self.assertEqual(ingest.read_cv_file(path), "# Jane Doe\nEngineer")

    def test_missing_text_file_returns_empty(self):
        self.assertEqual(ingest.read_cv_file(os.path.join(self.test_dir, "missing.txt")), "")


if __name__ == '__main__':
    unittest.main()
