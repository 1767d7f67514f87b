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
from unittest.mock import patch
import os
from pathlib import Path

from ats_cv import config


class TestResolveCaBundle(unittest.TestCase):
    """Test CA bundle resolution priority."""

    def test_default_is_system_store(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(config.resolve_ca_bundle())

    def test_ssl_cert_file(self):
        with patch.dict(os.environ, {"SSL_CERT_FILE": "/path/ssl.pem"}, clear=True):
            self.assertEqual(config.resolve_ca_bundle(), "/path/ssl.pem")

    def test_requests_ca_bundle_beats_other_env(self):
        with patch.dict(os.environ, {
            "SSL_CERT_FILE": "/path/ssl.pem",
            "CURL_CA_BUNDLE": "/path/curl.pem",
            "REQUESTS_CA_BUNDLE": "/path/requests.pem",
        }, clear=True):
            self.assertEqual(config.resolve_ca_bundle(), "/path/requests.pem")

    def test_override_beats_everything(self):
        with patch.dict(os.environ, {"REQUESTS_CA_BUNDLE": "/path/requests.pem"}, clear=True):
            self.assertEqual(config.resolve_ca_bundle("/path/cli.pem"), "/path/cli.pem")


class TestConfigureSslEnv(unittest.TestCase):
    def test_sets_ssl_cert_file_for_custom_bundle(self):
        with patch.dict(os.environ, {}, clear=True):
            config.configure_ssl_env("/my/custom.pem")
            self.assertEqual(os.environ.get("SSL_CERT_FILE"), "/my/custom.pem")

    def test_no_op_for_system_store(self):
        with patch.dict(os.environ, {}, clear=True):
            config.configure_ssl_env(None)
            self.assertNotIn("SSL_CERT_FILE", os.environ)


class TestAppConfig(unittest.TestCase):
    def test_gemini_key(self):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "g-key"}, clear=True):
            cfg = config.AppConfig.from_env()
        self.assertEqual(cfg.api_key, "g-key")
        self.assertEqual(cfg.provider, "gemini")
        self.assertEqual(cfg.model, "gemini-2.5-pro")
        self.assertEqual(cfg.store_path, Path("user_content") / "store.json")

    def test_openai_key_selects_openai(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-abc"}, clear=True):
            cfg = config.AppConfig.from_env()
        self.assertEqual(cfg.provider, "openai")
        self.assertEqual(cfg.model, config.DEFAULT_MODELS["openai"])

    def test_missing_key(self):
        with patch.dict(os.environ, {}, clear=True):
            cfg = config.AppConfig.from_env()
        self.assertIsNone(cfg.api_key)

    def test_overrides(self):
        with patch.dict(os.environ, {
            "API_KEY": "k", "ATS_CV_MODEL": "gemini-custom", "ATS_CV_HOME": "/data/cv",
        }, clear=True):
            cfg = config.AppConfig.from_env(ca_bundle="/my/ca.pem")
        self.assertEqual(cfg.api_key, "k")
        self.assertEqual(cfg.model, "gemini-custom")
        self.assertEqual(cfg.log_dir, Path("/data/cv/logs"))
        self.assertEqual(cfg.ca_bundle, "/my/ca.pem")

    def test_unknown_provider_falls_back(self):
        with patch.dict(os.environ, {"API_KEY": "k", "ATS_CV_PROVIDER": "llama"}, clear=True):
            cfg = config.AppConfig.from_env()
        self.assertEqual(cfg.provider, "gemini")


if __name__ == '__main__':
    unittest.main()
