import json
import os
import tempfile
import unittest
from unittest import mock

# Ensure local imports work when running this file directly.
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
if THIS_DIR not in os.sys.path:
    os.sys.path.insert(0, THIS_DIR)

import config as config_module
from config import DEFAULT_CONFIG, validate_config


VALID_CONFIG = {
    "soundcloud_client_id": "abc",
    "soundcloud_client_secret": "xyz",
    "soundcloud_redirect_uri": "http://127.0.0.1:8888/callback",
    "log_level": "INFO",
    "log_file": "",
}


class TestValidateConfig(unittest.TestCase):
    def test_valid_config(self):
        is_valid, errors = validate_config(VALID_CONFIG)
        self.assertTrue(is_valid, errors)
        self.assertEqual(errors, [])

    def test_defaults_are_incomplete_until_credentials_are_set(self):
        is_valid, errors = validate_config(DEFAULT_CONFIG)
        self.assertFalse(is_valid)
        self.assertIn("Field 'soundcloud_client_id' must not be empty", errors)
        self.assertIn("Field 'soundcloud_client_secret' must not be empty", errors)

    def test_missing_required_field(self):
        cfg = dict(VALID_CONFIG)
        del cfg["soundcloud_redirect_uri"]
        is_valid, errors = validate_config(cfg)
        self.assertFalse(is_valid)
        self.assertEqual(errors, ["Missing required field: soundcloud_redirect_uri"])

    def test_wrong_type_and_bad_choice(self):
        cfg = dict(VALID_CONFIG, soundcloud_client_id=123, log_level="LOUD")
        is_valid, errors = validate_config(cfg)
        self.assertFalse(is_valid)
        self.assertEqual(len(errors), 2)
        self.assertIn("Field 'soundcloud_client_id' must be str, got int", errors)

    def test_redirect_uri_must_be_http(self):
        cfg = dict(VALID_CONFIG, soundcloud_redirect_uri="ftp://example.com/cb")
        is_valid, errors = validate_config(cfg)
        self.assertFalse(is_valid)
        self.assertIn("soundcloud_redirect_uri", errors[0])


class TestConfigFile(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._td.name, "config.json")
        self._patch = mock.patch.object(config_module, "CONFIG_PATH", self.path)
        self._patch.start()

    def tearDown(self):
        self._patch.stop()
        self._td.cleanup()

    def test_load_missing_file_raises(self):
        with self.assertRaises(FileNotFoundError):
            config_module.load_config()

    def test_load_applies_defaults(self):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"soundcloud_client_id": "abc"}, f)

        cfg = config_module.load_config()
        self.assertEqual(cfg["soundcloud_client_id"], "abc")
        self.assertEqual(cfg["soundcloud_redirect_uri"], DEFAULT_CONFIG["soundcloud_redirect_uri"])
        self.assertEqual(cfg["log_level"], "INFO")

    def test_update_config_persists_and_masks_secret(self):
        config_module.save_config(dict(VALID_CONFIG))

        ok, message = config_module.update_config("soundcloud_client_secret", "new-secret")
        self.assertTrue(ok, message)
        self.assertNotIn("new-secret", message)
        self.assertEqual(config_module.load_config()["soundcloud_client_secret"], "new-secret")

    def test_update_config_rejects_unknown_and_invalid(self):
        config_module.save_config(dict(VALID_CONFIG))

        ok, message = config_module.update_config("nope", 1)
        self.assertFalse(ok)
        self.assertIn("Unknown config key", message)

        ok, message = config_module.update_config("log_level", "VERBOSE")
        self.assertFalse(ok)
        self.assertEqual(config_module.load_config()["log_level"], "INFO")

    def test_update_config_allows_partial_setup(self):
        config_module.save_config(DEFAULT_CONFIG.copy())

        ok, message = config_module.update_config("soundcloud_client_id", "abc")
        self.assertTrue(ok, message)

    def test_reset_and_get_value(self):
        config_module.save_config(dict(VALID_CONFIG))
        self.assertEqual(config_module.get_config_value("soundcloud_client_id"), "abc")

        ok, _ = config_module.reset_to_defaults()
        self.assertTrue(ok)
        self.assertEqual(config_module.get_config_value("soundcloud_client_id"), "")
        self.assertEqual(config_module.get_config_value("missing", "fallback"), "fallback")


if __name__ == "__main__":
    unittest.main(verbosity=2)
