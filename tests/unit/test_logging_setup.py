import io
import json
import logging
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from svgjpeg_core.logging_setup import JsonFormatter, configure_logging, install_crash_hooks, reset_logging


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self):
        reset_logging()

    def test_plain_handler_writes_level_and_message(self):
        stream = io.StringIO()
        logger = configure_logging(level="INFO", stream=stream)
        logger.info("hello", extra={"event": "greeting"})
        self.assertEqual(stream.getvalue().strip(), "INFO hello")

    def test_configure_is_idempotent(self):
        stream = io.StringIO()
        logger = configure_logging(stream=stream)
        again = configure_logging(level="DEBUG", stream=io.StringIO())
        self.assertIs(logger, again)
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_json_formatter_payload(self):
        stream = io.StringIO()
        logger = configure_logging(level="INFO", json_format=True, stream=stream)
        logger.warning("careful", extra={"event": "fonts_dir_missing"})
        payload = json.loads(stream.getvalue().strip())
        self.assertEqual(payload["level"], "WARNING")
        self.assertEqual(payload["logger"], "svgjpeg")
        self.assertEqual(payload["msg"], "careful")
        self.assertEqual(payload["event"], "fonts_dir_missing")
        self.assertIn("ts_utc", payload)

    def test_json_formatter_includes_exception(self):
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.getLogger("svgjpeg").makeRecord(
                "svgjpeg", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        payload = json.loads(JsonFormatter().format(record))
        self.assertIn("ValueError: bad", payload["exc"])

    def test_crash_hook_logs_uncaught(self):
        saved = sys.excepthook
        stream = io.StringIO()
        try:
            configure_logging(level="INFO", json_format=True, stream=stream)
            install_crash_hooks()
            try:
                raise RuntimeError("kaboom")
            except RuntimeError:
                sys.excepthook(*sys.exc_info())
        finally:
            sys.excepthook = saved
        payload = json.loads(stream.getvalue().strip().splitlines()[-1])
        self.assertEqual(payload["level"], "CRITICAL")
        self.assertEqual(payload["event"], "uncaught_exception")
        self.assertIn("crash_id", payload)


if __name__ == "__main__":
    unittest.main()
