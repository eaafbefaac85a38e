import io
import sys
from pathlib import Path
import unittest
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import delve.__main__ as runtime_main


class MainEntryErrorHandlingTests(unittest.TestCase):
    def test_main_handles_runtime_exceptions_without_traceback(self) -> None:
        output = io.StringIO()
        with mock.patch.object(runtime_main, "load_dotenv"), mock.patch.object(
            runtime_main, "create_game_session", side_effect=RuntimeError("disk unavailable")
        ), mock.patch("sys.stdout", output):
            runtime_main.main()

        text = output.getvalue()
        self.assertIn("An unexpected error occurred", text)
        self.assertIn("disk unavailable", text)
        self.assertIn("Help:", text)
        self.assertNotIn("Traceback", text)

    def test_main_handles_keyboard_interrupt(self) -> None:
        output = io.StringIO()
        with mock.patch.object(runtime_main, "load_dotenv"), mock.patch.object(
            runtime_main, "create_game_session", side_effect=KeyboardInterrupt
        ), mock.patch("sys.stdout", output):
            runtime_main.main()

        self.assertIn("Session ended", output.getvalue())

    def test_main_runs_the_game_loop(self) -> None:
        session = object()
        with mock.patch.object(runtime_main, "load_dotenv"), mock.patch.object(
            runtime_main, "create_game_session", return_value=session
        ), mock.patch.object(runtime_main, "run_game_loop") as loop:
            runtime_main.main()

        loop.assert_called_once_with(session)


if __name__ == "__main__":
    unittest.main()
