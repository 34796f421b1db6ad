"""Unit tests for the commands module."""

import unittest

import commands
import eight


def _make_engine() -> tuple[eight.PuzzleEngine, eight.RecordingHost]:
    host = eight.RecordingHost()
    engine = eight.PuzzleEngine(
        eight.StaticBombInfo(), host, seed=7,
        sink=eight.RecordingEventSink(),
    )
    engine.activate()
    return engine, host


class TestParsePress(unittest.TestCase):
    """Test the bare button commands."""

    def setUp(self) -> None:
        self.engine, _ = _make_engine()

    def test_skip(self) -> None:
        self.assertEqual(
            commands.parse_command("skip", self.engine),
            commands.PlayerCommand(press=True),
        )

    def test_submit_without_digits(self) -> None:
        self.assertEqual(
            commands.parse_command("submit", self.engine),
            commands.PlayerCommand(press=True),
        )

    def test_case_and_whitespace(self) -> None:
        self.assertEqual(
            commands.parse_command("  SkIp \n", self.engine),
            commands.PlayerCommand(press=True),
        )


class TestParseSubmit(unittest.TestCase):
    """Test ``submit <digits>``."""

    def setUp(self) -> None:
        self.engine, _ = _make_engine()

    def test_keeps_listed_digits(self) -> None:
        command = commands.parse_command("submit 123", self.engine)
        self.assertEqual(command.removals, (3, 4, 5, 6, 7))
        self.assertTrue(command.press)

    def test_unordered_and_repeated_digits(self) -> None:
        command = commands.parse_command("submit 8818", self.engine)
        self.assertEqual(command.removals, (1, 2, 3, 4, 5, 6))

    def test_multiple_spaces(self) -> None:
        command = commands.parse_command("Submit   57", self.engine)
        self.assertEqual(command.removals, (0, 1, 2, 3, 5, 7))

    def test_rejects_disabled_digit(self) -> None:
        self.engine.slots[1].disabled = True
        self.assertIsNone(commands.parse_command("submit 12", self.engine))

    def test_rejects_removed_digit(self) -> None:
        self.engine.remove(2)
        self.assertIsNone(commands.parse_command("submit 34", self.engine))

    def test_includes_disabled_in_removals(self) -> None:
        self.engine.slots[7].disabled = True
        command = commands.parse_command("submit 1", self.engine)
        self.assertIn(7, command.removals)


class TestParseRemove(unittest.TestCase):
    """Test ``remove <digits>``."""

    def setUp(self) -> None:
        self.engine, _ = _make_engine()

    def test_remove(self) -> None:
        command = commands.parse_command("remove 531", self.engine)
        self.assertEqual(command.removals, (4, 2, 0))
        self.assertFalse(command.press)

    def test_filters_unavailable(self) -> None:
        self.engine.remove(2)
        self.engine.slots[4].disabled = True
        command = commands.parse_command("remove 135", self.engine)
        self.assertEqual(command.removals, (0,))

    def test_all_filtered(self) -> None:
        self.engine.remove(0)
        command = commands.parse_command("remove 1", self.engine)
        self.assertEqual(command, commands.PlayerCommand())


class TestParseInvalid(unittest.TestCase):
    """Test text that is not a command."""

    def setUp(self) -> None:
        self.engine, _ = _make_engine()

    def test_unknown_text(self) -> None:
        for text in ("", "press", "remove", "remove 9", "submit 19",
                     "submit 1 2", "remove1", "cut 12"):
            with self.subTest(text=text):
                self.assertIsNone(commands.parse_command(text, self.engine))


class TestApplyCommand(unittest.TestCase):
    """Test applying decoded commands to an engine."""

    def test_remove_does_not_press(self) -> None:
        engine, _ = _make_engine()
        command = commands.parse_command("remove 12", engine)
        self.assertIsNone(commands.apply_command(engine, command))
        self.assertTrue(engine.slots[0].removed)
        self.assertTrue(engine.slots[1].removed)

    def test_submit_correct_digits(self) -> None:
        engine, host = _make_engine()
        for i, value in enumerate([1, 0, 3, 4, 1, 1, 1, 1]):
            engine.slots[i].true_value = value
        self.assertIsNone(engine.possible_solution())
        command = commands.parse_command("submit 124", engine)
        outcome = commands.apply_command(engine, command)
        self.assertEqual(outcome, eight.SubmitOutcome.DISABLED)
        self.assertEqual(host.strikes, 0)

    def test_submit_wrong_digits(self) -> None:
        engine, host = _make_engine()
        for slot in engine.slots:
            slot.true_value = 1
        command = commands.parse_command("submit 12", engine)
        outcome = commands.apply_command(engine, command)
        self.assertEqual(outcome, eight.SubmitOutcome.STRIKE)
        self.assertEqual(host.strikes, 1)

    def test_help_message(self) -> None:
        self.assertIn("submit 123", commands.HELP_MESSAGE)
        self.assertIn("remove 123", commands.HELP_MESSAGE)
        self.assertIn("skip", commands.HELP_MESSAGE)


if __name__ == "__main__":
    unittest.main()
