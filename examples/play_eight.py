"""Play the Eight module in the terminal.

Type ``submit 123``, ``remove 45``, ``skip`` or ``quit``. The bomb figures
are fixed except for the timer, which loses a minute per command so the
time-dependent digit keeps moving. Pass ``--debug`` to print the engine's
diagnostic log, which reveals the true digits.
"""

import logging
import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))

import commands
import eight


def main() -> None:
    if "--debug" in sys.argv[1:]:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s")

    bomb = eight.StaticBombInfo(
        remaining_seconds=1800, total_modules=5, indicators=1,
        batteries=2, serial_digit_sum=14, ports=3,
    )
    host = eight.RecordingHost()
    engine = eight.PuzzleEngine(bomb, host)
    engine.activate()

    print(commands.HELP_MESSAGE)
    while not engine.solved:
        print()
        print(engine)
        print(f"Strikes: {host.strikes}  Minutes left: {bomb.remaining_seconds // 60}")
        try:
            text = input("> ")
        except EOFError:
            break
        if text.strip().lower() == "quit":
            break
        command = commands.parse_command(text, engine)
        if command is None:
            print("Unrecognised command")
            continue
        outcome = commands.apply_command(engine, command)
        if outcome is not None:
            print(outcome.name)
        bomb.tick(60)
        engine.poll()

    print()
    print(engine)


if __name__ == "__main__":
    main()
