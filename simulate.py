"""Simulation script for the Eight module.

Plays several seeded puzzles against a scripted bomb. The bot reads the
rendered digits, reverses each slot's addendum to recover the true digits,
then either keeps a short subsequence divisible by 8 or skips. Bomb time
runs down and other modules get solved between turns, so polling
re-renders the digits that depend on those figures.
"""

import itertools

import commands
import eight

GAMES = 5
MAX_TURNS = 60
SECONDS_PER_TURN = 25


# ── Bot ─────────────────────────────────────────────────────

def _recovered_values(engine: eight.PuzzleEngine) -> dict[int, int]:
    """True digit of every slot in play, recovered from the display."""
    snapshot = engine.snapshot()
    return {
        i: eight.recover_true_value(
            engine.slots[i].rendered, engine.addendum(i, snapshot),
        )
        for i in engine.not_disabled_indices
    }


def _choose_digits(values: dict[int, int]) -> list[int] | None:
    """Slots to keep for a multiple of 8, or None to skip.

    Any multiple of 8 ends in a three-digit multiple of 8, so only
    subsequences of up to three digits need checking.
    """
    indices = sorted(values)
    for length in (1, 2, 3):
        for kept in itertools.combinations(indices, length):
            digits = [values[i] for i in kept]
            result = eight.validate_submission(digits)
            if result == eight.ValidationResult.CORRECT:
                return list(kept)
    return None


def _bot_command(engine: eight.PuzzleEngine) -> str:
    kept = _choose_digits(_recovered_values(engine))
    if kept is None:
        return "skip"
    return "submit " + "".join(str(i + 1) for i in kept)


# ── Main ────────────────────────────────────────────────────

def play(seed: int) -> tuple[int, int]:
    """Play one puzzle to the end.

    Returns:
        Turns taken and strikes received.
    """
    bomb = eight.StaticBombInfo(
        remaining_seconds=1200, total_modules=11, indicators=2,
        batteries=3, serial_digit_sum=9, ports=2,
    )
    host = eight.RecordingHost()
    engine = eight.PuzzleEngine(bomb, host, seed=seed)
    engine.activate()

    turns = 0
    while not engine.solved and turns < MAX_TURNS:
        turns += 1
        text = _bot_command(engine)
        command = commands.parse_command(text, engine)
        if command is None:
            print(f"  turn {turns}: {text!r} rejected")
            continue
        outcome = commands.apply_command(engine, command)
        assert outcome is not None
        print(
            f"  turn {turns}: {text:<14} -> {outcome.name:<8} "
            f"(digits in play: {len(engine.not_disabled_indices)})"
        )
        bomb.tick(SECONDS_PER_TURN)
        if turns % 4 == 0:
            bomb.solve_module()
        engine.poll()
    return turns, host.strikes


def main() -> None:
    print("=" * 60)
    print("Eight module simulation")
    print("=" * 60)
    total_strikes = 0
    for seed in range(GAMES):
        print(f"\nGame {seed + 1} (seed {seed})")
        turns, strikes = play(seed)
        total_strikes += strikes
        print(f"  finished in {turns} turns with {strikes} strike(s)")
    print(f"\nTotal strikes over {GAMES} games: {total_strikes}")


if __name__ == "__main__":
    main()
