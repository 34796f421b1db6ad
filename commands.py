"""Text command front end for the Eight engine.

Translates chat-style commands into engine actions:

    submit 123    keep digits 1, 2 and 3, remove the rest, press the button
    remove 123    remove digits 1, 2 and 3
    submit, skip  press the button

Digits are 1-based slot numbers. Commands are case-insensitive and
surrounding whitespace is ignored.
"""

from __future__ import annotations

import dataclasses
import re

import eight


HELP_MESSAGE = " | ".join([
    "`submit 123` - submit digits by their indices",
    "`remove 123` - remove digits",
    "`skip` `submit` - press the button labelled \"SKIP\"",
])

_INDICES_PATTERN = re.compile(r"(submit|remove) +([1-8]+)")


@dataclasses.dataclass(frozen=True)
class PlayerCommand:
    """Engine actions decoded from one command.

    Attributes:
        removals: 0-based slot indices to remove, in order.
        press: Whether to press the button after the removals.
    """
    removals: tuple[int, ...] = ()
    press: bool = False


def _parse_indices(digits: str) -> list[int]:
    """Turn ``"312"`` into 0-based indices ``[2, 0, 1]``, dropping repeats."""
    indices: list[int] = []
    for ch in digits:
        index = int(ch) - 1
        if index not in indices:
            indices.append(index)
    return indices


def parse_command(
    text: str, engine: eight.PuzzleEngine,
) -> PlayerCommand | None:
    """Decode a command against the engine's current slots.

    A ``submit`` naming a removed or disabled digit is rejected as a
    whole. A ``remove`` silently drops such digits.

    Args:
        text: Raw command text.
        engine: Engine whose slots the indices refer to.

    Returns:
        The decoded command, or None if the text is not a valid command.
    """
    command = text.strip().lower()
    if command in ("skip", "submit"):
        return PlayerCommand(press=True)
    match = _INDICES_PATTERN.fullmatch(command)
    if match is None:
        return None
    verb, digits = match.groups()
    indices = _parse_indices(digits)
    slots = engine.slots
    if verb == "submit":
        if any(slots[i].disabled or slots[i].removed for i in indices):
            return None
        kept = set(indices)
        removals = tuple(i for i in range(eight.DIGITS_COUNT) if i not in kept)
        return PlayerCommand(removals=removals, press=True)
    removals = tuple(
        i for i in indices
        if not slots[i].disabled and not slots[i].removed
    )
    return PlayerCommand(removals=removals)


def apply_command(
    engine: eight.PuzzleEngine, command: PlayerCommand,
) -> eight.SubmitOutcome | None:
    """Perform a decoded command.

    Returns:
        The press outcome, or None if the command does not press.
    """
    for index in command.removals:
        engine.remove(index)
    if command.press:
        return engine.submit()
    return None
