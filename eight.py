"""Eight puzzle engine.

Eight displayed digits hide eight true digits. Each rendered digit is its
true digit minus a per-slot addendum, where the addendum mixes a figure read
off the bomb with a row of a fixed table selected by the small "stage"
display. The player removes digits so that the remaining true number is
divisible by 8, or skips when no such number exists. Every correct answer
disables one more digit until only two remain; a correct answer with two
digits left solves the module, and any strike re-enables everything.

The engine is pure game state: collaborators supply bomb figures
(``BombInfo``) and receive strike/pass signals (``ModuleHost``).
"""

from __future__ import annotations

import asyncio
import dataclasses
import enum
import itertools
import logging
import random
import threading


DIGITS_COUNT = 8
POLL_INTERVAL = 0.1
SOLVED_CHARACTER = "8"

ADDENDUM_TABLE: tuple[str, ...] = (
    "4280752097",
    "8126837692",
    "5317800685",
    "9852322448",
    "3710561298",
    "6154187606",
    "8863108821",
    "4628679367",
)

# Slots re-rendered by polling when the figure they depend on changes.
REMAINING_MINUTES_SLOT = 6
SOLVES_COUNT_SLOT = 3


# =============================================================================
# ANSI Color Constants
# =============================================================================

class _Colors:
    """ANSI escape codes for terminal coloring."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    DIM = "\033[2m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


# =============================================================================
# Enums
# =============================================================================

class ValidationResult(enum.Enum):
    """Verdict on a submitted number."""
    CORRECT = enum.auto()
    EMPTY = enum.auto()          # Every digit removed
    LEADING_ZERO = enum.auto()
    NOT_DIVISIBLE = enum.auto()


class SubmitOutcome(enum.Enum):
    """What pressing the button did to the puzzle."""
    SOLVED = enum.auto()     # Correct with two digits left
    DISABLED = enum.auto()   # Correct, one more digit disabled
    STRIKE = enum.auto()
    IGNORED = enum.auto()    # Already solved or not yet activated


class EventKind(enum.Enum):
    """Kind of diagnostic event emitted by the engine."""
    STAGE_CHANGED = enum.auto()
    GENERATED = enum.auto()
    POSSIBLE_SOLUTION = enum.auto()
    NO_SOLUTION = enum.auto()
    RENDERED = enum.auto()
    DIGIT_RERENDERED = enum.auto()
    DIGIT_REMOVED = enum.auto()
    BUTTON_PRESSED = enum.auto()
    SUBMISSION_REJECTED = enum.auto()
    DIGIT_DISABLED = enum.auto()
    STRIKE = enum.auto()
    SOLVED = enum.auto()
    REMAINING_MINUTES_CHANGED = enum.auto()
    SOLVES_COUNT_CHANGED = enum.auto()


# =============================================================================
# Addendum Table
# =============================================================================

def addendum_for(slot_index: int, stage_digit: int) -> int:
    """Look up the table part of a slot's addendum.

    Args:
        slot_index: Slot position, 0-7.
        stage_digit: Digit on the stage display, 0-9.

    Returns:
        The table digit for that slot and stage.

    Raises:
        ValueError: If either argument is out of range.
    """
    if not 0 <= slot_index < DIGITS_COUNT:
        raise ValueError(f"Invalid digit index: {slot_index}")
    if not 0 <= stage_digit <= 9:
        raise ValueError(f"Invalid stage digit: {stage_digit}")
    return int(ADDENDUM_TABLE[slot_index][stage_digit])


def render_digit(true_value: int, addendum: int) -> str:
    """Character shown for a true digit under the given addendum."""
    return str((true_value - addendum) % 10)


def recover_true_value(rendered: str, addendum: int) -> int:
    """Inverse of ``render_digit``: the true digit behind a character."""
    return (int(rendered) + addendum) % 10


# =============================================================================
# Collaborators
# =============================================================================

class BombInfo:
    """Read-only figures about the bomb the module sits on.

    Subclasses answer each query as of call time.
    """

    def remaining_time_seconds(self) -> int:
        raise NotImplementedError

    def solved_module_count(self) -> int:
        raise NotImplementedError

    def total_module_count(self) -> int:
        raise NotImplementedError

    def indicator_count(self) -> int:
        raise NotImplementedError

    def battery_count(self) -> int:
        raise NotImplementedError

    def serial_number_digit_sum(self) -> int:
        raise NotImplementedError

    def port_count(self) -> int:
        raise NotImplementedError


@dataclasses.dataclass
class StaticBombInfo(BombInfo):
    """A bomb described by plain numbers.

    Used by scripts and tests. ``tick`` and ``solve_module`` move the
    figures that polling watches.

    Attributes:
        remaining_seconds: Time left on the bomb timer.
        total_modules: Number of modules on the bomb.
        solved_modules: Number of modules already solved.
        indicators: Number of indicators.
        batteries: Number of batteries.
        serial_digit_sum: Sum of the digits in the serial number.
        ports: Number of ports.
    """
    remaining_seconds: int = 600
    total_modules: int = 11
    solved_modules: int = 0
    indicators: int = 0
    batteries: int = 0
    serial_digit_sum: int = 0
    ports: int = 0

    def remaining_time_seconds(self) -> int:
        return self.remaining_seconds

    def solved_module_count(self) -> int:
        return self.solved_modules

    def total_module_count(self) -> int:
        return self.total_modules

    def indicator_count(self) -> int:
        return self.indicators

    def battery_count(self) -> int:
        return self.batteries

    def serial_number_digit_sum(self) -> int:
        return self.serial_digit_sum

    def port_count(self) -> int:
        return self.ports

    def tick(self, seconds: int) -> None:
        """Run the timer down, never below zero."""
        self.remaining_seconds = max(0, self.remaining_seconds - seconds)

    def solve_module(self) -> None:
        self.solved_modules += 1


class ModuleHost:
    """Receives the module's outbound signals."""

    def signal_strike(self) -> None:
        raise NotImplementedError

    def signal_pass(self) -> None:
        raise NotImplementedError


@dataclasses.dataclass
class RecordingHost(ModuleHost):
    """Host that only counts the signals it receives."""
    strikes: int = 0
    passes: int = 0

    def signal_strike(self) -> None:
        self.strikes += 1

    def signal_pass(self) -> None:
        self.passes += 1


def remaining_minutes_of(bomb_info: BombInfo) -> int:
    """Whole minutes left on the bomb timer."""
    return bomb_info.remaining_time_seconds() // 60


# =============================================================================
# Environment Snapshot
# =============================================================================

@dataclasses.dataclass(frozen=True)
class EnvironmentSnapshot:
    """Bomb figures used to compute the environment part of addenda.

    Attributes:
        indicator_count: Number of indicators (slot 0).
        total_module_count: Number of modules (slot 2).
        solved_module_count: Number of solved modules (slot 3).
        battery_count: Number of batteries (slot 4).
        serial_digit_sum: Sum of serial number digits (slot 5).
        remaining_minutes: Whole minutes left on the timer (slot 6).
        port_count: Number of ports (slot 7).
    """
    indicator_count: int = 0
    total_module_count: int = 0
    solved_module_count: int = 0
    battery_count: int = 0
    serial_digit_sum: int = 0
    remaining_minutes: int = 0
    port_count: int = 0

    @classmethod
    def capture(
        cls,
        bomb_info: BombInfo,
        remaining_minutes: int | None = None,
        solves_count: int | None = None,
    ) -> EnvironmentSnapshot:
        """Read the bomb's current figures.

        Args:
            bomb_info: The bomb to read.
            remaining_minutes: Cached minutes to use instead of reading
                the timer.
            solves_count: Cached solved-module count to use instead of
                reading the bomb.

        Returns:
            A snapshot of all seven figures.
        """
        if remaining_minutes is None:
            remaining_minutes = remaining_minutes_of(bomb_info)
        if solves_count is None:
            solves_count = bomb_info.solved_module_count()
        return cls(
            indicator_count=bomb_info.indicator_count(),
            total_module_count=bomb_info.total_module_count(),
            solved_module_count=solves_count,
            battery_count=bomb_info.battery_count(),
            serial_digit_sum=bomb_info.serial_number_digit_sum(),
            remaining_minutes=remaining_minutes,
            port_count=bomb_info.port_count(),
        )


def environment_addendum(slot_index: int, snapshot: EnvironmentSnapshot) -> int:
    """Environment part of a slot's addendum.

    Raises:
        ValueError: If ``slot_index`` is not 0-7.
    """
    if slot_index == 0:
        return snapshot.indicator_count
    if slot_index == 1:
        return 8
    if slot_index == 2:
        return snapshot.total_module_count
    if slot_index == 3:
        return snapshot.solved_module_count
    if slot_index == 4:
        return snapshot.battery_count
    if slot_index == 5:
        return snapshot.serial_digit_sum
    if slot_index == 6:
        return snapshot.remaining_minutes
    if slot_index == 7:
        return snapshot.port_count
    raise ValueError(f"Invalid digit index: {slot_index}")


# =============================================================================
# Digit Slot
# =============================================================================

@dataclasses.dataclass
class DigitSlot:
    """One of the eight digit positions.

    Attributes:
        index: Fixed position, 0-7.
        true_value: The real digit, set by generation.
        rendered: The character displayed to the player.
        disabled: Excluded from play until the next strike.
        removed: Removed by the player for the current attempt.
        active: False only once the module is solved.
    """
    index: int
    true_value: int = 0
    rendered: str = "0"
    disabled: bool = False
    removed: bool = False
    active: bool = True

    @property
    def is_available(self) -> bool:
        """Whether the player can still remove this digit."""
        return self.active and not self.removed and not self.disabled

    def __str__(self) -> str:
        if not self.active:
            return f"{_Colors.GREEN}{self.rendered}{_Colors.RESET}"
        if self.disabled:
            return f"{_Colors.DIM}_{_Colors.RESET}"
        if self.removed:
            return f"{_Colors.RED}{self.rendered}{_Colors.RESET}"
        return f"{_Colors.BOLD}{self.rendered}{_Colors.RESET}"


# =============================================================================
# Puzzle State
# =============================================================================

@dataclasses.dataclass
class PuzzleState:
    """Everything the engine mutates.

    Attributes:
        slots: The eight digit slots, by index.
        stage: Character on the stage display.
        solved: Whether the module has been solved.
        remaining_minutes: Cached whole minutes left on the timer.
        solves_count: Cached number of solved modules.
        not_disabled: Indices of slots still in play.
    """
    slots: list[DigitSlot]
    stage: str = "0"
    solved: bool = False
    remaining_minutes: int = 0
    solves_count: int = 0
    not_disabled: set[int] = dataclasses.field(
        default_factory=lambda: set(range(DIGITS_COUNT)),
    )

    @classmethod
    def create(cls) -> PuzzleState:
        """Fresh state: every slot zero and in play."""
        return cls(slots=[DigitSlot(i) for i in range(DIGITS_COUNT)])

    @property
    def stage_digit(self) -> int:
        return int(self.stage)


# =============================================================================
# Solution Search & Validation
# =============================================================================

def find_possible_solution(values: list[int]) -> int | None:
    """Find a run of 1-3 adjacent digits forming a multiple of 8.

    Runs are tried from every start position in order, shorter runs
    first at each start. A lone 8 ends the search at once. Zero never
    counts as a solution.

    Args:
        values: True digits of the available slots, in slot order.

    Returns:
        The first multiple of 8 found, or None.
    """
    for i, first in enumerate(values):
        if first == 8:
            return first
        number = first
        for value in values[i + 1:i + 3]:
            number = number * 10 + value
            if number != 0 and number % 8 == 0:
                return number
    return None


def validate_submission(values: list[int]) -> ValidationResult:
    """Check the digits left after removals, in slot order."""
    if not values:
        return ValidationResult.EMPTY
    if values[0] == 0:
        return ValidationResult.LEADING_ZERO
    number = int("".join(str(v) for v in values))
    if number % 8 != 0:
        return ValidationResult.NOT_DIVISIBLE
    return ValidationResult.CORRECT


# =============================================================================
# Generation
# =============================================================================

GENERAL_LAST_DIGITS = (0, 2, 4, 6)

# Digits the earlier slots may not take, by chosen last digit.
LAST_DIGIT_EXCLUSIONS: dict[int, frozenset[int]] = {
    0: frozenset({4}),
    2: frozenset({3, 7}),
    4: frozenset({2, 6}),
    6: frozenset({1, 5, 9}),
}

# Digits ruled out for the rest of the draw once a digit is drawn.
DRAWN_DIGIT_EXCLUSIONS: dict[int, int] = {
    1: 6, 5: 6, 9: 6,
    2: 4, 6: 4,
    3: 2, 7: 2,
    4: 0,
}


def generate_two_digit_value(rng: random.Random) -> int:
    """Pick the true two-digit number used when two slots remain.

    Biased toward multiples of 8, the 80s and numbers ending in 8.
    """
    scheme = rng.randrange(3)
    if scheme == 0:
        if rng.randrange(2) == 0:
            return rng.randrange(2, 13) * 8
        return rng.randrange(100)
    if scheme == 1:
        return 80 + rng.randrange(5) * 2
    return rng.randrange(10) * 10 + 8


def general_last_digit(rng: random.Random) -> tuple[int, set[int]]:
    """Choose the last digit for four or more slots.

    Returns:
        The last digit and the candidate set for the other slots.

    Raises:
        ValueError: If the drawn last digit has no exclusion rule.
    """
    last_digit = rng.choice(GENERAL_LAST_DIGITS)
    if last_digit not in LAST_DIGIT_EXCLUSIONS:
        raise ValueError(f"Unexpected last digit: {last_digit}")
    # Departs from a plain 0-9 seed on purpose: a lone 8 is always a
    # solution, so 8 is never drawn for the leading slots.
    candidates = set(range(10)) - {8} - LAST_DIGIT_EXCLUSIONS[last_digit]
    return last_digit, candidates


# =============================================================================
# Events
# =============================================================================

@dataclasses.dataclass(frozen=True)
class PuzzleEvent:
    """A diagnostic event.

    Attributes:
        kind: What happened.
        module_id: Id of the engine that emitted it.
        message: Human-readable description.
        data: Event-specific values (digit index, numbers, reason).
    """
    kind: EventKind
    module_id: int
    message: str
    data: dict[str, object] = dataclasses.field(default_factory=dict)

    def __str__(self) -> str:
        return f"[Eight #{self.module_id}] {self.message}"


class EventSink:
    """Destination for diagnostic events."""

    def emit(self, event: PuzzleEvent) -> None:
        raise NotImplementedError


class LoggingEventSink(EventSink):
    """Writes events to the ``eight`` logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("eight")

    def emit(self, event: PuzzleEvent) -> None:
        level = (
            logging.DEBUG if event.kind == EventKind.DIGIT_RERENDERED
            else logging.INFO
        )
        self.logger.log(level, "%s", event)


class RecordingEventSink(EventSink):
    """Keeps every event in memory."""

    def __init__(self) -> None:
        self.events: list[PuzzleEvent] = []

    def emit(self, event: PuzzleEvent) -> None:
        self.events.append(event)

    def kinds(self) -> list[EventKind]:
        return [e.kind for e in self.events]

    def of_kind(self, kind: EventKind) -> list[PuzzleEvent]:
        return [e for e in self.events if e.kind == kind]

    def clear(self) -> None:
        self.events.clear()


# =============================================================================
# Puzzle Engine
# =============================================================================

class PuzzleEngine:
    """Runs one Eight module.

    Call ``activate`` once the bomb starts, then relay player actions
    through ``remove`` and ``submit`` and call ``poll`` (or run
    ``run_poller``) so that timer and solve changes re-render the
    dependent digits. All four entry points are serialised by one lock.

    Attributes:
        bomb_info: Source of bomb figures.
        host: Receiver of strike/pass signals.
        state: The mutable puzzle state.
        module_id: Process-unique id used in diagnostics.
        activated: Whether ``activate`` has run.
    """

    _module_ids = itertools.count(1)

    def __init__(
        self,
        bomb_info: BombInfo,
        host: ModuleHost,
        seed: int | None = None,
        rng: random.Random | None = None,
        sink: EventSink | None = None,
    ) -> None:
        self.bomb_info = bomb_info
        self.host = host
        self.rng = rng if rng is not None else random.Random(seed)
        self.sink = sink if sink is not None else LoggingEventSink()
        self.state = PuzzleState.create()
        self.module_id = next(PuzzleEngine._module_ids)
        self.activated = False
        self._lock = threading.RLock()

    # -----------------------------------------------------------------
    # Read helpers
    # -----------------------------------------------------------------

    @property
    def slots(self) -> list[DigitSlot]:
        return self.state.slots

    @property
    def solved(self) -> bool:
        return self.state.solved

    @property
    def not_disabled_indices(self) -> list[int]:
        """Indices of slots still in play, ascending."""
        return sorted(self.state.not_disabled)

    def true_values(self) -> list[int]:
        """True digits of the not-disabled slots, in slot order."""
        return [s.true_value for s in self.slots if not s.disabled]

    def rendered_number(self) -> str:
        """Characters of the not-disabled slots, in slot order."""
        return "".join(s.rendered for s in self.slots if not s.disabled)

    def snapshot(self) -> EnvironmentSnapshot:
        """Current bomb figures, with the cached polled ones."""
        return EnvironmentSnapshot.capture(
            self.bomb_info,
            remaining_minutes=self.state.remaining_minutes,
            solves_count=self.state.solves_count,
        )

    def addendum(
        self, slot_index: int, snapshot: EnvironmentSnapshot | None = None,
    ) -> int:
        """Full addendum of a slot under the current stage digit."""
        if snapshot is None:
            snapshot = self.snapshot()
        return (
            environment_addendum(slot_index, snapshot)
            + addendum_for(slot_index, self.state.stage_digit)
        )

    def possible_solution(self) -> int | None:
        """Search the active, not-disabled true digits for a solution."""
        return find_possible_solution([
            s.true_value for s in self.slots if s.active and not s.disabled
        ])

    # -----------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------

    def activate(self) -> None:
        """Start the module: capture figures and generate the first round."""
        with self._lock:
            for slot in self.slots:
                slot.rendered = "0"
            self.state.remaining_minutes = remaining_minutes_of(self.bomb_info)
            self.state.solves_count = self.bomb_info.solved_module_count()
            self.activated = True
            self.generate()

    def poll(self) -> bool:
        """One polling step.

        Re-renders the remaining-minutes digit and the solved-count digit
        when their figures change.

        Returns:
            True if either figure changed.
        """
        with self._lock:
            if self.state.solved or not self.activated:
                return False
            changed = False
            minutes = remaining_minutes_of(self.bomb_info)
            if minutes != self.state.remaining_minutes:
                self.state.remaining_minutes = minutes
                self._emit(
                    EventKind.REMAINING_MINUTES_CHANGED,
                    f"Remaining minutes changed to {minutes}",
                    remaining_minutes=minutes,
                )
                self._update_digit(REMAINING_MINUTES_SLOT, log=True)
                changed = True
            solves = self.bomb_info.solved_module_count()
            if solves != self.state.solves_count:
                self.state.solves_count = solves
                self._emit(
                    EventKind.SOLVES_COUNT_CHANGED,
                    f"Solved modules count changed to {solves}",
                    solves_count=solves,
                )
                self._update_digit(SOLVES_COUNT_SLOT, log=True)
                changed = True
            return changed

    # -----------------------------------------------------------------
    # Player actions
    # -----------------------------------------------------------------

    def remove(self, index: int) -> bool:
        """Remove a digit from the current attempt.

        Args:
            index: Slot index, 0-7.

        Returns:
            True if the digit was removed; False if the action was
            ignored (solved, not activated, or slot unavailable).

        Raises:
            ValueError: If ``index`` is not 0-7.
        """
        if not 0 <= index < DIGITS_COUNT:
            raise ValueError(f"Invalid digit index: {index}")
        with self._lock:
            if self.state.solved or not self.activated:
                return False
            slot = self.slots[index]
            if not slot.is_available:
                return False
            slot.removed = True
            self._emit(
                EventKind.DIGIT_REMOVED,
                f"Digit #{index + 1} removed",
                index=index,
            )
            return True

    def submit(self) -> SubmitOutcome:
        """Press the button.

        If a solution exists among the available digits the press counts
        as correct outright; otherwise the current removal pattern is
        validated. Unless the module got solved, removals are cleared and
        a new round is generated.
        """
        with self._lock:
            if self.state.solved or not self.activated:
                return SubmitOutcome.IGNORED
            self._emit(EventKind.BUTTON_PRESSED, '"SKIP" button pressed')
            if self.possible_solution() is not None:
                outcome = self._on_correct_answer()
            else:
                outcome = self._validate_answer()
            if outcome == SubmitOutcome.SOLVED:
                return outcome
            for slot in self.slots:
                slot.removed = False
            self.generate()
            return outcome

    # -----------------------------------------------------------------
    # Answer handling
    # -----------------------------------------------------------------

    def _validate_answer(self) -> SubmitOutcome:
        values = [
            s.true_value for s in self.slots if not s.removed and not s.disabled
        ]
        result = validate_submission(values)
        if result == ValidationResult.CORRECT:
            return self._on_correct_answer()
        if result == ValidationResult.EMPTY:
            message = "All digits has been removed"
        elif result == ValidationResult.LEADING_ZERO:
            message = "Submitted number has leading 0"
        else:
            number = int("".join(str(v) for v in values))
            message = f"Submitted number {number} not divisible by 8"
        self._emit(
            EventKind.SUBMISSION_REJECTED, message,
            reason=result, values=values,
        )
        self._strike()
        return SubmitOutcome.STRIKE

    def _strike(self) -> None:
        self.host.signal_strike()
        for slot in self.slots:
            slot.disabled = False
        self.state.not_disabled = set(range(DIGITS_COUNT))
        self._emit(EventKind.STRIKE, "Strike! All digits enabled")

    def _on_correct_answer(self) -> SubmitOutcome:
        if len(self.state.not_disabled) == 2:
            self.state.solved = True
            self.host.signal_pass()
            for slot in self.slots:
                slot.disabled = False
                slot.removed = False
                slot.rendered = SOLVED_CHARACTER
                slot.active = False
            self.state.stage = SOLVED_CHARACTER
            self._emit(EventKind.SOLVED, "Module solved")
            return SubmitOutcome.SOLVED
        index = self.rng.choice(sorted(self.state.not_disabled))
        self.state.not_disabled.remove(index)
        self.slots[index].disabled = True
        self._emit(
            EventKind.DIGIT_DISABLED,
            f"Digit #{index + 1} disabled",
            index=index,
        )
        return SubmitOutcome.DISABLED

    # -----------------------------------------------------------------
    # Generation
    # -----------------------------------------------------------------

    def generate(self) -> None:
        """Draw a new stage digit and new true digits, then re-render."""
        self.state.stage = str(self.rng.randrange(10))
        self._emit(
            EventKind.STAGE_CHANGED,
            f"New digit on small display: {self.state.stage}",
            stage=self.state.stage_digit,
        )
        count = len(self.state.not_disabled)
        if count == 2:
            self._generate_two_digits()
        elif count == 3:
            self._generate_three_digits()
        else:
            self._generate_general()
        self._update_digits()

    def _generate_two_digits(self) -> None:
        # Ones digit lands in the lowest slot.
        value = generate_two_digit_value(self.rng)
        for index in self.not_disabled_indices:
            self.slots[index].true_value = value % 10
            value //= 10

    def _generate_three_digits(self) -> None:
        for index in self.not_disabled_indices:
            self.slots[index].true_value = self.rng.randrange(10)

    def _generate_general(self) -> None:
        last_digit, candidates = general_last_digit(self.rng)
        *leading, last_index = self.not_disabled_indices
        for index in leading:
            digit = self.rng.choice(sorted(candidates))
            if digit in DRAWN_DIGIT_EXCLUSIONS:
                candidates.discard(DRAWN_DIGIT_EXCLUSIONS[digit])
            self.slots[index].true_value = digit
        self.slots[last_index].true_value = last_digit

    def _update_digits(self) -> None:
        snapshot = self.snapshot()
        for index in range(DIGITS_COUNT):
            self._update_digit(index, snapshot=snapshot)
        generated = "".join(str(v) for v in self.true_values())
        self._emit(
            EventKind.GENERATED,
            f"Generated number: {generated}",
            number=generated,
        )
        solution = self.possible_solution()
        if solution is None:
            self._emit(EventKind.NO_SOLUTION, "No possible solution")
        else:
            self._emit(
                EventKind.POSSIBLE_SOLUTION,
                f"Possible solution: {solution}",
                solution=solution,
            )
        rendered = self.rendered_number()
        self._emit(
            EventKind.RENDERED,
            f"New rendered number: {rendered}",
            number=rendered,
        )

    def _update_digit(
        self,
        index: int,
        log: bool = False,
        snapshot: EnvironmentSnapshot | None = None,
    ) -> None:
        slot = self.slots[index]
        if slot.disabled:
            return
        slot.rendered = render_digit(
            slot.true_value, self.addendum(index, snapshot),
        )
        if log:
            self._emit(
                EventKind.DIGIT_RERENDERED,
                f"Digit #{index + 1} new rendered value: {slot.rendered}",
                index=index, rendered=slot.rendered,
            )

    def _emit(self, kind: EventKind, message: str, **data: object) -> None:
        self.sink.emit(PuzzleEvent(kind, self.module_id, message, data))

    # -----------------------------------------------------------------
    # Display
    # -----------------------------------------------------------------

    def __str__(self) -> str:
        digits = " ".join(str(slot) for slot in self.slots)
        numbers = " ".join(str(i + 1) for i in range(DIGITS_COUNT))
        lines = [
            f"{_Colors.BOLD}=== Eight #{self.module_id} ==={_Colors.RESET}",
            f"Stage: {_Colors.YELLOW}{self.state.stage}{_Colors.RESET}",
            f"  {digits}",
            f"  {_Colors.DIM}{numbers}{_Colors.RESET}",
        ]
        if self.state.solved:
            lines.append(f"{_Colors.GREEN}{_Colors.BOLD}SOLVED!{_Colors.RESET}")
        else:
            lines.append(f"Digits in play: {len(self.state.not_disabled)}")
        return "\n".join(lines)


async def run_poller(
    engine: PuzzleEngine, interval: float = POLL_INTERVAL,
) -> None:
    """Poll the engine every ``interval`` seconds until it is solved.

    Each poll runs in a worker thread so that an action holding the
    engine lock on another thread does not stall the event loop.
    """
    while not engine.solved:
        await asyncio.to_thread(engine.poll)
        await asyncio.sleep(interval)
