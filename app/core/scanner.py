"""
Explicit state machine for walking section lines into entries.

    Idle --enter_section--> InSection(name) --start line--> InEntry(name, entry)
    InEntry --start line--> InEntry(name, new entry)   (previous entry emitted)
    InEntry --other line--> InEntry(name, extended entry)

Transitions are pure: they take a state and a line and return the next state
plus the entry completed by that step, if any. Entries are immutable models;
``EntryRules.extend`` returns a new entry instead of mutating.
"""

from dataclasses import dataclass
from typing import Generic, Iterable, List, Optional, Protocol, Tuple, TypeVar, Union


E = TypeVar("E")


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class InSection:
    name: str


@dataclass(frozen=True)
class InEntry(Generic[E]):
    name: str
    entry: E


ScanState = Union[Idle, InSection, InEntry]


class EntryRules(Protocol[E]):
    def start(self, line: str) -> Optional[E]:
        """Return a fresh entry when ``line`` opens one, else None."""
        ...

    def extend(self, entry: E, line: str) -> E:
        """Fold a non-opening line into the current entry."""
        ...


def enter_section(state: ScanState, name: str) -> Tuple[ScanState, Optional[E]]:
    """Move to InSection(name), emitting any entry still open."""
    finished = state.entry if isinstance(state, InEntry) else None
    return InSection(name), finished


def transition(state: ScanState, line: str, rules: EntryRules) -> Tuple[ScanState, Optional[E]]:
    if isinstance(state, Idle):
        return state, None

    opened = rules.start(line)
    if isinstance(state, InSection):
        if opened is None:
            return state, None
        return InEntry(state.name, opened), None

    # InEntry
    if opened is not None:
        return InEntry(state.name, opened), state.entry
    return InEntry(state.name, rules.extend(state.entry, line)), None


def finish(state: ScanState) -> Optional[E]:
    """Entry still open at end of input."""
    return state.entry if isinstance(state, InEntry) else None


def scan_entries(lines: Iterable[str], section_name: str, rules: EntryRules) -> List[E]:
    """Run the machine over one section's lines and collect every completed entry."""
    entries: List[E] = []
    state, _ = enter_section(Idle(), section_name)
    for line in lines:
        state, done = transition(state, line, rules)
        if done is not None:
            entries.append(done)
    last = finish(state)
    if last is not None:
        entries.append(last)
    return entries
