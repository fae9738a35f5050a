from typing import Optional, Tuple

from app.core.scanner import Idle, InEntry, InSection, enter_section, finish, scan_entries, transition


class HashRules:
    """Lines starting with '#' open an entry; others are appended to it."""

    def start(self, line: str) -> Optional[Tuple[str, ...]]:
        return (line[1:],) if line.startswith("#") else None

    def extend(self, entry, line):
        return entry + (line,)


def test_idle_ignores_lines():
    state, done = transition(Idle(), "#a", HashRules())
    assert state == Idle()
    assert done is None


def test_section_waits_for_first_entry():
    state, _ = enter_section(Idle(), "work")
    assert state == InSection("work")
    state, done = transition(state, "stray", HashRules())
    assert state == InSection("work")
    assert done is None


def test_new_entry_emits_previous():
    state = InEntry("work", ("a", "x"))
    state, done = transition(state, "#b", HashRules())
    assert done == ("a", "x")
    assert state == InEntry("work", ("b",))


def test_extend_returns_new_entry():
    original = ("a",)
    state, done = transition(InEntry("work", original), "detail", HashRules())
    assert done is None
    assert state.entry == ("a", "detail")
    assert original == ("a",)


def test_enter_section_flushes_open_entry():
    state, done = enter_section(InEntry("work", ("a",)), "education")
    assert state == InSection("education")
    assert done == ("a",)


def test_scan_entries_collects_all():
    lines = ["intro", "#one", "1a", "#two", "2a", "2b"]
    assert scan_entries(lines, "work", HashRules()) == [("one", "1a"), ("two", "2a", "2b")]
    assert finish(InSection("work")) is None
