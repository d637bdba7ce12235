"""Exceptions raised by traversal code and converted to results by services."""

from __future__ import annotations


class CycleDetectedError(Exception):
    """A containment cycle was found while walking the hierarchy."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__("Containment cycle: " + " -> ".join(cycle))


class AnchorNotFoundError(LookupError):
    """An anchor name matched no node, or more than one."""

    def __init__(self, name: str, matches: int) -> None:
        self.name = name
        self.matches = matches
        if matches:
            msg = f"Name '{name}' is ambiguous ({matches} nodes share it)"
        else:
            msg = f"No node named '{name}'"
        super().__init__(msg)
