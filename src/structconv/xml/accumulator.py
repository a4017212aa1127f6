"""Tagged accumulator for repeated canonical keys.

A key of a canonical object (a child tag or ``#text``) starts out absent,
holds its first value unwrapped, and is promoted to a list on the second
occurrence::

    Absent -> Single(v1) -> Many([v1, v2]) -> Many([v1, v2, v3]) ...

``Many`` grows in place; ``materialize`` copies its list out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Union


@dataclass(frozen=True)
class Absent:
    pass


@dataclass(frozen=True)
class Single:
    value: Any


@dataclass
class Many:
    values: List[Any]


Slot = Union[Absent, Single, Many]

ABSENT = Absent()


def widen(slot: Slot, value: Any) -> Slot:
    """Return ``slot`` with ``value`` appended, promoting as needed."""
    if isinstance(slot, Absent):
        return Single(value)
    if isinstance(slot, Single):
        return Many([slot.value, value])
    if isinstance(slot, Many):
        slot.values.append(value)
        return slot
    raise TypeError(f"Not an accumulator slot: {slot!r}")


def materialize(slot: Slot) -> Any:
    """Turn a filled slot into its canonical value (bare value or list)."""
    if isinstance(slot, Single):
        return slot.value
    if isinstance(slot, Many):
        return list(slot.values)
    raise ValueError("Cannot materialize an absent slot")
