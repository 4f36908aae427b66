"""
Curve groups: which curve discounts which currency, and forwards which index.

One physical curve can serve several roles (an OIS curve discounting USD and
forwarding USD-FED-FUNDS, for instance). Configuration is usually assembled
in fragments, each naming a curve and some of its roles; `CurveGroupEntry.merge`
reconciles fragments for the same curve, and `CurveGroup` folds all of them
into one role assignment per curve before curves are built.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import reduce
from typing import Iterable

from scenariocalc.errors import CurveGroupError, CurveNameMismatchError
from scenariocalc.keys import CurveKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurveGroupEntry:
    """
    The roles of one curve in a curve group.

    - discount_currencies: currencies the curve discounts (empty if none).
    - indices: rate indices the curve forwards (empty if none).
    """

    curve_name: str
    discount_currencies: frozenset[str] = field(default_factory=frozenset)
    indices: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.curve_name:
            raise ValueError("curve_name must not be empty")
        # Accept any iterable; a bare string would be split into characters.
        for name in ("discount_currencies", "indices"):
            value = getattr(self, name)
            if isinstance(value, str):
                raise TypeError(f"{name} must be a collection of strings, not a string")
            object.__setattr__(self, name, frozenset(value))

    @property
    def curve_key(self) -> CurveKey:
        return CurveKey(self.curve_name)

    def merge(self, other: CurveGroupEntry) -> CurveGroupEntry:
        """
        Combine the roles of two entries for the same curve.

        Raises CurveNameMismatchError if the curve names differ.
        """
        if other.curve_name != self.curve_name:
            raise CurveNameMismatchError(self.curve_name, other.curve_name)
        merged = CurveGroupEntry(
            self.curve_name,
            self.discount_currencies | other.discount_currencies,
            self.indices | other.indices,
        )
        logger.debug(
            "Merged curve group entry %s: currencies=%s indices=%s",
            merged.curve_name,
            sorted(merged.discount_currencies),
            sorted(merged.indices),
        )
        return merged


def merge_entries(entries: Iterable[CurveGroupEntry]) -> list[CurveGroupEntry]:
    """Fold entries sharing a curve name; curves keep their first-seen order."""
    by_name: dict[str, list[CurveGroupEntry]] = {}
    for entry in entries:
        by_name.setdefault(entry.curve_name, []).append(entry)
    return [reduce(CurveGroupEntry.merge, group) for group in by_name.values()]


@dataclass(frozen=True)
class CurveGroup:
    """
    A finalized set of curve roles.

    Entries for the same curve are merged on construction. A currency can be
    discounted by only one curve and an index forwarded by only one curve;
    a conflict raises CurveGroupError naming both curves.
    """

    name: str
    entries: tuple[CurveGroupEntry, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(merge_entries(self.entries)))
        self._validate()

    def _validate(self) -> None:
        discounting: dict[str, str] = {}
        forwarding: dict[str, str] = {}
        for entry in self.entries:
            for currency in sorted(entry.discount_currencies):
                owner = discounting.setdefault(currency, entry.curve_name)
                if owner != entry.curve_name:
                    raise CurveGroupError(
                        f"Curve group '{self.name}': currency {currency} is discounted "
                        f"by both '{owner}' and '{entry.curve_name}'"
                    )
            for index in sorted(entry.indices):
                owner = forwarding.setdefault(index, entry.curve_name)
                if owner != entry.curve_name:
                    raise CurveGroupError(
                        f"Curve group '{self.name}': index {index} is forwarded "
                        f"by both '{owner}' and '{entry.curve_name}'"
                    )

    @classmethod
    def of(cls, name: str, *entries: CurveGroupEntry) -> CurveGroup:
        return cls(name, tuple(entries))

    def combined_with(self, other: CurveGroup) -> CurveGroup:
        """Return a group holding the entries of both; this group's name is kept."""
        return CurveGroup(self.name, self.entries + other.entries)

    @property
    def curve_names(self) -> tuple[str, ...]:
        return tuple(entry.curve_name for entry in self.entries)

    @property
    def discount_currencies(self) -> frozenset[str]:
        return frozenset().union(*(e.discount_currencies for e in self.entries))

    @property
    def indices(self) -> frozenset[str]:
        return frozenset().union(*(e.indices for e in self.entries))

    def find_entry(self, curve_name: str) -> CurveGroupEntry | None:
        for entry in self.entries:
            if entry.curve_name == curve_name:
                return entry
        return None

    def discount_curve_name(self, currency: str) -> str | None:
        """Name of the curve discounting currency, or None."""
        for entry in self.entries:
            if currency in entry.discount_currencies:
                return entry.curve_name
        return None

    def forward_curve_name(self, index: str) -> str | None:
        """Name of the curve forwarding index, or None."""
        for entry in self.entries:
            if index in entry.indices:
                return entry.curve_name
        return None
