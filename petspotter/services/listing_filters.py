"""
Listing filter dialects.

A dialect turns the query string of GET /petposts into SQL criteria. Exactly one
filter dimension is honoured per request, chosen by a fixed precedence; an
unrecognized value for the chosen dimension raises BadFilterError.

Two dialects exist and are kept apart on purpose, since they return different
result sets on the same data:

* ``exact``   - status=lost|found, else species=cat|dog (exact match), else all.
* ``pattern`` - status=lost|found, else lost=true|false, else species=<substring>
                (case-insensitive), else all.

Empty values count as absent. When several dimensions are supplied, the first
in precedence order wins.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass

from sqlalchemy import ColumnElement

from petspotter.core.errors import BadFilterError
from petspotter.db.models.pet_post import PET_STATUSES, PetPost

EXACT_SPECIES = ("cat", "dog")
_BOOLEAN_VALUES = {"true": True, "false": False}


@dataclass(frozen=True)
class ListingFilter:
    """Resolved filter: which dimension was used and the criteria it produced."""

    dimension: str
    criteria: tuple[ColumnElement[bool], ...] = ()


def _param(params: Mapping[str, str], name: str) -> str | None:
    value = params.get(name)
    return value if value else None


def _status_filter(value: str) -> ListingFilter:
    if value not in PET_STATUSES:
        raise BadFilterError(f"Unrecognized status {value!r}")
    return ListingFilter("status", (PetPost.status == value,))


class FilterDialect(ABC):
    name: str

    @abstractmethod
    def parse(self, params: Mapping[str, str]) -> ListingFilter:
        """Resolve query parameters to a ListingFilter. Raises BadFilterError."""


class ExactFilterDialect(FilterDialect):
    name = "exact"

    def parse(self, params: Mapping[str, str]) -> ListingFilter:
        status = _param(params, "status")
        if status is not None:
            return _status_filter(status)
        species = _param(params, "species")
        if species is not None:
            if species not in EXACT_SPECIES:
                raise BadFilterError(f"Unrecognized species {species!r}")
            return ListingFilter("species", (PetPost.species == species,))
        return ListingFilter("all")


class PatternFilterDialect(FilterDialect):
    name = "pattern"

    def parse(self, params: Mapping[str, str]) -> ListingFilter:
        status = _param(params, "status")
        if status is not None:
            return _status_filter(status)
        lost = _param(params, "lost")
        if lost is not None:
            flag = _BOOLEAN_VALUES.get(lost.lower())
            if flag is None:
                raise BadFilterError(f"Unrecognized lost flag {lost!r}")
            return ListingFilter("lost", (PetPost.status == ("lost" if flag else "found"),))
        species = _param(params, "species")
        if species is not None:
            return ListingFilter("species", (PetPost.species.icontains(species, autoescape=True),))
        return ListingFilter("all")


DIALECTS: dict[str, FilterDialect] = {
    dialect.name: dialect for dialect in (ExactFilterDialect(), PatternFilterDialect())
}


def get_dialect(name: str) -> FilterDialect:
    """Look up a dialect by name. Unknown names are a configuration error."""
    try:
        return DIALECTS[name]
    except KeyError:
        raise ValueError(f"Unknown listing filter dialect {name!r}; expected one of {sorted(DIALECTS)}") from None
