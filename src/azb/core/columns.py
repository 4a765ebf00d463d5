"""Kanban column sequence and adjacent-column transitions."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from azb.core.errors import BoundaryReachedError, ConfigurationError, UnknownColumnError

DEFAULT_COLUMNS: Tuple[str, ...] = (
    "Backlog",
    "Ready for Development",
    "In Process",
    "Ready to Test",
    "In Test",
    "Deploy",
    "Done",
)

AGILE_COLUMNS: Tuple[str, ...] = ("New", "Active", "Resolved", "Closed")


@dataclass(frozen=True)
class ColumnSequence:
    """Ordered, immutable list of Kanban column names.

    Attributes:
        names: Column names in board order; non-empty, no duplicates
    """

    names: Tuple[str, ...]

    def __post_init__(self):
        """Validate and freeze the column names."""
        names = tuple(self.names)
        if not names:
            raise ConfigurationError("column sequence must contain at least one column")
        seen = set()
        for name in names:
            if not isinstance(name, str) or not name:
                raise ConfigurationError(f"invalid column name {name!r}")
            if name in seen:
                raise ConfigurationError(f"duplicate column name {name!r}")
            seen.add(name)
        object.__setattr__(self, "names", names)

    @classmethod
    def default(cls) -> "ColumnSequence":
        return cls(DEFAULT_COLUMNS)

    @classmethod
    def agile(cls) -> "ColumnSequence":
        """Columns of the default Agile process board."""
        return cls(AGILE_COLUMNS)

    @classmethod
    def from_csv(cls, csv: str) -> "ColumnSequence":
        """Parse a comma-separated column list.

        Surrounding whitespace is trimmed and empty entries are ignored.

        Raises:
            ConfigurationError: If no column names remain
        """
        names = [part.strip() for part in csv.split(",") if part.strip()]
        if not names:
            raise ConfigurationError("AB_COLUMNS contained no valid column names")
        return cls(tuple(names))

    @classmethod
    def of(cls, names: Iterable[str]) -> "ColumnSequence":
        return cls(tuple(names))

    @property
    def first(self) -> str:
        return self.names[0]

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __str__(self) -> str:
        return ", ".join(self.names)


def _index_of(sequence: ColumnSequence, current: str) -> int:
    for index, name in enumerate(sequence.names):
        if name == current:
            return index
    raise UnknownColumnError(current)


def next_column(sequence: ColumnSequence, current: str) -> str:
    """Return the column after ``current``.

    Raises:
        UnknownColumnError: If ``current`` is not in the sequence
        BoundaryReachedError: If ``current`` is the last column
    """
    index = _index_of(sequence, current)
    if index + 1 >= len(sequence.names):
        raise BoundaryReachedError(current, "last")
    return sequence.names[index + 1]


def previous_column(sequence: ColumnSequence, current: str) -> str:
    """Return the column before ``current``.

    Raises:
        UnknownColumnError: If ``current`` is not in the sequence
        BoundaryReachedError: If ``current`` is the first column
    """
    index = _index_of(sequence, current)
    if index == 0:
        raise BoundaryReachedError(current, "first")
    return sequence.names[index - 1]
