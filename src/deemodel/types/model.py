"""Types describing a Dee model snapshot on the wire and after decoding."""

from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple, Union

from pydantic import Field, NonNegativeInt, StrictStr, field_validator

from deemodel.constants import CLONE_REPLY_LENGTH
from deemodel.types.base import DeeBaseModel

# A decoded field: a number, a piece of text, or None for an absent slot.
Value = Union[int, float, str, None]
Record = Dict[str, Value]
RawRow = Sequence[Any]


class ModelSchema(DeeBaseModel):
    """Caller-supplied mapping from physical column index to column name.

    Only the listed columns are surfaced in decoded records. Indices need
    not be contiguous or start at zero. Columns are kept ordered by index.

    Example:
        >>> schema = ModelSchema.from_mapping({0: "uri", 4: "title"})
        >>> list(schema.items())
        [(0, 'uri'), (4, 'title')]
    """

    columns: Tuple[Tuple[NonNegativeInt, StrictStr], ...] = ()

    @field_validator("columns", mode="before")
    @classmethod
    def _accept_mapping(cls, v: Any) -> Any:
        if isinstance(v, Mapping):
            return tuple(v.items())
        return v

    @field_validator("columns")
    @classmethod
    def _check_columns(cls, v: Tuple[Tuple[int, str], ...]) -> Tuple[Tuple[int, str], ...]:
        names = [name for _, name in v]
        if len(set(names)) != len(names):
            raise ValueError(f"Column names must be unique, got {names}")
        indices = [index for index, _ in v]
        if len(set(indices)) != len(indices):
            raise ValueError(f"Column indices must be unique, got {indices}")
        return tuple(sorted(v))

    @classmethod
    def from_mapping(cls, mapping: Mapping[int, str]) -> "ModelSchema":
        return cls(columns=mapping)

    def items(self) -> Iterator[Tuple[int, str]]:
        return iter(self.columns)

    @property
    def names(self) -> List[str]:
        return [name for _, name in self.columns]

    def __len__(self) -> int:
        return len(self.columns)


class RawSnapshot(DeeBaseModel):
    """The reply of a ``Clone`` call, as sent by the remote model.

    Attributes:
        swarm_name: Opaque identifier of the dataset instance
        column_types: D-Bus signature of every physical column
        rows: Row data; empty rows are placeholders for removed slots
        positions: Row positions (opaque here)
        change_types: Per-row change tags (opaque here)
        seqnum_before: Seqnum of the model before the last transaction
        seqnum_after: Seqnum the snapshot was taken at
    """

    swarm_name: str
    column_types: List[str]
    rows: List[List[Any]]
    positions: List[int] = Field(default_factory=list)
    change_types: List[int] = Field(default_factory=list)
    seqnum_before: int
    seqnum_after: int

    @classmethod
    def from_reply(cls, reply: Sequence[Any]) -> "RawSnapshot":
        """Build a snapshot from the positional Clone reply.

        Raises:
            ValueError: If the reply does not have the Clone reply shape
        """
        if len(reply) != CLONE_REPLY_LENGTH:
            raise ValueError(
                f"Clone reply must have {CLONE_REPLY_LENGTH} members, got {len(reply)}"
            )
        swarm_name, column_types, rows, positions, change_types, seqnums = reply
        if len(seqnums) != 2:
            raise ValueError(f"Clone reply seqnum pair must have 2 members, got {len(seqnums)}")

        return cls(
            swarm_name=swarm_name,
            column_types=list(column_types),
            rows=[list(row) for row in rows],
            positions=list(positions),
            change_types=list(change_types),
            seqnum_before=seqnums[0],
            seqnum_after=seqnums[1],
        )

    @property
    def field_count(self) -> int:
        """Number of physical columns in every non-placeholder row."""
        return len(self.column_types)


class ModelSnapshot(DeeBaseModel):
    """Decoded records of a model together with the snapshot they came from."""

    swarm_name: str
    seqnum: int
    seqnum_before: int
    column_types: List[str]
    records: List[Dict[str, Any]]
