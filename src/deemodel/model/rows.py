"""Row pruning and decoding.

Raw rows come off the wire as lists of plain values. Rows that do not
span every physical column are dropped, the rest are mapped through the
caller's schema into records.

Values are classified by their lexical shape only, the declared column
type is not consulted. Numeric-looking text such as ``"007"`` therefore
decodes to the number 7.
"""

import re
from typing import Any, List, Optional, Sequence, Union

from deemodel.logging import get_logger
from deemodel.types import ModelSchema, RawRow, Record, Value
from deemodel.utils.decorators import traced

logger = get_logger(__name__)

_NUMERIC_LITERAL = re.compile(
    r"""
    \s*
    [+-]?
    (?:
        (?P<integer>[0-9]+)(?P<fraction>\.[0-9]*)?(?P<exponent>[eE][+-]?[0-9]+)?
      | \.[0-9]+(?:[eE][+-]?[0-9]+)?
      | inf(?:inity)?
      | nan
    )
    \s*
    """,
    re.VERBOSE | re.IGNORECASE | re.ASCII,
)

_ZERO_BUT_TRUE = "0 but true"


def parse_number(text: str) -> Optional[Union[int, float]]:
    """Return the number ``text`` spells, or None if it is not a numeric literal.

    Integral literals become ``int``; literals with a fraction or exponent,
    and ``Inf``/``Infinity``/``NaN``, become ``float``. Surrounding
    whitespace is ignored. The exact string ``"0 but true"`` is zero.
    Integers too long for ``int()`` to convert fall back to ``float``.
    """
    if text == _ZERO_BUT_TRUE:
        return 0
    match = _NUMERIC_LITERAL.fullmatch(text)
    if match is None:
        return None
    if match.group("integer") is not None and not (match.group("fraction") or match.group("exponent")):
        try:
            return int(text)
        except ValueError:
            # over the interpreter's int string conversion digit limit
            pass
    return float(text)


def decode_value(raw: Any) -> Value:
    """Convert one wire value into a number, text or None."""
    if raw is None:
        return None
    # bool before int: bool is an int subclass
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)):
        return raw

    if isinstance(raw, (bytes, bytearray)):
        text = bytes(raw).decode("utf-8", errors="replace")
    elif isinstance(raw, str):
        text = raw
    else:
        text = str(raw)

    number = parse_number(text)
    return text if number is None else number


def extract_valid_rows(field_count: int, rows: Sequence[RawRow]) -> List[RawRow]:
    """Keep the rows that span exactly ``field_count`` columns.

    A model without columns never yields rows. Everything else that does not
    match, including the empty placeholders left by removed rows, is
    dropped without error.
    """
    if not field_count:
        return []
    valid = [row for row in rows if len(row) == field_count]
    if len(valid) != len(rows):
        logger.debug(
            "Dropped %d of %d rows not matching %d columns",
            len(rows) - len(valid), len(rows), field_count,
        )
    return valid


def decode_row(schema: ModelSchema, row: RawRow) -> Record:
    """Map one row through the schema; indices past the row's end give None."""
    record: Record = {}
    for index, name in schema.items():
        raw = row[index] if index < len(row) else None
        record[name] = decode_value(raw)
    return record


@traced(
    span_name="deemodel.rows.decode",
    attribute_getter=lambda schema, rows: {
        "deemodel.schema.columns": len(schema),
        "deemodel.rows.count": len(rows),
    },
)
def decode_rows(schema: ModelSchema, rows: Sequence[RawRow]) -> List[Record]:
    return [decode_row(schema, row) for row in rows]
