"""Snapshot fetch-and-decode pipeline for remote Dee models.

Stages, in call order:
    - ``model_object_path``: bus name -> object path
    - ``fetch_snapshot``: the ``Clone`` call
    - ``validate_seqnum``: freshness check against the caller's seqnum
    - ``extract_valid_rows``: drop placeholders and malformed rows
    - ``decode_rows``: map rows through the schema into records

``DeeModel`` chains them; each stage is usable on its own.
"""

from deemodel.model.accessor import DeeModel, create
from deemodel.model.address import model_object_path
from deemodel.model.fetcher import fetch_snapshot
from deemodel.model.rows import (
    decode_row,
    decode_rows,
    decode_value,
    extract_valid_rows,
    parse_number,
)
from deemodel.model.validator import validate_seqnum

__all__ = [
    "DeeModel",
    "create",
    "model_object_path",
    "fetch_snapshot",
    "validate_seqnum",
    "extract_valid_rows",
    "decode_row",
    "decode_rows",
    "decode_value",
    "parse_number",
]
