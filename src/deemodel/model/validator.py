from typing import Optional

from deemodel.common.exceptions import stale_snapshot_error
from deemodel.types import RawSnapshot


def validate_seqnum(expected_seqnum: Optional[int], snapshot: RawSnapshot) -> RawSnapshot:
    """Check that a snapshot was taken at the seqnum the caller expects.

    Args:
        expected_seqnum: Seqnum the caller wants, or None to accept any
        snapshot: Freshly fetched snapshot

    Returns:
        The snapshot, unchanged

    Raises:
        DeeModelError: STALE_SNAPSHOT if the snapshot's resulting seqnum
            differs from ``expected_seqnum``. No retry is attempted.
    """
    if expected_seqnum is None:
        return snapshot
    if snapshot.seqnum_after != expected_seqnum:
        raise stale_snapshot_error(expected_seqnum, snapshot.seqnum_after)
    return snapshot
