"""Unit tests for snapshot freshness validation."""

import pytest

from deemodel.common.exceptions import DeeModelError, ErrorCode
from deemodel.model import validate_seqnum
from deemodel.types import RawSnapshot

from conftest import clone_reply


@pytest.fixture
def snapshot():
    return RawSnapshot.from_reply(clone_reply(["s"], [["a"]], seqnum_after=7))


class TestValidateSeqnum:

    def test_no_expectation_passes_through(self, snapshot):
        assert validate_seqnum(None, snapshot) is snapshot

    def test_matching_seqnum_passes_through(self, snapshot):
        assert validate_seqnum(7, snapshot) is snapshot

    def test_mismatch_is_stale(self, snapshot):
        with pytest.raises(DeeModelError) as exc_info:
            validate_seqnum(8, snapshot)

        error = exc_info.value
        assert error.error_code == ErrorCode.STALE_SNAPSHOT
        assert error.is_stale_snapshot
        assert error.message == "This seqnum is not expected."
        assert error.details == {"expected_seqnum": 8, "actual_seqnum": 7}
        assert not error.is_retryable

    def test_seqnum_before_is_not_compared(self, snapshot):
        with pytest.raises(DeeModelError):
            validate_seqnum(snapshot.seqnum_before, snapshot)
