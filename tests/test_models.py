"""Tests for transfer and category records."""

import json

import pytest

from qbit import Category, TorrentState, Transfer, decode_categories, decode_transfers

from .conftest import SAMPLE_CATEGORIES, SAMPLE_TRANSFER


class TestTransfer:
    """Test decoding of torrents/info records."""

    def test_decodes_every_field(self):
        # Through a JSON text round trip, the way the payload arrives
        transfer = Transfer.from_api_response(json.loads(json.dumps(SAMPLE_TRANSFER)))

        assert transfer.hash == "dd8255ecdc7ca55fb0bbf81323d87062db1f6d1c"
        assert transfer.name == "Big.Buck.Bunny.2008.1080p"
        assert transfer.category == "movies"
        assert transfer.tags == "hd, archive"
        assert transfer.state == "stalledUP"
        assert transfer.auto_tmm is True
        assert transfer.force_start is False
        assert transfer.seq_dl is False
        assert transfer.super_seeding is False
        assert transfer.added_on == 1700000000
        assert transfer.completion_on == 1700003600
        assert transfer.dlspeed == 0
        assert transfer.upspeed == 2048
        assert transfer.eta == 8640000
        assert transfer.uploaded == 5436943572

    def test_preserves_float_precision(self):
        transfer = Transfer.from_api_response(json.loads(json.dumps(SAMPLE_TRANSFER)))

        assert transfer.progress == 0.9999999999999999
        assert transfer.ratio == 1.2345678901234567
        assert transfer.max_ratio == 2.5

    def test_preserves_large_counters(self):
        transfer = Transfer.from_api_response(json.loads(json.dumps(SAMPLE_TRANSFER)))

        assert transfer.total_size == 9007199254740993
        assert transfer.size == 4404019200

    def test_integer_json_values_fill_float_fields(self):
        transfer = Transfer.from_api_response({"availability": -1, "ratio_limit": -2})

        assert transfer.availability == -1.0
        assert isinstance(transfer.availability, float)
        assert transfer.ratio_limit == -2.0

    def test_missing_and_null_fields_take_zero_values(self):
        transfer = Transfer.from_api_response({"hash": "abc", "category": None})

        assert transfer.hash == "abc"
        assert transfer.category == ""
        assert transfer.size == 0
        assert transfer.progress == 0.0
        assert transfer.auto_tmm is False

    def test_unknown_fields_are_ignored(self):
        transfer = Transfer.from_api_response({"hash": "abc", "popularity": 1.5})

        assert transfer.hash == "abc"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("size", "4404019200"),
            ("size", 1.5),
            ("size", True),
            ("progress", "0.5"),
            ("auto_tmm", 1),
            ("name", 42),
        ],
    )
    def test_wrong_types_are_rejected(self, field, value):
        with pytest.raises(TypeError):
            Transfer.from_api_response({field: value})

    def test_non_object_is_rejected(self):
        with pytest.raises(TypeError):
            Transfer.from_api_response(["abc"])

    @pytest.mark.parametrize(
        "state,expected",
        [
            ("downloading", TorrentState.DOWNLOADING),
            ("stalledUP", TorrentState.SEEDING),
            ("pausedDL", TorrentState.PAUSED),
            ("queuedDL", TorrentState.QUEUED),
            ("missingFiles", TorrentState.ERROR),
            ("somethingNew", TorrentState.UNKNOWN),
        ],
    )
    def test_state_enum(self, state, expected):
        assert Transfer(state=state).state_enum is expected


class TestDecoders:
    """Test whole-payload decoders."""

    def test_decode_transfers(self):
        transfers = decode_transfers([SAMPLE_TRANSFER, {"hash": "def"}])

        assert [t.hash for t in transfers] == [SAMPLE_TRANSFER["hash"], "def"]

    def test_decode_transfers_requires_array(self):
        with pytest.raises(TypeError):
            decode_transfers({"hash": "abc"})

    def test_decode_categories(self):
        categories = decode_categories(SAMPLE_CATEGORIES)

        assert categories["movies"] == Category(name="movies", save_path="/downloads/movies")
        assert categories["tv"].save_path == ""

    def test_decode_categories_requires_object(self):
        with pytest.raises(TypeError):
            decode_categories([])

    def test_category_rejects_non_object(self):
        with pytest.raises(TypeError):
            decode_categories({"movies": "/downloads/movies"})
