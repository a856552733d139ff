"""Tests for typed response construction."""

import copy

import pytest

from n2yo import (
    AboveResponse,
    PositionsResponse,
    RadioPassesResponse,
    ResponseInfo,
    SatellitePass,
    TleResponse,
    VisualPassesResponse,
)

from conftest import (
    ABOVE_PAYLOAD,
    POSITIONS_PAYLOAD,
    RADIO_PASSES_PAYLOAD,
    TLE_PAYLOAD,
    VISUAL_PASSES_PAYLOAD,
)


class TestResponseInfo:
    def test_from_json_dict(self):
        info = ResponseInfo.from_json_dict({"satid": 1, "satname": "X", "transactionscount": 9})
        assert info.satid == 1
        assert info.satname == "X"
        assert info.transactionscount == 9
        assert info.passescount is None

    def test_none(self):
        assert ResponseInfo.from_json_dict(None) == ResponseInfo()


class TestTleResponse:
    def test_from_json_dict(self):
        tle = TleResponse.from_json_dict(TLE_PAYLOAD)
        assert tle.info.satname == "ISS"
        line1, line2 = tle.lines()
        assert line1.startswith("1 25544U")
        assert line2.startswith("2 25544")

    def test_str(self):
        s = str(TleResponse.from_json_dict(TLE_PAYLOAD))
        assert "ISS" in s
        assert "25544" in s


class TestPasses:
    def test_visual_pass_fields(self):
        resp = VisualPassesResponse.from_json_dict(VISUAL_PASSES_PAYLOAD)
        p = resp.passes[0]
        assert isinstance(p, SatellitePass)
        assert p.start_az_compass == "S"
        assert p.start_el == 10
        assert p.duration == 200

    def test_radio_pass_optional_fields_absent(self):
        p = RadioPassesResponse.from_json_dict(RADIO_PASSES_PAYLOAD).passes[0]
        assert p.start_el is None
        assert p.end_el is None
        assert p.duration is None

    def test_input_not_mutated(self):
        payload = {"info": {"satid": 1, "passescount": 3}}
        before = copy.deepcopy(payload)
        resp = VisualPassesResponse.from_json_dict(payload)
        assert resp.info.passescount == 0
        assert payload == before


class TestPositionsAndAbove:
    def test_positions(self):
        resp = PositionsResponse.from_json_dict(POSITIONS_PAYLOAD)
        assert resp.positions[0].timestamp == 1672531200

    def test_missing_position_key_raises(self):
        with pytest.raises(KeyError):
            PositionsResponse.from_json_dict({"positions": [{}]})

    def test_above(self):
        resp = AboveResponse.from_json_dict(ABOVE_PAYLOAD)
        assert resp.above[0].int_designator == "1990-013C"
        assert resp.info.satcount == 1

    def test_above_category_from_table(self):
        resp = AboveResponse.from_json_dict({"info": {"transactionscount": 1}}, 18)
        assert resp.info.category == "Amateur radio"
        assert resp.above == []
