import copy

import httpx
import pytest

import n2yo

API_KEY = "test-api-key-123"
BASE_URL = "https://api.n2yo.com/rest/v1/satellite"

TLE_PAYLOAD = {
    "info": {"satid": 25544, "satname": "ISS", "transactionscount": 1},
    "tle": (
        "1 25544U 98067A   23012.34567890  .00012345  00000-0  12345-4 0  9999\r\n"
        "2 25544  51.6412 112.8495 0001928 208.4187 178.9720 15.54106440104358"
    ),
}

POSITIONS_PAYLOAD = {
    "info": {"satid": 25544, "satname": "ISS", "transactionscount": 1},
    "positions": [
        {
            "satlatitude": 40.7128,
            "satlongitude": -74.006,
            "sataltitude": 420,
            "azimuth": 180,
            "elevation": 45,
            "ra": 123.45,
            "dec": 67.89,
            "timestamp": 1672531200,
        }
    ],
}

VISUAL_PASSES_PAYLOAD = {
    "info": {"satid": 25544, "satname": "ISS", "transactionscount": 1, "passescount": 1},
    "passes": [
        {
            "startAz": 180,
            "startAzCompass": "S",
            "startEl": 10,
            "startUTC": 1672531200,
            "maxAz": 270,
            "maxAzCompass": "W",
            "maxEl": 45,
            "maxUTC": 1672531300,
            "endAz": 0,
            "endAzCompass": "N",
            "endEl": 10,
            "endUTC": 1672531400,
            "mag": -1.5,
            "duration": 200,
        }
    ],
}

RADIO_PASSES_PAYLOAD = {
    "info": {"satid": 25544, "satname": "ISS", "transactionscount": 1, "passescount": 1},
    "passes": [
        {
            "startAz": 180,
            "startAzCompass": "S",
            "startUTC": 1672531200,
            "maxAz": 270,
            "maxAzCompass": "W",
            "maxEl": 45,
            "maxUTC": 1672531300,
            "endAz": 0,
            "endAzCompass": "N",
            "endUTC": 1672531400,
        }
    ],
}

ABOVE_PAYLOAD = {
    "info": {"category": "Amateur radio", "transactionscount": 1, "satcount": 1},
    "above": [
        {
            "satid": 12345,
            "satname": "SAT-1",
            "intDesignator": "1990-013C",
            "launchDate": "1990-02-07",
            "satlat": 40,
            "satlng": -75,
            "satalt": 500,
        }
    ],
}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


def json_transport(payload, status_code: int = 200) -> RecordingTransport:
    """Transport answering every request with a copy of *payload*."""
    return RecordingTransport(
        lambda request: httpx.Response(status_code, json=copy.deepcopy(payload))
    )


def make_client(transport: httpx.AsyncBaseTransport, **kwargs) -> n2yo.N2YOClient:
    kwargs.setdefault("rate_limit", n2yo.RateLimitConfig.disabled())
    return n2yo.N2YOClient(API_KEY, transport=transport, **kwargs)


@pytest.fixture
def tle_transport():
    return json_transport(TLE_PAYLOAD)
