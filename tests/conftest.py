from __future__ import annotations

import pytest

from tests.factories import activation_map


@pytest.fixture
def make_maps():
    """Factory: (personality_gates, design_gates, p_line, d_line) -> (personality, design)."""
    def _make(p_gates, d_gates=None, p_line=1, d_line=3):
        d_gates = d_gates if d_gates is not None else p_gates[:2]
        return activation_map(p_gates, sun_line=p_line), activation_map(d_gates, sun_line=d_line)
    return _make


@pytest.fixture
def api_headers():
    return {
        "Authorization": "Bearer test-token",
        "X-Correlation-ID": "11111111-2222-3333-4444-555555555555",
        "X-Transaction-ID": "txn-test-01",
        "X-Session-ID": "sess-test-01",
        "X-App-ID": "pytest",
    }


@pytest.fixture
def birth_payload():
    return {
        "name": "Amit",
        "dateOfBirth": "1991-07-14",
        "timeOfBirth": "22:35:00",
        "placeOfBirth": "Mumbai, IN",
        "timeZone": "Asia/Kolkata",
        "latitude": 19.0760,
        "longitude": 72.8777,
    }
