import pytest
from unittest.mock import Mock

from patientdash.models import Record


@pytest.fixture
def make_records():
    """
    Build records from disease names (``None`` leaves the field out).
    """
    def _make(*diseases, gender="Female"):
        out = []
        for d in diseases:
            payload = {"Gender": gender}
            if d is not None:
                payload["Disease"] = d
            out.append(Record.model_validate(payload))
        return out
    return _make


@pytest.fixture
def fake_response():
    def _make(status_code=200, payload=None, json_error=None):
        resp = Mock(status_code=status_code)
        if json_error is not None:
            resp.json.side_effect = json_error
        else:
            resp.json.return_value = payload
        return resp
    return _make
