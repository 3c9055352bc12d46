"""
Page tests: the Streamlit script runs headless through ``AppTest`` with
``PatientAPIClient.fetch`` patched, so no server is needed.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from streamlit.testing.v1 import AppTest

from patientdash.config import API_URL_ENV
from patientdash.ingest.patient_client import FetchError, PatientAPIClient
from patientdash.models import Record

APP_PATH = str(Path(__file__).resolve().parents[1] / "src" / "app.py")

RECORDS = [
    Record.model_validate({"Disease": d, "Gender": "Female", "lat": 1.3, "lon": 103.8})
    for d in ["Flu", "Flu", "Flu", "Flu", "Cold", "Cold", "Cold", "Measles", "Measles", "Mumps"]
]


@pytest.fixture
def fetch(monkeypatch):
    monkeypatch.delenv(API_URL_ENV, raising=False)
    with patch.object(PatientAPIClient, "fetch", return_value=RECORDS) as mock:
        yield mock


@pytest.fixture
def app(fetch):
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    assert not at.exception
    return at


def _labels(at):
    return list(at.session_state["figure"].data[0].x)


def test_first_load_draws_chart_and_map(app, fetch):
    fetch.assert_called_once_with("All")
    assert _labels(app) == ["Flu", "Cold", "Measles", "Mumps"]
    assert len(app.get("plotly_chart")) == 1
    assert len(app.get("deck_gl_json_chart")) == 1
    assert not app.error


def test_server_error_keeps_last_chart(app, fetch):
    fetch.side_effect = FetchError("Network response was not ok: 500", status=500)
    app.button(key="refresh").click().run()
    assert not app.exception
    assert fetch.call_count == 2
    assert "500" in app.error[0].value
    assert _labels(app) == ["Flu", "Cold", "Measles", "Mumps"]
    assert len(app.get("plotly_chart")) == 1
    assert not app.session_state["controller"].loading


def test_limit_change_redraws_without_fetching(app, fetch):
    app.selectbox(key="limit").select(3).run()
    assert not app.exception
    fetch.assert_called_once()
    assert _labels(app) == ["Flu", "Cold", "Measles"]


def test_gender_change_fetches_again(app, fetch):
    fetch.return_value = RECORDS[4:7]
    app.selectbox(key="gender").select("Male").run()
    assert fetch.call_args_list[-1].args == ("Male",)
    assert _labels(app) == ["Cold"]
