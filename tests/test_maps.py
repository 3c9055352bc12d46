import pydeck as pdk

from patientdash.models import Record
from patientdash.viz.maps import MapState, PatientMap


def _located(*diseases):
    return [
        Record.model_validate({"Disease": d, "Latitude": 1.0 + i, "Longitude": 103.0})
        for i, d in enumerate(diseases)
    ]


def test_map_stays_uninitialized_without_container():
    m = PatientMap()
    assert m.update(_located("Flu"), container_present=False) is False
    assert m.state is MapState.UNINITIALIZED
    assert m.markers == []
    assert m.deck() is None


def test_first_update_activates_map():
    m = PatientMap()
    assert m.update(_located("Flu", "Cold"))
    assert m.state is MapState.ACTIVE
    assert len(m.markers) == 2
    assert isinstance(m.deck(), pdk.Deck)


def test_updates_replace_markers():
    m = PatientMap()
    m.update(_located("Flu", "Cold", "Measles"))
    view = m.view_state
    m.update(_located("Flu"))
    m.update(_located("Flu"))
    assert len(m.markers) == 1
    # constructed once
    assert m.view_state is view


def test_active_map_updates_even_if_container_flag_drops():
    m = PatientMap()
    m.update(_located("Flu"))
    assert m.update(_located("Cold", "Flu"), container_present=False)
    assert [mk["disease"] for mk in m.markers] == ["Cold", "Flu"]


def test_records_without_coordinates_get_no_marker():
    m = PatientMap()
    m.update([Record.model_validate({"Disease": "Flu"})] + _located("Cold"))
    assert [mk["disease"] for mk in m.markers] == ["Cold"]
    assert m.markers[0]["position"] == [103.0, 1.0]
