"""Patient marker map.

The map is built lazily: nothing exists until the first record set arrives
while a map container is on the page.  From then on every update swaps the
whole marker list, so markers never accumulate across fetches.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Dict, List, Optional, Sequence

import pydeck as pdk  # type: ignore[import]

from ..models import Record

logger = logging.getLogger(__name__)


class MapState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"


class PatientMap:
    """Lazily constructed marker map owned by the renderer."""

    def __init__(
        self,
        latitude: float = 20.0,
        longitude: float = 0.0,
        zoom: float = 1.5,
        marker_radius: float = 20000,
        marker_color: Optional[Sequence[int]] = None,
        map_style: str = pdk.map_styles.CARTO_LIGHT,
    ):
        self.latitude = latitude
        self.longitude = longitude
        self.zoom = zoom
        self.marker_radius = marker_radius
        self.marker_color = list(marker_color or [49, 130, 189, 160])
        self.map_style = map_style
        self.view_state: Optional[pdk.ViewState] = None
        self.markers: List[Dict[str, Any]] = []

    @property
    def state(self) -> MapState:
        return MapState.ACTIVE if self.view_state is not None else MapState.UNINITIALIZED

    def _initialize(self) -> None:
        self.view_state = pdk.ViewState(
            latitude=self.latitude,
            longitude=self.longitude,
            zoom=self.zoom,
            pitch=0,
            bearing=0,
        )
        logger.info("Map initialized")

    def update(self, records: Sequence[Record], container_present: bool = True) -> bool:
        """Bring the map in line with ``records``.

        Returns False (and does nothing) while uninitialized without a container.
        """
        if self.state is MapState.UNINITIALIZED:
            if not container_present:
                return False
            self._initialize()
        self.clear_markers()
        self.add_markers(records)
        return True

    def clear_markers(self) -> None:
        self.markers = []

    def add_markers(self, records: Sequence[Record]) -> None:
        for r in records:
            if not r.has_location:
                continue
            self.markers.append(
                {
                    "position": [r.longitude, r.latitude],
                    "disease": r.disease,
                    "gender": r.gender,
                }
            )
        logger.debug(f"{len(self.markers)} markers on map")

    def deck(self) -> Optional[pdk.Deck]:
        """Return the pydeck chart for the current markers, or None before initialization."""
        if self.view_state is None:
            return None
        layer = pdk.Layer(
            "ScatterplotLayer",
            self.markers,
            pickable=True,
            get_position="position",
            get_fill_color=self.marker_color,
            get_radius=self.marker_radius,
            radius_min_pixels=3,
        )
        tooltip = {
            "html": "<b>Disease:</b> {disease} <br/> <b>Gender:</b> {gender}",
            "style": {"backgroundColor": "steelblue", "color": "white"},
        }
        return pdk.Deck(
            layers=[layer],
            initial_view_state=self.view_state,
            tooltip=tooltip,
            map_style=self.map_style,
        )
