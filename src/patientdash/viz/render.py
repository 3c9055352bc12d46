"""Glue between aggregated counts and the drawing surfaces."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import plotly.graph_objects as go

from ..aggregate import DEFAULT_FIELD, aggregate
from ..models import Record
from .charts import ChartSpec, build_chart_spec, disease_bar_figure
from .maps import PatientMap

logger = logging.getLogger(__name__)

ChartSink = Callable[[go.Figure], None]


class DashboardRenderer:
    """Draws the chart into one slot and keeps the (optional) map current.

    ``chart_sink`` receives each new figure and must replace whatever was
    previously drawn in its slot.
    """

    def __init__(
        self,
        chart_sink: ChartSink,
        patient_map: Optional[PatientMap] = None,
        category_field: str = DEFAULT_FIELD,
    ):
        self.chart_sink = chart_sink
        self.patient_map = patient_map if patient_map is not None else PatientMap()
        self.category_field = category_field

    def render_chart(self, records: Sequence[Record], limit: int) -> ChartSpec:
        pairs = aggregate(records, self.category_field)
        spec = build_chart_spec(pairs, limit)
        logger.debug(f"Rendering {len(spec)} of {len(pairs)} categories")
        self.chart_sink(disease_bar_figure(spec))
        return spec

    def render_map(self, records: Sequence[Record], container_present: bool = True) -> bool:
        return self.patient_map.update(records, container_present)
