"""Build the disease bar chart.

Ranked ``(label, count)`` pairs are truncated into a :class:`ChartSpec` and
turned into a Plotly figure styled for the dashboard's transparent cards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import plotly.graph_objects as go

BAR_COLOR = "rgb(49, 130, 189)"


@dataclass(frozen=True)
class ChartSpec:
    """Parallel label/count series handed to the chart."""

    labels: Tuple[str, ...]
    counts: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.labels)


def build_chart_spec(pairs: Sequence[Tuple[str, int]], limit: int) -> ChartSpec:
    """Keep the first ``limit`` pairs (or all of them if there are fewer)."""
    if limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit}")
    top: List[Tuple[str, int]] = list(pairs[:limit])
    return ChartSpec(
        labels=tuple(label for label, _ in top),
        counts=tuple(count for _, count in top),
    )


def disease_bar_figure(spec: ChartSpec, x_title: str = "Disease") -> go.Figure:
    """Return the bar chart for ``spec``; an empty spec gives an empty series."""
    fig = go.Figure(
        data=[
            go.Bar(
                x=list(spec.labels),
                y=list(spec.counts),
                name="",
                marker=dict(color=BAR_COLOR),
            )
        ]
    )
    fig.update_layout(
        title=dict(text=f"Patient Diseases (Top {len(spec)})"),
        barmode="group",
        xaxis=dict(title=dict(text=x_title), tickangle=-45),
        yaxis=dict(title=dict(text="Count")),
        legend=dict(x=0, y=1),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        # bottom margin leaves room for the angled labels
        margin=dict(l=50, r=50, b=150, t=50, pad=4),
    )
    return fig
