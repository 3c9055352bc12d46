"""The command-line interface for this project"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import plotly.graph_objects as go
import typer

from .aggregate import aggregate, counts_frame
from .config import Config, load_config
from .dashboard import DashboardController
from .ingest.patient_client import ALL_GENDERS, FetchError, PatientAPIClient
from .logging_setup import setup_logging
from .viz.charts import build_chart_spec
from .viz.render import DashboardRenderer


app = typer.Typer(add_completion=False, help="Patient disease dashboard command-line interface")


def _client(cfg: Config, base_url: Optional[str]) -> PatientAPIClient:
    return PatientAPIClient(
        base_url or cfg.api.get("base_url", "http://localhost:5000"),
        endpoint=cfg.api.get("endpoint", "/api/patients"),
        timeout=float(cfg.api.get("timeout_s", 10)),
    )


def _fail(e: FetchError) -> None:
    typer.secho(f"Failed to load data: {e}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def _setup() -> None:
    setup_logging(load_config().logging.get("level", "INFO"))


@app.command("counts")
def counts(
    gender: str = typer.Option(ALL_GENDERS, help="Gender filter; 'All' disables filtering"),
    limit: int = typer.Option(5, min=1, help="Number of top diseases to show"),
    base_url: Optional[str] = typer.Option(None, help="Override api.base_url from the config"),
) -> None:
    """Print the most frequent diseases for the selected gender."""
    cfg = load_config()
    field = cfg.dashboard.get("category_field", "disease")
    with _client(cfg, base_url) as client:
        try:
            records = client.fetch(gender)
        except FetchError as e:
            _fail(e)
    pairs = aggregate(records, field)
    spec = build_chart_spec(pairs, limit)
    table = counts_frame(list(zip(spec.labels, spec.counts)))
    typer.echo(f"{len(records)} records, {len(pairs)} distinct values of '{field}'")
    if not table.empty:
        typer.echo(table.to_string(index=False))


@app.command("chart")
def chart(
    out: Path = typer.Option(Path("patient_diseases.html"), help="Where to write the HTML chart"),
    gender: str = typer.Option(ALL_GENDERS, help="Gender filter; 'All' disables filtering"),
    limit: Optional[int] = typer.Option(None, min=1, help="Number of bars (default from config)"),
    base_url: Optional[str] = typer.Option(None, help="Override api.base_url from the config"),
) -> None:
    """Render the disease bar chart to a standalone HTML file."""
    cfg = load_config()

    def write_figure(fig: go.Figure) -> None:
        out.parent.mkdir(parents=True, exist_ok=True)
        fig.write_html(str(out), include_plotlyjs="cdn", config={"responsive": True})

    renderer = DashboardRenderer(write_figure, category_field=cfg.dashboard.get("category_field", "disease"))
    with _client(cfg, base_url) as client:
        controller = DashboardController(
            client,
            renderer,
            limit=limit or int(cfg.dashboard.get("default_limit", 5)),
            notifier=_fail,
            map_container_present=False,
        )
        controller.load(gender)
    typer.echo(f"Chart saved to {out}")


@app.command("snapshot")
def snapshot(
    out: Path = typer.Argument(..., help="Path to write the normalised records as JSON"),
    gender: str = typer.Option(ALL_GENDERS, help="Gender filter; 'All' disables filtering"),
    base_url: Optional[str] = typer.Option(None, help="Override api.base_url from the config"),
) -> None:
    """Save the fetched records as JSON, normalised to the dashboard's field names.

    Keys become ``disease``, ``gender``, ``latitude`` and ``longitude``; missing
    categories are written as ``"undefined"``.  Other fields pass through.
    """
    cfg = load_config()
    with _client(cfg, base_url) as client:
        try:
            records = client.fetch(gender)
        except FetchError as e:
            _fail(e)
    out.parent.mkdir(parents=True, exist_ok=True)
    payload = [r.model_dump(mode="json") for r in records]
    out.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    typer.echo(f"Saved {len(records)} normalised records to {out}")


def main() -> None:
    """Entry point for ``python -m patientdash.cli``."""
    app()


if __name__ == "__main__":
    main()
