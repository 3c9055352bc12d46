"""Dashboard controller.

Owns everything that changes while the page is open: the last record set,
the display limit, the loading indicator and the renderer.  Each fetch is
tagged with a generation ticket so that only the most recently *issued*
request may update the chart, whatever order the responses arrive in.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .ingest.patient_client import ALL_GENDERS, FetchError, PatientAPIClient
from .models import RecordSet
from .viz.render import DashboardRenderer

logger = logging.getLogger(__name__)

Notifier = Callable[[FetchError], None]


def _log_only(error: FetchError) -> None:
    logger.error(f"Failed to load data: {error}")


class DashboardController:
    def __init__(
        self,
        client: PatientAPIClient,
        renderer: DashboardRenderer,
        limit: int = 5,
        notifier: Optional[Notifier] = None,
        map_container_present: bool = True,
    ):
        if limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")
        self.client = client
        self.renderer = renderer
        self.limit = limit
        self.notifier = notifier or _log_only
        self.map_container_present = map_container_present
        self.records: RecordSet = []
        self.last_error: Optional[FetchError] = None
        self._generation = 0
        self._outstanding = 0

    @property
    def loading(self) -> bool:
        """True while any request is in flight."""
        return self._outstanding > 0

    def begin_request(self) -> int:
        self._generation += 1
        self._outstanding += 1
        self.last_error = None
        return self._generation

    def _finish(self, ticket: int) -> bool:
        self._outstanding = max(0, self._outstanding - 1)
        return ticket == self._generation

    def complete_request(self, ticket: int, records: RecordSet) -> bool:
        """Apply a successful response; stale tickets are dropped."""
        if not self._finish(ticket):
            logger.warning(f"Discarding stale response {ticket} (latest is {self._generation})")
            return False
        self.records = records
        self.render()
        return True

    def fail_request(self, ticket: int, error: FetchError) -> bool:
        """Surface a failure; the chart keeps its last successful render."""
        if not self._finish(ticket):
            logger.warning(f"Ignoring failure of stale request {ticket}: {error}")
            return False
        logger.error(f"Error fetching data: {error}")
        self.last_error = error
        self.notifier(error)
        return True

    def load(self, gender: str = ALL_GENDERS) -> bool:
        """Fetch for ``gender`` and redraw. Used for initial load, filter change and refresh."""
        ticket = self.begin_request()
        try:
            records = self.client.fetch(gender)
        except FetchError as e:
            self.fail_request(ticket, e)
            return False
        except Exception:
            self._finish(ticket)
            raise
        return self.complete_request(ticket, records)

    def set_limit(self, limit: int) -> None:
        """Change the display limit and redraw from the buffered record set."""
        if limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")
        self.limit = limit
        self.renderer.render_chart(self.records, self.limit)

    def render(self) -> None:
        self.renderer.render_chart(self.records, self.limit)
        self.renderer.render_map(self.records, self.map_container_present)
