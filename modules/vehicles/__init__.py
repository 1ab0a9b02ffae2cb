"""Vehicle administration module (QtWidgets only).

This package exposes a factory used by ``main.py`` (and by tests) to wire the
API client, background runner, list state, search coordinator and mutation
flows together.  Qt and httpx are imported lazily so module discovery stays
light.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from utils.app_settings import VehicleAdminSettings

__all__ = ["VehicleAdminServices", "build_services"]


@dataclass
class VehicleAdminServices:
    client: Any
    runner: Any
    state: Any
    search: Any
    delete_flow: Any
    edit_flow: Any
    create_flow: Any

    def shutdown(self, timeout_ms: int = 5000) -> None:
        self.search.close()
        shutdown = getattr(self.runner, "shutdown", None)
        if callable(shutdown):
            shutdown(timeout_ms)
        close = getattr(self.client, "close", None)
        if callable(close):
            close()


def build_services(
    settings: "VehicleAdminSettings",
    *,
    client: Any = None,
    runner: Any = None,
    notifier: Any = None,
    parent: Optional[Any] = None,
) -> VehicleAdminServices:
    """Construct the service graph from ``settings``.

    ``client``, ``runner`` and ``notifier`` may be supplied to substitute
    fakes; otherwise the HTTP client, the thread-backed runner and the shared
    notifier are used.
    """

    from .api.client import VehicleApiClient
    from .services.mutations import CreateFlow, DeleteFlow, EditFlow
    from .services.search import SearchCoordinator
    from .services.tasks import ApiTaskRunner
    from .services.vehicle_list import VehicleListState

    client = client or VehicleApiClient.from_settings(settings)
    runner = runner or ApiTaskRunner(parent)
    state = VehicleListState(
        client,
        runner,
        notifier=notifier,
        page_size=settings.page_size,
        discard_stale_responses=settings.discard_stale,
        parent=parent,
    )
    return VehicleAdminServices(
        client=client,
        runner=runner,
        state=state,
        search=SearchCoordinator(settings.debounce_ms, parent=parent),
        delete_flow=DeleteFlow(state, parent),
        edit_flow=EditFlow(state, parent),
        create_flow=CreateFlow(state, parent),
    )
