from .debounce import DebouncedValue
from .mutations import CreateFlow, DeleteFlow, EditFlow
from .pagination import Page, clamp_page, paginate, should_show_controls, total_pages
from .search import SearchCoordinator
from .tasks import ApiTaskRunner, TaskRunner
from .vehicle_list import VehicleListState

__all__ = [
    "ApiTaskRunner",
    "CreateFlow",
    "DebouncedValue",
    "DeleteFlow",
    "EditFlow",
    "Page",
    "SearchCoordinator",
    "TaskRunner",
    "VehicleListState",
    "clamp_page",
    "paginate",
    "should_show_controls",
    "total_pages",
]
