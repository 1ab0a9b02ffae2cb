"""Public exports for vehicle panels."""

from .action_menu import ActionMenuButton
from .admin_window import VehicleAdminWindow
from .dashboard_panel import VehicleDashboardPanel, VehicleTableModel
from .delete_dialog import DeleteConfirmationDialog
from .login_dialog import LoginDialog
from .vehicle_form_dialog import VehicleFormDialog

__all__ = [
    "ActionMenuButton",
    "DeleteConfirmationDialog",
    "LoginDialog",
    "VehicleAdminWindow",
    "VehicleDashboardPanel",
    "VehicleFormDialog",
    "VehicleTableModel",
]
