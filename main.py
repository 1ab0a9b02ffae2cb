# ===== Part 1: Imports & Logging ============================================
import logging
import sys

from PySide6.QtWidgets import QApplication, QDialog, QMessageBox

from modules.vehicles import build_services
from modules.vehicles.auth import StaticCredentialAuthenticator
from modules.vehicles.panels import LoginDialog, VehicleAdminWindow
from notifications.services import get_notifier
from utils.app_settings import ConfigurationError, load_settings
from utils.state import AppState

logger = logging.getLogger(__name__)


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )


# ===== Part 2: Session loop =================================================
def run(argv: list[str]) -> int:
    """Login, then the dashboard; logging out returns to the login dialog."""
    app = QApplication(argv)

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging("INFO")
        logger.error("Invalid configuration: %s", exc)
        QMessageBox.critical(None, "Configuration Error", str(exc))
        return 2

    configure_logging(settings.log_level)
    logger.info("Vehicle API at %s", settings.api_base_url)

    notifier = get_notifier()
    services = build_services(settings, notifier=notifier)
    authenticator = StaticCredentialAuthenticator.from_settings(settings)
    window = VehicleAdminWindow(services, notifier)

    try:
        while True:
            login = LoginDialog(authenticator)
            if login.exec() != QDialog.DialogCode.Accepted:
                return 0
            window.show_dashboard()
            window.show()
            window.start()
            code = app.exec()
            if AppState.is_authenticated():
                # Window closed without logging out: quit.
                return code
    finally:
        services.shutdown()


# ===== Part 3: Application Entrypoint =======================================
def main() -> None:
    sys.exit(run(sys.argv))


if __name__ == "__main__":
    main()
