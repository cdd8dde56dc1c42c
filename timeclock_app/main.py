"""Application entry point for Time Clock (wxPython edition)."""
from __future__ import annotations

import importlib.util
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from timeclock_app.timeclock import __version__
from timeclock_app.timeclock.controllers import CONFIG_DIR, AppController, ConfigManager
from timeclock_app.timeclock.coordinator import ViewCoordinator
from timeclock_app.timeclock.ledger import Ledger
from timeclock_app.timeclock.timers import SystemClock

if TYPE_CHECKING:  # pragma: no cover - hints only
    from timeclock_app.timeclock.views.main_window import TimeClockApp

LOG_DIR = CONFIG_DIR / "logs"
LOG_FILE = LOG_DIR / "app.log"


def ensure_wx_dependencies() -> None:
    """Exit early with a clear message when wxPython bindings are missing."""

    if importlib.util.find_spec("wx") is None:
        sys.stderr.write(
            "wxPython runtime is missing. Install wxPython (pip install wxPython) and ensure system "
            "GTK3 or native widgets are available.\n"
        )
        sys.exit(1)


def load_app_class() -> type[TimeClockApp]:
    """Import the wx-dependent window module after dependency checks."""

    ensure_wx_dependencies()
    from timeclock_app.timeclock.views.main_window import TimeClockApp as _TimeClockApp

    return _TimeClockApp


def configure_logging() -> None:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(LOG_FILE, maxBytes=1024 * 1024, backupCount=3)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[handler, logging.StreamHandler()],
    )
    logging.info("Time Clock v%s starting", __version__)


def build_controller(config_manager: ConfigManager) -> AppController:
    from reports.excel_export import TimesheetExporter

    cfg = config_manager.config
    clock = SystemClock()
    ledger = Ledger(clock, strict=cfg.strict_ledger)
    coordinator = ViewCoordinator(cfg.last_view, cfg.summary_period)
    exporter = TimesheetExporter(Path(cfg.export_path).expanduser())
    return AppController(ledger, coordinator, config_manager, exporter=exporter, clock=clock)


def main() -> None:
    app_class = load_app_class()
    configure_logging()
    config_manager = ConfigManager()
    controller = build_controller(config_manager)
    app = app_class(controller, config_manager)
    app.run()


if __name__ == "__main__":
    main()
