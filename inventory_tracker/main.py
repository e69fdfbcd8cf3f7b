"""Console entry points for the interactive menu and the HTTP API."""
from __future__ import annotations

from .config import get_settings
from .inventory import InventoryManager
from .log_config import configure_logging
from .menu import InventoryMenu


def run() -> None:
    """Start the interactive inventory menu."""

    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    manager = InventoryManager(
        storage_path=settings.data_file,
        low_stock_threshold=settings.low_stock_threshold,
    )
    try:
        InventoryMenu(manager).run()
    except KeyboardInterrupt:
        print("\nInterrupted. Goodbye!")


def serve() -> None:
    """Serve the JSON API with Flask's built-in server."""

    from .app import create_app

    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    app = create_app(settings=settings)
    app.run(
        host=settings.api_host,
        port=settings.api_port,
        debug=settings.environment == "development",
    )


if __name__ == "__main__":
    run()
