"""Application entry point for Lens Translate."""

from __future__ import annotations

from typing import Optional

from PySide6 import QtWidgets

from .config.manager import ConfigManager
from .core.controller import MainController
from .core.pipeline import build_pipeline
from .core.translator import Translator
from .infra.logging import setup_logging
from .ui.main_window import MainWindow
from .ui.overlay_layer import OverlayLayer


def main(argv: Optional[list[str]] = None) -> int:
    """Launch the desktop application.

    Args:
        argv: Optional Qt command line arguments.

    Returns:
        Process exit code.
    """
    setup_logging()

    app = QtWidgets.QApplication(argv or [])

    config_manager = ConfigManager()
    config = config_manager.config
    translator = Translator(config.api)
    overlay_layer = OverlayLayer(style=config.overlay_style)

    main_window = MainWindow()
    controller = MainController(
        config_manager=config_manager,
        pipeline=build_pipeline(config, translator, sink=overlay_layer, status=main_window.append_log),
        overlay_layer=overlay_layer,
    )
    controller.bind_main_window(main_window)
    main_window.show()

    exit_code = app.exec()
    controller.stop_translation()
    controller.pipeline.stop()
    translator.shutdown()
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
