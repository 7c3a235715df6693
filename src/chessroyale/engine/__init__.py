"""Event-loop integrations: run the controller's timers on a Qt loop."""

from chessroyale.engine.qt_bridge import QtScheduler

__all__ = ["QtScheduler"]
