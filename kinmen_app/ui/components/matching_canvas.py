"""Render surface and pointer adapter for the matching game."""

from __future__ import annotations

from PySide6.QtCore import QEvent, QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QEventPoint, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from kinmen_app.constants.matching_constants import (
    CONNECTION_LINE_WIDTH_PX,
    ENDPOINT_DRAW_RADIUS_PX,
)
from kinmen_app.core.matching_game import MatchingGame
from kinmen_app.core.models import ConnectionState, EndpointStatus, LineGeometry, Point, Side
from kinmen_app.styling.color_palette import ColorPalette, Theme

_LABEL_WIDTH_PX = 160
_LABEL_GAP_PX = 8
# Touch point ids are offset so they never collide with the mouse pointer id 0.
_TOUCH_POINTER_OFFSET = 1


class MatchingCanvas(QWidget):
    """Draws endpoints and lines, and turns mouse/touch input into pointer phases.

    The game works in percent coordinates; this widget is the only place that
    knows about pixels.
    """

    def __init__(self, game: MatchingGame, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.game = game
        self._theme = Theme.LIGHT

        self.setMinimumSize(480, 320)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMouseTracking(False)
        self.setAttribute(Qt.WA_AcceptTouchEvents, True)
        self.game.on_changed.append(self.update)

    def set_theme(self, theme: Theme) -> None:
        self._theme = theme
        self.update()

    # --- Coordinate conversion ---

    def to_surface(self, point: Point) -> QPointF:
        return QPointF(point.x / 100.0 * self.width(), point.y / 100.0 * self.height())

    def to_content(self, position: QPointF) -> Point:
        width = max(self.width(), 1)
        height = max(self.height(), 1)
        return Point(position.x() / width * 100.0, position.y() / height * 100.0)

    # --- Mouse input ---

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self.game.pointer_down(self.to_content(event.position()))
        event.accept()

    def mouseMoveEvent(self, event) -> None:
        self.game.pointer_move(self.to_content(event.position()))
        event.accept()

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self.game.pointer_up(self.to_content(event.position()))
        event.accept()

    # --- Touch input ---

    def event(self, event) -> bool:
        event_type = event.type()
        if event_type in (QEvent.TouchBegin, QEvent.TouchUpdate, QEvent.TouchEnd, QEvent.TouchCancel):
            self._handle_touch(event)
            event.accept()
            return True
        return super().event(event)

    def _handle_touch(self, event) -> None:
        for touch_point in event.points():
            pointer_id = touch_point.id() + _TOUCH_POINTER_OFFSET
            point = self.to_content(touch_point.position())
            state = touch_point.state()
            if event.type() == QEvent.TouchCancel:
                self.game.pointer_up(Point(-1.0, -1.0), pointer_id)
            elif state == QEventPoint.State.Pressed:
                self.game.pointer_down(point, pointer_id)
            elif state == QEventPoint.State.Updated:
                self.game.pointer_move(point, pointer_id)
            elif state == QEventPoint.State.Released:
                self.game.pointer_up(point, pointer_id)

    # --- Painting ---

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), QColor(ColorPalette.CANVAS_BG.get(self._theme)))

        for connection in self.game.get_connections():
            self._draw_line(painter, connection.line, self._connection_color(connection.state), Qt.SolidLine)

        session = self.game.get_drag_session()
        if session is not None:
            self._draw_line(
                painter,
                session.line,
                QColor(ColorPalette.LINE_DRAWING.get(self._theme)),
                Qt.DashLine,
            )

        for endpoint in self.game.get_endpoints():
            self._draw_endpoint(painter, endpoint)
        painter.end()

    def _draw_line(self, painter: QPainter, line: LineGeometry, color: QColor, style) -> None:
        pen = QPen(color, CONNECTION_LINE_WIDTH_PX, style)
        pen.setCapStyle(Qt.RoundCap)
        painter.setPen(pen)
        painter.drawLine(self.to_surface(line.start), self.to_surface(line.end))

    def _draw_endpoint(self, painter: QPainter, endpoint) -> None:
        center = self.to_surface(endpoint.position)
        color = self._endpoint_color(endpoint.status)
        painter.setPen(QPen(color, 2))
        painter.setBrush(color if endpoint.status is not EndpointStatus.FREE else Qt.NoBrush)
        painter.drawEllipse(center, ENDPOINT_DRAW_RADIUS_PX, ENDPOINT_DRAW_RADIUS_PX)

        painter.setPen(QColor(ColorPalette.TEXT_PRIMARY.get(self._theme)))
        offset = ENDPOINT_DRAW_RADIUS_PX + _LABEL_GAP_PX
        if endpoint.side is Side.LEFT:
            rect = QRectF(center.x() - offset - _LABEL_WIDTH_PX, center.y() - 12, _LABEL_WIDTH_PX, 24)
            alignment = Qt.AlignRight | Qt.AlignVCenter
        else:
            rect = QRectF(center.x() + offset, center.y() - 12, _LABEL_WIDTH_PX, 24)
            alignment = Qt.AlignLeft | Qt.AlignVCenter
        painter.drawText(rect, alignment, endpoint.value)

    def _endpoint_color(self, status: EndpointStatus) -> QColor:
        palette_entry = {
            EndpointStatus.FREE: ColorPalette.ENDPOINT_FREE,
            EndpointStatus.ACTIVE: ColorPalette.ENDPOINT_ACTIVE,
            EndpointStatus.CONNECTED: ColorPalette.ENDPOINT_CONNECTED,
            EndpointStatus.CORRECT: ColorPalette.SUCCESS,
            EndpointStatus.INCORRECT: ColorPalette.ERROR,
        }[status]
        return QColor(palette_entry.get(self._theme))

    def _connection_color(self, state: ConnectionState) -> QColor:
        palette_entry = {
            ConnectionState.PENDING: ColorPalette.ENDPOINT_CONNECTED,
            ConnectionState.CORRECT: ColorPalette.SUCCESS,
            ConnectionState.INCORRECT: ColorPalette.ERROR,
        }[state]
        return QColor(palette_entry.get(self._theme))

    def detach(self) -> None:
        """Stop listening to the game; call before the widget is destroyed."""
        if self.update in self.game.on_changed:
            self.game.on_changed.remove(self.update)
