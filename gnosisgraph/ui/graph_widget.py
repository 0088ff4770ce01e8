from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import QTimer, QElapsedTimer, Qt, QPointF, QRectF, pyqtSignal
from PyQt6.QtGui import QPainter, QColor, QPen, QBrush, QFont, QTransform

import math

from ..graph_model import SelectionState


class GraphWidget(QWidget):
    """Frame driver for a GraphEngine.

    Ticks the engine from a ~60 FPS timer, draws the x/y projection of the
    layout and turns mouse input into drag and select calls.
    """
    nodeSelected = pyqtSignal(str)  # uid, or "" when the selection is cleared

    def __init__(self, engine, parent=None):
        super().__init__(parent)
        self.engine = engine

        # Rendering settings (world units)
        self.node_radius = 0.5
        self.selected_radius = 0.75
        self.node_color = QColor("#60A5FA")
        self.selected_color = QColor("#3B82F6")
        self.node_text_color = QColor("#222222")
        self.edge_color = QColor("#999999")
        self.bg_color = QColor("#ffffff")

        # Camera
        self.offset_x = 0
        self.offset_y = 0
        self.scale = 40.0
        self.min_scale = 5.0
        self.max_scale = 400.0

        # Interaction
        self.pressed_uid = None
        self.press_world = None
        self.drag_moved = False
        self.click_slop = 0.1  # world units a press may travel and still count as a click
        self.panning = False
        self.last_mouse_pos = QPointF()

        # Physics timer
        self.clock = QElapsedTimer()
        self.clock.start()
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.physics_loop)
        self.timer.start(16)  # ~60 FPS

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    def physics_loop(self):
        self.engine.tick(self.clock.elapsed() / 1000.0)
        self.update()

    def restart(self):
        self.engine.restart()
        self.clock.restart()
        self.nodeSelected.emit("")

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), self.bg_color)

        transform = QTransform()
        transform.translate(self.width() / 2 + self.offset_x, self.height() / 2 + self.offset_y)
        transform.scale(self.scale, self.scale)
        painter.setTransform(transform)

        # Edges
        pen = QPen(self.edge_color, 2)
        pen.setCosmetic(True)
        painter.setPen(pen)
        for edge in self.engine.edges:
            n1 = self.engine.nodes[edge.source]
            n2 = self.engine.nodes[edge.target]
            painter.drawLine(QPointF(n1.x, n1.y), QPointF(n2.x, n2.y))

        # Nodes, far ones first
        font = QFont("Arial", 10)
        for node in sorted(self.engine.nodes.values(), key=lambda n: n.z):
            selected = node.selection is SelectionState.SELECTED
            radius = self.selected_radius if selected else self.node_radius
            color = self.selected_color if selected else QColor(node.data.get("color", self.node_color))

            painter.setBrush(QBrush(color))
            painter.setPen(Qt.PenStyle.NoPen)
            painter.drawEllipse(QPointF(node.x, node.y), radius, radius)

            # Labels in screen space so they don't scale with zoom
            painter.save()
            painter.resetTransform()
            center = transform.map(QPointF(node.x, node.y))
            painter.setFont(font)
            painter.setPen(self.node_text_color)
            painter.drawText(QRectF(center.x() - 60, center.y() + radius * self.scale + 2, 120, 20),
                             Qt.AlignmentFlag.AlignCenter, node.label)
            painter.restore()

    def node_at(self, wx, wy):
        """Topmost node under the world point, or None."""
        hit = None
        for node in self.engine.nodes.values():
            dx = wx - node.x
            dy = wy - node.y
            if math.sqrt(dx * dx + dy * dy) <= self.node_radius:
                if hit is None or node.z > hit.z:
                    hit = node
        return hit

    # Pointer handling in world coordinates

    def press_at(self, wx, wy):
        node = self.node_at(wx, wy)
        if node is None:
            return False
        if not self.engine.drag_start(node.uid, (wx, wy)):
            # Another drag owns the pin
            return False
        self.pressed_uid = node.uid
        self.press_world = (wx, wy)
        self.drag_moved = False
        return True

    def move_to(self, wx, wy):
        if self.pressed_uid is None:
            return
        px, py = self.press_world
        if math.hypot(wx - px, wy - py) > self.click_slop:
            self.drag_moved = True
        self.engine.drag_move((wx, wy))

    def release(self):
        if self.pressed_uid is None:
            return
        uid = self.pressed_uid
        self.engine.drag_end()
        self.pressed_uid = None
        if not self.drag_moved:
            self.engine.attempt_select(uid)
            self.nodeSelected.emit(self.engine.selected_uid or "")

    def mousePressEvent(self, event):
        mouse_pos = event.position()

        if event.button() == Qt.MouseButton.RightButton:
            self.panning = True
            self.last_mouse_pos = mouse_pos
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            return

        if event.button() == Qt.MouseButton.LeftButton:
            world_pos = self.screen_to_world(mouse_pos)
            if self.press_at(world_pos.x(), world_pos.y()):
                self.setCursor(Qt.CursorShape.PointingHandCursor)

    def mouseMoveEvent(self, event):
        mouse_pos = event.position()

        if self.panning:
            delta = mouse_pos - self.last_mouse_pos
            self.offset_x += delta.x()
            self.offset_y += delta.y()
            self.last_mouse_pos = mouse_pos
            self.update()

        elif self.pressed_uid is not None:
            world_pos = self.screen_to_world(mouse_pos)
            self.move_to(world_pos.x(), world_pos.y())
            self.update()

    def mouseReleaseEvent(self, event):
        self.release()
        self.panning = False
        self.setCursor(Qt.CursorShape.ArrowCursor)

    def wheelEvent(self, event):
        angle = event.angleDelta().y()
        factor = 1.1 if angle > 0 else 0.9

        new_scale = self.scale * factor
        if self.min_scale <= new_scale <= self.max_scale:
            self.scale = new_scale
            self.update()

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_R:
            self.restart()
        else:
            super().keyPressEvent(event)

    def screen_to_world(self, screen_pos):
        # screen = (world * scale) + offset + center
        # world = (screen - center - offset) / scale
        center_x = self.width() / 2
        center_y = self.height() / 2

        wx = (screen_pos.x() - center_x - self.offset_x) / self.scale
        wy = (screen_pos.y() - center_y - self.offset_y) / self.scale
        return QPointF(wx, wy)
