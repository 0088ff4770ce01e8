import sys
import logging
from PyQt6.QtWidgets import QApplication, QMainWindow, QVBoxLayout, QWidget, QLabel, QSplitter, QTextEdit
from PyQt6.QtCore import Qt

from .config import LayoutConfig
from .graph_engine import GraphEngine
from .samples import SAMPLES
from .ui.graph_widget import GraphWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, engine, title="Gnosis Graph"):
        super().__init__()
        self.setWindowTitle(title)
        self.resize(1200, 800)
        self.engine = engine
        self.init_ui()

    def init_ui(self):
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)

        self.main_layout = QVBoxLayout(self.central_widget)
        self.main_layout.setContentsMargins(0, 0, 0, 0)

        self.splitter = QSplitter(Qt.Orientation.Horizontal)
        self.main_layout.addWidget(self.splitter)

        # --- Left: info panel ---
        self.left_container = QWidget()
        self.left_layout = QVBoxLayout(self.left_container)
        self.left_layout.setContentsMargins(0, 0, 0, 0)
        self.left_layout.setSpacing(0)

        self.info_label = QLabel("Drag nodes to move them, click to select. R restarts the layout.")
        self.info_label.setWordWrap(True)
        self.info_label.setStyleSheet("padding: 5px; background-color: #f3f4f6; color: #333; border-bottom: 1px solid #e5e7eb;")
        self.left_layout.addWidget(self.info_label)

        self.details_panel = QTextEdit()
        self.details_panel.setReadOnly(True)
        self.details_panel.setText("Select a node to view details.")
        self.left_layout.addWidget(self.details_panel)
        self.splitter.addWidget(self.left_container)

        # --- Right: graph ---
        self.graph_widget = GraphWidget(self.engine)
        self.graph_widget.nodeSelected.connect(self.on_node_selected)
        self.splitter.addWidget(self.graph_widget)
        self.splitter.setSizes([300, 900])

    def on_node_selected(self, uid):
        node = self.engine.nodes.get(uid)
        if node is None:
            self.details_panel.setText("Select a node to view details.")
            return

        neighbors = [self.engine.nodes[n].label for n in self.engine.graph.neighbors(uid)]
        lines = [f"<h3>{node.label}</h3>"]
        if node.data.get("description"):
            lines.append(f"<p>{node.data['description']}</p>")
        if node.data.get("group"):
            lines.append(f"<p><b>Group:</b> {node.data['group']}</p>")
        lines.append(f"<p><b>Connected to:</b> {', '.join(neighbors) or 'nothing'}</p>")
        self.details_panel.setHtml("\n".join(lines))


def main():
    logging.basicConfig(level=logging.INFO)

    sample = sys.argv[1] if len(sys.argv) > 1 else "agile"
    if sample not in SAMPLES:
        print(f"Unknown sample {sample!r}, choose from: {', '.join(SAMPLES)}", file=sys.stderr)
        sys.exit(2)

    nodes, edges = SAMPLES[sample]()
    engine = GraphEngine(config=LayoutConfig())
    engine.load(nodes, edges)
    logger.info(f"Showing sample {sample!r}")

    app = QApplication(sys.argv)
    window = MainWindow(engine)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
