import sys
import json

from PyQt5.QtWidgets import (
    QApplication, QMainWindow, QWidget, QHBoxLayout, QTextEdit,
    QVBoxLayout, QLabel, QPushButton, QGraphicsView, QGraphicsScene, QInputDialog
)
from PyQt5.QtGui import QBrush, QColor, QPen
from PyQt5.QtCore import Qt
import numpy as np
from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

import constants as C
from logger import logger, set_debug
from trees.metrics import benchmark_quadtree, analyze_quadtree_instance
from trees.Quad_tree import QuadTree
from Nodes.Point import Point
from Nodes.Rectangle_Q import Rectangle_Q


def rect_top_left(record):
    """Esquina superior izquierda (x, y) de un registro de rectángulo serializado."""
    x_start = record['center']['x'] - record['width'] / 2
    y_start = record['center']['y'] - record['height'] / 2
    return x_start, y_start


def parse_range(text):
    """Convierte 'cx, cy, w, h' en un Rectangle_Q. Lanza ValueError si el texto no es válido."""
    parts = [p for p in text.replace(';', ',').split(',') if p.strip()]
    if len(parts) != 4:
        raise ValueError(f"Se esperaban 4 valores (cx, cy, w, h), se recibieron {len(parts)}")
    cx, cy, w, h = (int(p.strip()) for p in parts)
    return Rectangle_Q(Point(cx, cy), w, h)


class QuadCanvas(QGraphicsView):
    """Lienzo donde se dibuja el quadtree; arrastrar con el ratón inserta puntos."""

    def __init__(self, window):
        super().__init__()
        self.host = window
        self.is_drawing = False

        self.graphics_scene = QGraphicsScene(0, 0, C.CANVAS_WIDTH, C.CANVAS_HEIGHT)
        self.graphics_scene.setBackgroundBrush(QBrush(QColor(C.BACKGROUND_COLOR)))
        self.setScene(self.graphics_scene)
        self.setSceneRect(0, 0, C.CANVAS_WIDTH, C.CANVAS_HEIGHT)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.is_drawing = True
            self._insert_at(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.is_drawing = False

    def mouseMoveEvent(self, event):
        if self.is_drawing:
            self._insert_at(event)

    def _insert_at(self, event):
        pos = self.mapToScene(event.pos())
        self.host.insert_point(int(pos.x()), int(pos.y()))

    def draw(self, data, matches=()):
        self.graphics_scene.clear()

        # puntos
        brush = QBrush(QColor(C.POINT_COLOR))
        r = C.POINT_RADIUS
        for point in data['points']:
            self.graphics_scene.addEllipse(point['x'] - r, point['y'] - r, 2 * r, 2 * r, QPen(Qt.NoPen), brush)

        # límites de cada nodo
        pen = QPen(QColor(C.RECT_COLOR))
        for rect in data['rects']:
            x_start, y_start = rect_top_left(rect)
            self.graphics_scene.addRect(x_start, y_start, rect['width'], rect['height'], pen, QBrush(Qt.NoBrush))

        # resultado de la última consulta por rango
        match_brush = QBrush(QColor(C.MATCH_COLOR))
        for point in matches:
            self.graphics_scene.addEllipse(point['x'] - r, point['y'] - r, 2 * r, 2 * r, QPen(Qt.NoPen), match_brush)


class QuadTreeWindow(QMainWindow):
    def __init__(self):
        super().__init__()

        self.setWindowTitle("QuadTree interactivo")
        self.setGeometry(C.WINDOW_X, C.WINDOW_Y, C.CANVAS_WIDTH + 500, C.CANVAS_HEIGHT + 40)

        # límite raíz = todo el lienzo
        center = Point(C.CANVAS_WIDTH // 2, C.CANVAS_HEIGHT // 2)
        self.boundary = Rectangle_Q(center, C.CANVAS_WIDTH, C.CANVAS_HEIGHT)
        self.quadtree = QuadTree(self.boundary, C.QUADTREE_CAPACITY)
        self.matches = []

        self.canvas_view = QuadCanvas(self)

        # ========= PANEL LATERAL =========
        text_panel = QTextEdit()
        text_panel.setPlaceholderText("Resultados de la consulta...")
        text_panel.setReadOnly(True)

        btn_clear = QPushButton("Limpiar árbol")
        btn_clear.clicked.connect(self.clear_tree)

        info_label = QLabel("Haz clic y arrastra sobre el lienzo para insertar puntos.\n"
                            "Los rectángulos muestran los límites de cada nodo del quadtree.")
        info_label.setWordWrap(True)

        label = QLabel("Panel de información:")
        label.setStyleSheet("font-size: 16px; font-weight: bold;")

        side_layout = QVBoxLayout()
        side_layout.addWidget(label)
        side_layout.addWidget(info_label)
        side_layout.addWidget(btn_clear)
        side_layout.addWidget(text_panel)

        btn_query = QPushButton("Consulta por rango")
        btn_query.clicked.connect(self.show_query_dialog)
        side_layout.addWidget(btn_query)

        btn_metrics = QPushButton("Ejecutar Métricas")
        btn_metrics.clicked.connect(self.run_metrics)
        side_layout.addWidget(btn_metrics)

        self.fig = Figure(figsize=(5, 4))
        self.canvas = FigureCanvas(self.fig)
        side_layout.addWidget(self.canvas)

        self.text_panel = text_panel

        side_widget = QWidget()
        side_widget.setLayout(side_layout)

        main_layout = QHBoxLayout()
        main_layout.addWidget(self.canvas_view, C.CANVAS_STRETCH)
        main_layout.addWidget(side_widget, C.SIDE_PANEL_STRETCH)

        container = QWidget()
        container.setLayout(main_layout)
        self.setCentralWidget(container)

        self.redraw()

    def insert_point(self, x, y):
        accepted = self.quadtree.insert(Point(x, y))
        if not accepted:
            logger.debug("Punto (%d, %d) rechazado", x, y)
        self.redraw()

    def redraw(self):
        data = json.loads(self.quadtree.query_all_json(self.boundary))
        self.canvas_view.draw(data, self.matches)

    def clear_tree(self):
        self.quadtree = QuadTree(self.boundary, C.QUADTREE_CAPACITY)
        self.matches = []
        self.text_panel.setPlainText("Árbol vacío.")
        self.redraw()

    def show_query_dialog(self):
        default = f"{self.boundary.center.x}, {self.boundary.center.y}, 200, 200"
        text, ok = QInputDialog.getText(self, 'Consulta por rango', 'Centro y tamaño (cx, cy, w, h):', text=default)
        if not ok or not text:
            return
        try:
            range_rect = parse_range(text)
        except ValueError as e:
            self.text_panel.setPlainText(f'Rango no válido: {e}')
            return

        self.matches = json.loads(self.quadtree.query_json(range_rect))
        if not self.matches:
            self.text_panel.setPlainText("No se encontraron puntos en el rango.")
        else:
            lines = [f"({p['x']}, {p['y']})" for p in self.matches]
            lines.insert(0, f"{len(self.matches)} puntos encontrados:")
            self.text_panel.setPlainText("\n".join(lines))
        self.redraw()

    def run_metrics(self):
        choices = ['Sintético (crear datos aleatorios)', 'QuadTree (usar datos actuales)']
        choice, ok = QInputDialog.getItem(self, 'Fuente de datos para benchmark', 'Selecciona fuente de datos:', choices, 0, False)
        if not ok or not choice:
            choice = choices[0]

        self.text_panel.setPlainText('Ejecutando benchmarks... esto puede tardar unos segundos.')

        if choice == choices[1]:
            res = analyze_quadtree_instance(self.quadtree)
            lines = ["QuadTree actual:"]
            for s, n, lf, h in zip(res['sizes'], res['num_nodes'], res['load_factors'], res['heights']):
                lines.append(f"N={s}: nodos={n}, rects={res['num_rects'][0]}, load_factor={lf:.3f}, altura={h}")
            self.text_panel.setPlainText("\n".join(lines))
            return

        res = benchmark_quadtree(C.BENCHMARK_SIZES, self.boundary, capacity=C.QUADTREE_CAPACITY)

        self.fig.clear()
        x = np.arange(len(res['sizes']))
        width = 0.35

        ax1 = self.fig.add_subplot(2, 1, 1)
        # Gráfico de barras para tiempos de consulta
        ax1.bar(x - width/2, res['query_times'], width, label='QuadTree')
        ax1.bar(x + width/2, res['scan_times'], width, label='Barrido lineal')
        ax1.set_xticks(x)
        ax1.set_xticklabels([str(s) for s in res['sizes']])
        ax1.set_ylabel('Tiempo consultas (s)')
        ax1.legend()

        ax2 = self.fig.add_subplot(2, 1, 2)
        ax2.bar(x, res['load_factors'], 0.4, label='QuadTree LF')
        ax2.set_xticks(x)
        ax2.set_xticklabels([str(s) for s in res['sizes']])
        ax2.set_xlabel('N (nº de inserciones)')
        ax2.set_ylabel('Factor de Carga')
        ax2.legend()

        self.canvas.draw()

        lines = ["Benchmarks completos. Ver gráficos.", ""]
        for s, t, m, sp in zip(res['sizes'], res['times'], res['mem_peaks'], res['speedups']):
            lines.append(f"N={s}: build={t:.4f}s, mem_peak={m/1024:.1f} KiB, speedup={sp:.1f}x")
        self.text_panel.setPlainText("\n".join(lines))


if __name__ == "__main__":
    set_debug("--debug" in sys.argv)
    app = QApplication(sys.argv)
    win = QuadTreeWindow()
    win.show()
    sys.exit(app.exec_())
