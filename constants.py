# constants.py

# =============================================================================
# --- QUADTREE ---
# =============================================================================
QUADTREE_CAPACITY = 4
# Profundidad maxima de subdivision; None desactiva el limite
QUADTREE_MAX_DEPTH = 32

# =============================================================================
# --- CANVAS & COLORES ---
# =============================================================================
CANVAS_WIDTH = 1200
CANVAS_HEIGHT = 900
WINDOW_X = 200
WINDOW_Y = 100
SIDE_PANEL_STRETCH = 1
CANVAS_STRETCH = 3

BACKGROUND_COLOR = "#315771"
POINT_COLOR = "#A4BAB7"
RECT_COLOR = "#F6AE2D"
MATCH_COLOR = "#E4572E"
POINT_RADIUS = 5

# =============================================================================
# --- METRICAS ---
# =============================================================================
BENCHMARK_SIZES = [100, 500, 2000]
BENCHMARK_QUERIES = 50
# Fraccion del ancho/alto del limite que cubre cada consulta de benchmark
BENCHMARK_QUERY_FRACTION = 0.1
BENCHMARK_SEED = 12345
