import time
import tracemalloc
import gc
from statistics import mean

import numpy as np

from .Quad_tree import QuadTree
from Nodes.Point import Point
from Nodes.Rectangle_Q import Rectangle_Q
from constants import BENCHMARK_QUERIES, BENCHMARK_QUERY_FRACTION, BENCHMARK_SEED, QUADTREE_CAPACITY


def random_points(n, boundary, rng):
    """Genera n puntos enteros uniformes dentro de boundary (bordes incluidos)."""
    xs = rng.integers(boundary.left, boundary.right, size=n, endpoint=True)
    ys = rng.integers(boundary.top, boundary.bottom, size=n, endpoint=True)
    # int() para no guardar enteros de numpy en los Point (no son serializables a JSON)
    return [Point(int(x), int(y)) for x, y in zip(xs, ys)]


def random_ranges(n, boundary, fraction, rng):
    width = max(1, int(boundary.width * fraction))
    height = max(1, int(boundary.height * fraction))
    centers = random_points(n, boundary, rng)
    return [Rectangle_Q(c, width, height) for c in centers]


def linear_scan(points, range_rect):
    """Consulta de referencia: recorre todos los puntos."""
    return [p for p in points if range_rect.contains(p)]


def _time_queries(fn, ranges):
    start = time.perf_counter()
    for r in ranges:
        fn(r)
    return time.perf_counter() - start


def _shape_stats(tree):
    # devuelve (num_nodes, num_leaves, avg_occupancy_per_leaf, height)
    leaves = [len(node.points) for node in tree.nodes() if not node.divided]
    num_nodes = tree.node_count()
    avg_occ = mean(leaves) if leaves else 0
    return num_nodes, len(leaves), avg_occ, tree.height()


def benchmark_quadtree(sizes, boundary, capacity=QUADTREE_CAPACITY, queries=BENCHMARK_QUERIES,
                       query_fraction=BENCHMARK_QUERY_FRACTION, seed=BENCHMARK_SEED):
    """Inserta puntos aleatorios y compara consultas por rango contra un barrido lineal.
    Retorna dict con listas: sizes, times, mem_peaks, query_times, scan_times, speedups,
    load_factors, num_nodes, heights
    """
    sizes = list(sizes)
    rng = np.random.default_rng(seed)

    times = []
    mem_peaks = []
    query_times = []
    scan_times = []
    speedups = []
    load_factors = []
    num_nodes = []
    heights = []

    for n in sizes:
        points = random_points(n, boundary, rng)
        ranges = random_ranges(queries, boundary, query_fraction, rng)

        gc.collect()
        tracemalloc.start()
        start = time.perf_counter()

        tree = QuadTree(boundary, capacity)
        for p in points:
            tree.insert(p)

        elapsed = time.perf_counter() - start
        current, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        q_time = _time_queries(tree.query, ranges)
        s_time = _time_queries(lambda r: linear_scan(points, r), ranges)

        nodes, leaves, avg_occ, height = _shape_stats(tree)
        # load factor: ocupación media por hoja / capacidad
        lf = avg_occ / capacity if capacity > 0 else 0

        times.append(elapsed)
        mem_peaks.append(peak)
        query_times.append(q_time)
        scan_times.append(s_time)
        speedups.append(s_time / q_time if q_time > 0 else 0)
        load_factors.append(lf)
        num_nodes.append(nodes)
        heights.append(height)

    return {
        'sizes': sizes,
        'times': times,
        'mem_peaks': mem_peaks,
        'query_times': query_times,
        'scan_times': scan_times,
        'speedups': speedups,
        'load_factors': load_factors,
        'num_nodes': num_nodes,
        'heights': heights
    }


def analyze_quadtree_instance(tree: QuadTree):
    """Analiza un QuadTree existente y devuelve métricas similares a benchmark_quadtree para un único tamaño."""
    gc.collect()
    tracemalloc.start()
    start = time.perf_counter()

    total_points = len(tree)
    nodes, leaves, avg_occ, height = _shape_stats(tree)
    rects = tree.query_rects()

    elapsed = time.perf_counter() - start
    current, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    lf = avg_occ / tree.capacity if tree.capacity > 0 else 0

    return {
        'sizes': [total_points],
        'times': [elapsed],
        'mem_peaks': [peak],
        'load_factors': [lf],
        'avg_occupancies': [avg_occ],
        'num_nodes': [nodes],
        'num_leaves': [leaves],
        'num_rects': [len(rects)],
        'heights': [height]
    }
