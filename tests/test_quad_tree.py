import json
import logging

import pytest
from hypothesis import given, strategies as st

from Nodes.Point import Point
from Nodes.Rectangle_Q import Rectangle_Q
from trees.Quad_tree import QuadTree, Quadrants, make_root


ROOT = Rectangle_Q(Point(50, 50), 100, 100)

SCENARIO = [Point(10, 10), Point(90, 10), Point(10, 90), Point(90, 90), Point(50, 50)]


@pytest.fixture
def scenario_tree():
    qt = QuadTree(ROOT, capacity=1)
    for p in SCENARIO:
        assert qt.insert(p)
    return qt


class TestConstruction:
    def test_new_tree_is_empty_leaf(self):
        qt = QuadTree(ROOT, capacity=4)
        assert not qt.divided
        assert qt.children is None
        assert qt.northeast is None and qt.southwest is None
        assert len(qt) == 0
        assert qt.query(ROOT) == []

    def test_make_root(self):
        qt = make_root(50, 50, 100, 100, capacity=3)
        assert qt.boundary == ROOT
        assert qt.capacity == 3


class TestSubdivide:
    def test_children_cover_quadrants(self):
        qt = QuadTree(ROOT, capacity=2)
        qt.subdivide()
        assert qt.divided
        assert isinstance(qt.children, Quadrants)
        assert qt.northeast.boundary == Rectangle_Q(Point(75, 25), 50, 50)
        assert qt.northwest.boundary == Rectangle_Q(Point(25, 25), 50, 50)
        assert qt.southeast.boundary == Rectangle_Q(Point(75, 75), 50, 50)
        assert qt.southwest.boundary == Rectangle_Q(Point(25, 75), 50, 50)
        for child in qt.children:
            assert child.capacity == 2
            assert child.depth == 1
            assert not child.divided

    def test_subdivide_again_replaces_children(self):
        qt = QuadTree(ROOT, capacity=1)
        qt.subdivide()
        qt.northeast.insert(Point(90, 10))
        qt.subdivide()
        assert len(qt.northeast) == 0


class TestInsert:
    def test_outside_point_rejected(self):
        qt = QuadTree(ROOT, capacity=1)
        qt.insert(Point(1, 1))
        assert not qt.insert(Point(101, 50))
        assert not qt.insert(Point(-1, -1))
        assert len(qt) == 1

    def test_capacity_respected_before_subdivision(self):
        qt = QuadTree(ROOT, capacity=3)
        for p in [Point(1, 1), Point(2, 2), Point(3, 3)]:
            assert qt.insert(p)
        assert not qt.divided

        assert qt.insert(Point(4, 4))
        assert qt.divided
        assert list(qt.points) == [Point(1, 1), Point(2, 2), Point(3, 3)]
        assert list(qt.northwest.points) == [Point(4, 4)]

    def test_children_tried_in_fixed_order(self):
        qt = QuadTree(ROOT, capacity=1)
        qt.insert(Point(0, 0))
        # el centro está en los cuatro cuadrantes; gana el noreste
        assert qt.insert(Point(50, 50))
        assert list(qt.northeast.points) == [Point(50, 50)]
        assert len(qt.northwest) == 0

    def test_zero_capacity_forces_subdivision(self):
        qt = QuadTree(ROOT, capacity=0, max_depth=3)
        assert not qt.insert(Point(10, 10))
        assert qt.divided
        assert len(qt) == 0

    def test_depth_cap_rejects_coincident_points(self, caplog):
        qt = QuadTree(Rectangle_Q(Point(0, 0), 64, 64), capacity=1, max_depth=3)
        results = [qt.insert(Point(5, 5)) for _ in range(5)]
        assert results == [True, True, True, True, False]
        assert len(qt) == 4
        assert qt.height() == 3
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_no_depth_cap(self):
        qt = QuadTree(Rectangle_Q(Point(0, 0), 1024, 1024), capacity=1, max_depth=None)
        for _ in range(6):
            assert qt.insert(Point(5, 5))
        assert qt.height() == 5

    def test_geometry_gap_rejects(self):
        # ancho 3: los hijos tienen ancho 1 y centro en el del padre
        qt = QuadTree(Rectangle_Q(Point(0, 0), 3, 3), capacity=1)
        assert qt.insert(Point(0, 0))
        assert not qt.insert(Point(1, 1))


class TestScenario:
    def test_full_query_returns_all_points(self, scenario_tree):
        found = scenario_tree.query(ROOT)
        assert set(found) == set(SCENARIO)
        assert len(found) == 5
        assert scenario_tree.divided

    def test_query_order_is_depth_first(self, scenario_tree):
        assert scenario_tree.query(ROOT) == [
            Point(10, 10), Point(90, 10), Point(50, 50), Point(90, 90), Point(10, 90),
        ]

    def test_sub_rectangle_query(self, scenario_tree):
        assert scenario_tree.query(Rectangle_Q(Point(10, 10), 20, 20)) == [Point(10, 10)]

    def test_disjoint_query_is_empty(self, scenario_tree):
        assert scenario_tree.query(Rectangle_Q(Point(500, 500), 10, 10)) == []

    def test_query_rects_preorder(self, scenario_tree):
        rects = scenario_tree.query_rects()
        assert rects[0] == ROOT
        assert rects[1] == Rectangle_Q(Point(75, 25), 50, 50)
        assert len(rects) == 4 * scenario_tree.internal_count() + 1 == 9

    def test_counts(self, scenario_tree):
        assert len(scenario_tree) == 5
        assert scenario_tree.node_count() == 9
        assert scenario_tree.internal_count() == 2
        assert scenario_tree.leaf_count() == 7

    def test_query_json(self, scenario_tree):
        data = json.loads(scenario_tree.query_json(Rectangle_Q(Point(10, 10), 20, 20)))
        assert data == [{"x": 10, "y": 10}]

    def test_query_rects_json(self, scenario_tree):
        data = json.loads(scenario_tree.query_rects_json())
        assert len(data) == 9
        assert data[0] == {"center": {"x": 50, "y": 50}, "width": 100, "height": 100}

    def test_query_all_json(self, scenario_tree):
        data = json.loads(scenario_tree.query_all_json(ROOT))
        assert len(data["points"]) == 5
        assert len(data["rects"]) == 9


point_lists = st.lists(st.builds(Point, st.integers(-20, 120), st.integers(-20, 120)), max_size=60)


@given(point_lists, st.integers(1, 4))
def test_full_boundary_query_round_trip(points, capacity):
    qt = QuadTree(ROOT, capacity=capacity)
    inserted = [p for p in points if qt.insert(p)]
    assert sorted(qt.query(ROOT), key=lambda p: (p.x, p.y)) == sorted(inserted, key=lambda p: (p.x, p.y))
    assert len(qt) == len(inserted)
    assert all(ROOT.contains(p) for p in inserted)
    assert not any(qt.insert(p) for p in points if not ROOT.contains(p))


@given(point_lists, st.integers(1, 3))
def test_boundary_query_count(points, capacity):
    qt = QuadTree(ROOT, capacity=capacity)
    for p in points:
        qt.insert(p)
    assert len(qt.query_rects()) == 4 * qt.internal_count() + 1


@given(point_lists, st.builds(Rectangle_Q, st.builds(Point, st.integers(0, 100), st.integers(0, 100)),
                              st.integers(0, 80), st.integers(0, 80)))
def test_range_query_matches_linear_scan(points, range_rect):
    qt = QuadTree(ROOT, capacity=2)
    inserted = [p for p in points if qt.insert(p)]
    expected = [p for p in inserted if range_rect.contains(p)]
    assert sorted(qt.query(range_rect), key=lambda p: (p.x, p.y)) == sorted(expected, key=lambda p: (p.x, p.y))
