import pytest

from bsptri.geometry import Plane, Point3D, Segment, Triangle, triangle_area
from bsptri.tree import (
    BSPConfig,
    BSPNode,
    BSPTree,
    ray_intersects_triangle,
    segment_intersects_triangle,
    split_triangle,
)

P = Point3D
Z_PLANE = Plane(0.0, 0.0, 1.0, 0.0)


def _flat(z, tid):
    return Triangle(P(0, 0, z), P(10, 0, z), P(0, 10, z), tid)


def _stack(count):
    return [_flat(float(k), k) for k in range(1, count + 1)]


def test_ray_hits_triangle_at_expected_parameter():
    t = ray_intersects_triangle(P(1, 1, -1), P(0, 0, 1), _flat(0.0, 1))
    assert t == pytest.approx(1.0)


def test_ray_parallel_or_behind_misses():
    tri = _flat(0.0, 1)
    assert ray_intersects_triangle(P(1, 1, 1), P(1, 0, 0), tri) is None
    assert ray_intersects_triangle(P(1, 1, 1), P(0, 0, 1), tri) is None


def test_segment_intersection_respects_endpoints():
    tri = _flat(0.0, 1)
    assert segment_intersects_triangle(Segment(P(1, 1, -1), P(1, 1, 1)), tri)
    assert not segment_intersects_triangle(Segment(P(1, 1, -2), P(1, 1, -1)), tri)
    assert not segment_intersects_triangle(Segment(P(20, 20, -1), P(20, 20, 1)), tri)


def test_degenerate_segment_never_intersects():
    tri = _flat(0.0, 1)
    assert not segment_intersects_triangle(Segment(P(1, 1, 0), P(1, 1, 0)), tri)


def test_split_one_front_two_back_preserves_area_and_sides():
    tri = Triangle(P(0, 0, 1), P(4, 0, -1), P(0, 4, -1), 7)
    front, back = split_triangle(tri, Z_PLANE)
    assert len(front) == 1
    assert len(back) == 2
    total = sum(triangle_area(t) for t in front + back)
    assert total == pytest.approx(triangle_area(tri))
    assert all(t.id == 7 for t in front + back)
    assert all(Z_PLANE.classify_point(v) >= -1e-9 for t in front for v in t.vertices)
    assert all(Z_PLANE.classify_point(v) <= 1e-9 for t in back for v in t.vertices)


def test_split_two_front_one_back():
    tri = Triangle(P(0, 0, -1), P(4, 0, 1), P(0, 4, 1), 3)
    front, back = split_triangle(tri, Z_PLANE)
    assert len(front) == 2
    assert len(back) == 1
    total = sum(triangle_area(t) for t in front + back)
    assert total == pytest.approx(triangle_area(tri))


def test_split_with_one_vertex_on_plane():
    tri = Triangle(P(0, 0, 0), P(1, 1, 1), P(1, -1, -1), 4)
    front, back = split_triangle(tri, Z_PLANE)
    assert len(front) == 1 and len(back) == 1
    assert P(1, 1, 1) in front[0].vertices
    assert P(1, -1, -1) in back[0].vertices
    total = triangle_area(front[0]) + triangle_area(back[0])
    assert total == pytest.approx(triangle_area(tri))


def test_split_two_vertices_on_plane_keeps_whole_triangle():
    tri = Triangle(P(0, 0, 0), P(1, 0, 0), P(0, 0, 1), 5)
    assert split_triangle(tri, Z_PLANE) == ([tri], [])
    below = Triangle(P(0, 0, 0), P(1, 0, 0), P(0, 0, -1), 6)
    assert split_triangle(below, Z_PLANE) == ([], [below])


def test_split_coplanar_gives_nothing():
    assert split_triangle(_flat(0.0, 1), Z_PLANE) == ([], [])


def test_node_add_and_make_internal():
    node = BSPNode()
    tri = _flat(0.0, 1)
    node.add_triangle(tri)
    assert node.triangles == [tri]
    assert not node.has_children()
    node.make_internal(Z_PLANE)
    assert node.has_children()
    node.add_triangle(tri)
    assert node.triangles == [tri]


def test_empty_tree_returns_nothing():
    tree = BSPTree()
    tree.build([])
    assert tree.query_segment(Segment(P(1, 1, -1), P(1, 1, 1))) == []
    assert tree.node_count() == 1


def test_small_input_is_single_leaf():
    tree = BSPTree()
    tris = _stack(5)
    tree.build(tris)
    assert tree.node_count() == 1
    assert tree.max_depth() == 0
    assert tree.triangle_count() == 5
    assert tree.query_segment(Segment(P(1, 1, 0), P(1, 1, 10))) == [1, 2, 3, 4, 5]


def test_large_stack_builds_internal_nodes_and_finds_all():
    tree = BSPTree()
    tree.build(_stack(15))
    assert tree.node_count() > 1
    assert tree.max_depth() >= 1
    assert tree.triangle_count() == 15
    assert tree.query_segment(Segment(P(1, 1, 0), P(1, 1, 20))) == list(range(1, 16))
    assert tree.query_segment(Segment(P(1, 1, 0.5), P(1, 1, 5.5))) == [1, 2, 3, 4, 5]
    assert tree.query_segment(Segment(P(1, 1, 5.5), P(1, 1, 0.5))) == [1, 2, 3, 4, 5]
    assert tree.query_segment(Segment(P(20, 20, 0), P(20, 20, 20))) == []


def test_config_limits_depth():
    tree = BSPTree(BSPConfig(max_triangles_per_leaf=1, max_depth=2))
    tree.build(_stack(15))
    assert tree.max_depth() <= 2
    assert tree.query_segment(Segment(P(1, 1, 0), P(1, 1, 20))) == list(range(1, 16))


def test_split_triangle_reported_once():
    cutter = Triangle(P(2, 0, -1), P(2, 5, -1), P(2, 0, 1), 1)
    big = _flat(0.0, 2)
    filler = [
        Triangle(P(0, 0, 50 + k), P(1, 0, 50 + k), P(0, 1, 50 + k), 3 + k)
        for k in range(9)
    ]
    triangles = [cutter, big] + filler
    tree = BSPTree()
    tree.build(triangles)
    assert tree.node_count() > 1
    assert tree.triangle_count() > len(triangles)
    for x in (1.0, 5.0):
        segment = Segment(P(x, 1, -1), P(x, 1, 1))
        expected = sorted(
            t.id for t in triangles if segment_intersects_triangle(segment, t)
        )
        assert tree.query_segment(segment) == expected == [2]


def test_rebuild_replaces_content():
    tree = BSPTree()
    tree.build(_stack(15))
    tree.build(_stack(3))
    assert tree.triangle_count() == 3
    assert tree.query_segment(Segment(P(1, 1, 0), P(1, 1, 20))) == [1, 2, 3]