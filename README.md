# bsptri

`bsptri` builds a binary space partitioning (BSP) tree over a set of
triangles in 3D space. It then answers queries that ask which triangles a
line segment crosses.

## Installation

```
pip install .
```

## Command line

`bsptri` reads a problem from standard input and writes one result line
for each segment to standard output:

```
bsptri < problem.txt
```

Pass `--debug` or `-d` to also print progress messages and, after the
results, statistics: the number of points, triangles and segments, the
number of tree nodes and the tree's maximum depth.

If the input cannot be read or is invalid, the error is written to
standard error and the command exits with status 1.

### Input format

```
n t l
x y z              (n lines: the points, numbered from 1)
i j k              (t lines: triangles given by point numbers, numbered from 1)
xa ya za xb yb zb  (l lines: segments)
```

`n`, `t` and `l` must be positive, and every point number used by a
triangle must lie between 1 and `n`. Every point coordinate must lie in
the range 1 to 99; segment coordinates are not range-checked.

### Output format

Each segment gets one line. The line holds the number of triangles the
segment crosses, followed by their ids in ascending order:

```
2 1 3
0
```

## Library use

```python
from bsptri.geometry import Point3D, Triangle, Segment
from bsptri.tree import BSPTree

triangles = [
    Triangle(Point3D(0, 0, 0), Point3D(1, 0, 0), Point3D(0, 1, 0), 1),
]
tree = BSPTree()
tree.build(triangles)
print(tree.query_segment(Segment(Point3D(0.2, 0.2, -1), Point3D(0.2, 0.2, 1))))
# [1]
```

`BSPTree` takes an optional `BSPConfig` with `max_triangles_per_leaf`
(default 10) and `max_depth` (default 20). Each node splits on the plane
of its first triangle; triangles that span the plane are cut into pieces
that keep the original id. After building, `triangle_count()`,
`node_count()` and `max_depth()` describe the tree.

`bsptri.tree` also provides `split_triangle`, `segment_intersects_triangle`
and `ray_intersects_triangle` (Möller–Trumbore).

`bsptri.geometry` has `Point3D`, `Triangle`, `Segment`, `Plane` and
`TriangleClassification`, plus helpers such as `distance`, `points_equal`,
`triangle_area`, `triangle_centroid`, `is_point_in_triangle`,
`ray_plane_intersection` and `is_point_on_segment`.

To parse and validate the text format yourself, use `parse_input`,
`read_input`, `validate_input`, `format_result` and `write_output` from
`bsptri.io`. Bad input raises `InputError`, a subclass of `ValueError`.
`bsptri.cli.process_segment_queries` runs every segment of a list
against a built tree.