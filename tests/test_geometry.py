"""Tests for lengths, areas, normals and cotangents."""
import math

import pytest
import numpy

import ddgkit.geometry as geometry
from ddgkit import primitives
from ddgkit.hds import InvariantViolation, Mesh
from ddgkit.linalg import DegenerateGeometryError


@pytest.fixture
def right_triangle():
    """Single triangle with a right angle at vertex 1."""
    return Mesh([[0, 0, 0], [1, 0, 0], [1, 1, 0]], [[0, 1, 2]])


def test_edge_length(cube):
    lengths = sorted(geometry.edge_lengths(cube))
    assert numpy.allclose(lengths[:12], 1.0)
    assert numpy.allclose(lengths[12:], math.sqrt(2.0))


def test_edge_length_of_halfedge(tetrahedron):
    for h in tetrahedron.halfedges:
        assert geometry.edge_length(h) == pytest.approx(math.sqrt(8.0))
        assert geometry.edge_length(h) == geometry.edge_length(h.edge)


def test_halfedge_vector(right_triangle):
    h = right_triangle.halfedges[0]
    assert numpy.allclose(geometry.halfedge_vector(h), [1, 0, 0])
    assert numpy.allclose(geometry.halfedge_vector(h.pair), [-1, 0, 0])


def test_face_area(cube):
    assert numpy.allclose(geometry.face_areas(cube), 0.5)
    assert geometry.total_area(cube) == pytest.approx(6.0)


def test_icosahedron_area(icosahedron):
    a = geometry.mean_edge_length(icosahedron)
    assert geometry.total_area(icosahedron) == \
        pytest.approx(5.0 * math.sqrt(3.0) * a * a)
    assert numpy.allclose(geometry.edge_lengths(icosahedron), a)


def test_face_normal(grid):
    normals = geometry.face_normals(grid)
    assert normals.shape == (32, 3)
    assert numpy.allclose(normals, [0, 0, 1])


def test_face_normal_points_outside(icosphere):
    for f in icosphere.faces:
        n = geometry.face_normal(f)
        assert numpy.dot(n, f.barycenter) > 0.0


def test_non_triangular_face():
    mesh = primitives.cube(triangulate=False)

    with pytest.raises(InvariantViolation):
        geometry.face_area(mesh.faces[0])

    with pytest.raises(InvariantViolation):
        geometry.face_normal(mesh.faces[0])


def test_cotan(right_triangle):
    h = right_triangle.halfedges
    assert geometry.cotan(h[0]) == pytest.approx(1.0)
    assert geometry.cotan(h[2]) == pytest.approx(1.0)
    assert geometry.cotan(h[4]) == pytest.approx(0.0, abs=1e-12)


def test_cotan_equilateral(tetrahedron):
    for h in tetrahedron.halfedges:
        assert geometry.cotan(h) == pytest.approx(1.0 / math.sqrt(3.0))


def test_cotan_boundary(right_triangle):
    for h in right_triangle.halfedges:
        if h.boundary:
            assert geometry.cotan(h) == 0.0


def test_cotan_degenerate():
    """Collinear vertices give a zero cotangent instead of inf or nan."""
    mesh = Mesh([[0, 0, 0], [1, 0, 0], [2, 0, 0]], [[0, 1, 2]])

    for h in mesh.halfedges:
        assert geometry.cotan(h) == 0.0


def test_edge_cotan_weight(cube, right_triangle):
    weights = sorted(geometry.edge_cotan_weight(e) for e in cube.edges)
    assert numpy.allclose(weights[:6], 0.0)
    assert numpy.allclose(weights[6:], 1.0)

    e = right_triangle.edges[0]
    assert geometry.edge_cotan_weight(e) == pytest.approx(0.5)


@pytest.mark.parametrize('mesh, chi', [
    (primitives.tetrahedron(), 2),
    (primitives.cube(), 2),
    (primitives.cube(triangulate=False), 2),
    (primitives.icosphere(3), 2),
    (primitives.grid(3, 5), 1),
])
def test_euler_characteristic(mesh, chi):
    assert geometry.euler_characteristic(mesh) == chi


def test_mean_edge_length(grid):
    # 40 axis aligned edges and 16 diagonals.
    expected = (40.0 + 16.0 * math.sqrt(2.0)) / 56.0
    assert geometry.mean_edge_length(grid) == pytest.approx(expected)


def test_degenerate():
    """Slivers are detected relative to their edge lengths."""
    sliver = Mesh([[0, 0, 0], [1, 0, 0], [0.5, 1e-20, 0]], [[0, 1, 2]])
    small = Mesh([[0, 0, 0], [1e-9, 0, 0], [0, 1e-9, 0]], [[0, 1, 2]])

    assert geometry.degenerate(sliver.faces[0])
    assert not geometry.degenerate(small.faces[0])

    with pytest.raises(DegenerateGeometryError):
        geometry.face_normal(sliver.faces[0])

    assert numpy.allclose(geometry.face_normal(small.faces[0]), [0, 0, 1])


def test_small_scale_normals(icosphere):
    small = primitives.icosphere(2, radius=1e-6)

    assert numpy.allclose(geometry.face_normals(small),
                          geometry.face_normals(icosphere))
    assert geometry.total_area(small) == \
        pytest.approx(1e-12 * geometry.total_area(icosphere))
