"""Tests for centering and rescaling."""
import pytest
import numpy

import ddgkit.geometry as geometry
import ddgkit.transform as transform
from ddgkit import primitives
from ddgkit.hds import Mesh
from ddgkit.linalg import DegenerateGeometryError


def test_center_of_mass(cube):
    assert numpy.allclose(transform.center_of_mass(cube), [0.5, 0.5, 0.5])


def test_normalize(cube):
    lengths = geometry.edge_lengths(cube)

    transform.normalize(cube)

    assert numpy.allclose(transform.center_of_mass(cube), 0.0)
    assert numpy.allclose(geometry.edge_lengths(cube), lengths)


def test_normalize_origin(tetrahedron):
    transform.normalize(tetrahedron, origin=[1.0, 2.0, 3.0])
    assert numpy.allclose(transform.center_of_mass(tetrahedron), [1, 2, 3])


def test_rescale():
    mesh = primitives.icosphere(1, radius=7.0)
    mesh.points += [3.0, -1.0, 2.0]

    transform.normalize(mesh, rescale=True)

    radii = numpy.linalg.norm(mesh.points, axis=1)
    assert numpy.allclose(transform.center_of_mass(mesh), 0.0)
    assert radii.max() == pytest.approx(1.0)
    assert geometry.total_area(mesh) == \
        pytest.approx(geometry.total_area(primitives.icosphere(1)))


def test_rescale_then_translate(cube):
    transform.normalize(cube, origin=(0.0, 0.0, 5.0), rescale=True)

    offsets = cube.points - [0.0, 0.0, 5.0]
    assert numpy.linalg.norm(offsets, axis=1).max() == pytest.approx(1.0)


def test_rescale_degenerate():
    mesh = Mesh([[1, 1, 1]] * 3, [[0, 1, 2]])

    with pytest.raises(DegenerateGeometryError):
        transform.normalize(mesh, rescale=True)

    # A failed call leaves the coordinates untouched.
    assert numpy.array_equal(mesh.points, numpy.ones((3, 3)))

    # Translation alone is always possible.
    transform.normalize(mesh)
    assert numpy.allclose(mesh.points, 0.0)


def test_rescale_small_mesh():
    mesh = primitives.icosphere(1, radius=1e-13)
    mesh.points += 1e-13

    transform.normalize(mesh, rescale=True)

    radii = numpy.linalg.norm(mesh.points, axis=1)
    assert numpy.allclose(radii, 1.0)


def test_normalize_in_place(icosahedron):
    points = icosahedron.points
    v = icosahedron.vertices[0]

    transform.normalize(icosahedron, origin=[0.0, 0.0, 1.0])

    assert icosahedron.points is points
    assert numpy.allclose(v.point, points[0])
