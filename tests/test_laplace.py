"""Tests for the cotangent Laplacian and the mass matrix."""
import pytest
import numpy

import ddgkit.dec as dec
import ddgkit.geometry as geometry
import ddgkit.laplace as laplace


def test_symmetric(closed_mesh, grid):
    for mesh in (closed_mesh, grid):
        L = laplace.laplace_matrix(mesh).toarray()
        assert numpy.allclose(L, L.T)


def test_row_sums(closed_mesh, grid):
    for mesh in (closed_mesh, grid):
        L = laplace.laplace_matrix(mesh)
        row_sums = numpy.asarray(L.sum(axis=1)).ravel()
        assert numpy.allclose(row_sums, laplace.LAPLACE_SHIFT, atol=1e-12)


def test_off_diagonal(icosphere):
    L = laplace.laplace_matrix(icosphere)

    for v in icosphere.vertices:
        for h in v.halfedge, v.halfedge.prev.pair:
            expected = -geometry.edge_cotan_weight(h.edge)
            assert L[v.index, h.target.index] == pytest.approx(expected)


def test_positive_definite(icosahedron):
    L = laplace.laplace_matrix(icosahedron).toarray()
    assert numpy.linalg.eigvalsh(L).min() > 0.0


def test_shift(cube):
    L0 = laplace.laplace_matrix(cube, shift=0.0)
    L1 = laplace.laplace_matrix(cube, shift=1.0)
    assert numpy.allclose((L1 - L0).toarray(), numpy.eye(8))


def test_linear_precision(grid):
    """Linear functions are harmonic at interior vertices of planar meshes."""
    L = laplace.laplace_matrix(grid, shift=0.0)
    x = grid.points @ numpy.array([2.0, -3.0, 0.0]) + 1.0
    y = L @ x

    for v in grid.vertices:
        if not v.boundary:
            assert y[v.index] == pytest.approx(0.0, abs=1e-10)


def test_complex(icosphere):
    L = laplace.laplace_matrix(icosphere)
    C = laplace.complex_laplace_matrix(icosphere)

    assert C.dtype == numpy.complex128
    assert numpy.allclose(C.real.toarray(), L.toarray())
    assert numpy.allclose(C.imag.toarray(), 0.0)


def test_mass_matrix(closed_mesh):
    M = laplace.mass_matrix(closed_mesh)

    assert M.nnz == len(closed_mesh.vertices)
    assert M.diagonal().sum() == pytest.approx(
        geometry.total_area(closed_mesh))
    assert numpy.allclose(M.toarray(),
                          dec.hodge_star_0form(closed_mesh).toarray())
