"""Tests for angles, vertex normals and discrete curvatures."""
import math

import pytest
import numpy

import ddgkit.curvature as curvature
import ddgkit.duals as duals
import ddgkit.geometry as geometry
from ddgkit import primitives
from ddgkit.curvature import NormalWeighting
from ddgkit.hds import InvariantViolation, Mesh
from ddgkit.linalg import DegenerateGeometryError


NAMED = {
    NormalWeighting.EQUAL: curvature.vertex_normal_equally_weighted,
    NormalWeighting.ANGLE: curvature.vertex_normal_angle_weighted,
    NormalWeighting.SPHERE_INSCRIBED: curvature.vertex_normal_sphere_inscribed,
    NormalWeighting.AREA: curvature.vertex_normal_area_weighted,
    NormalWeighting.GAUSS_CURVATURE:
        curvature.vertex_normal_gaussian_curvature,
    NormalWeighting.MEAN_CURVATURE: curvature.vertex_normal_mean_curvature,
}


class TestAngles:

    def test_corner_angle(self, icosahedron):
        for c in icosahedron.corners:
            assert curvature.angle(c) == pytest.approx(math.pi / 3.0)

    def test_right_angle(self, cube):
        angles = sorted(curvature.angle(c) for c in cube.corners)
        assert numpy.allclose(angles[:24], math.pi / 4.0)
        assert numpy.allclose(angles[24:], math.pi / 2.0)

    def test_boundary_corner(self, grid):
        for c in grid.corners:
            if c.halfedge.edge.boundary:
                assert curvature.angle(c) == 0.0

    def test_dihedral_angle(self, icosahedron):
        expected = math.acos(math.sqrt(5.0) / 3.0)

        for h in icosahedron.halfedges:
            assert curvature.dihedral_angle(h) == pytest.approx(expected)
            assert curvature.dihedral_angle(h) == \
                pytest.approx(curvature.dihedral_angle(h.pair))

    def test_dihedral_angle_cube(self, cube):
        angles = sorted(curvature.dihedral_angle(h) for h in cube.halfedges)
        assert numpy.allclose(angles[:12], 0.0)
        assert numpy.allclose(angles[12:], math.pi / 2.0)

    def test_dihedral_angle_concave(self):
        """Folding a pair of triangles the other way flips the sign."""
        points = [[0, 0, 0], [1, 0, 0], [0.5, 1, -1], [0.5, -1, -1]]
        convex = Mesh(points, [[0, 1, 2], [1, 0, 3]])

        points = [[0, 0, 0], [1, 0, 0], [0.5, 1, 1], [0.5, -1, 1]]
        concave = Mesh(points, [[0, 1, 2], [1, 0, 3]])

        h = convex.halfedges[0]
        assert curvature.dihedral_angle(h) == pytest.approx(math.pi / 2.0)

        h = concave.halfedges[0]
        assert curvature.dihedral_angle(h) == pytest.approx(-math.pi / 2.0)

    def test_dihedral_angle_boundary(self, grid):
        for h in grid.halfedges:
            if h.edge.boundary:
                assert curvature.dihedral_angle(h) == 0.0
            else:
                assert curvature.dihedral_angle(h) == pytest.approx(0.0)


class TestNormals:

    @pytest.mark.parametrize('weighting', list(NormalWeighting))
    def test_outward(self, icosphere, weighting):
        normals = curvature.vertex_normals(icosphere, weighting)

        assert normals.shape == (len(icosphere.vertices), 3)
        assert numpy.allclose(numpy.linalg.norm(normals, axis=1), 1.0)
        assert numpy.all(numpy.sum(normals * icosphere.points, axis=1) > 0.0)

    @pytest.mark.parametrize('weighting', list(NormalWeighting))
    def test_symmetric_vertex(self, icosahedron, weighting):
        for v in icosahedron.vertices:
            n = curvature.vertex_normal(v, weighting)
            assert numpy.allclose(n, v.point / numpy.linalg.norm(v.point))

    @pytest.mark.parametrize('weighting', list(NormalWeighting))
    def test_named(self, icosphere, weighting):
        assert NAMED[weighting].__doc__

        for v in icosphere.vertices:
            assert numpy.allclose(NAMED[weighting](v),
                                  curvature.vertex_normal(v, weighting))

    @pytest.mark.parametrize('weighting', [NormalWeighting.EQUAL,
                                           NormalWeighting.ANGLE,
                                           NormalWeighting.SPHERE_INSCRIBED,
                                           NormalWeighting.AREA])
    def test_flat(self, grid, weighting):
        v = grid.vertices[12]
        assert numpy.allclose(curvature.vertex_normal(v, weighting), [0, 0, 1])

    def test_default(self, icosphere):
        v = icosphere.vertices[20]
        assert numpy.array_equal(curvature.vertex_normal(v),
                                 curvature.vertex_normal_equally_weighted(v))

    def test_flat_curvature_normal(self, grid):
        with pytest.raises(DegenerateGeometryError):
            curvature.vertex_normal_gaussian_curvature(grid.vertices[12])

    def test_isolated_vertex(self):
        mesh = Mesh([[0, 0, 0], [1, 0, 0], [0, 1, 0], [1, 1, 1]],
                    [[0, 1, 2]])

        with pytest.raises(DegenerateGeometryError):
            curvature.vertex_normal(mesh.vertices[3])


class TestCurvature:

    def test_angle_defect(self, icosahedron):
        defects = curvature.angle_defects(icosahedron)
        assert numpy.allclose(defects, math.pi / 3.0)

    def test_gauss_bonnet(self, closed_mesh):
        chi = geometry.euler_characteristic(closed_mesh)
        assert curvature.total_angle_defect(closed_mesh) == \
            pytest.approx(2.0 * math.pi * chi)

    def test_flat_vertex(self, grid):
        v = grid.vertices[12]
        assert curvature.angle_defect(v) == pytest.approx(0.0, abs=1e-12)
        assert curvature.scalar_mean_curvature(v) == \
            pytest.approx(0.0, abs=1e-12)

    def test_scalar_mean_curvature(self, icosahedron):
        a = geometry.mean_edge_length(icosahedron)
        theta = math.acos(math.sqrt(5.0) / 3.0)

        values = curvature.scalar_mean_curvatures(icosahedron)
        assert numpy.allclose(values, 2.5 * a * theta)

    def test_principal_curvatures_flat(self, grid):
        kmin, kmax = curvature.principal_curvatures(grid.vertices[12])
        assert kmin == pytest.approx(0.0, abs=1e-6)
        assert kmax == pytest.approx(0.0, abs=1e-6)

    def test_principal_curvatures(self, icosphere):
        for v in icosphere.vertices:
            kmin, kmax = curvature.principal_curvatures(v)
            area = duals.circumcentric_dual_area(v)
            H = curvature.scalar_mean_curvature(v) / area
            K = curvature.angle_defect(v) / area

            assert kmin <= kmax
            assert kmin + kmax == pytest.approx(2.0 * H)

            if H * H > K:
                assert kmin * kmax == pytest.approx(K)

    def test_principal_curvatures_isolated(self):
        mesh = Mesh([[0, 0, 0], [1, 0, 0], [0, 1, 0], [1, 1, 1]],
                    [[0, 1, 2]])

        with pytest.raises(DegenerateGeometryError):
            curvature.principal_curvatures(mesh.vertices[3])


class TestNonTriangular:
    """Corner based quantities require triangles."""

    def test_angle(self):
        mesh = primitives.cube(triangulate=False)

        with pytest.raises(InvariantViolation):
            curvature.angle(mesh.corners[0])

        with pytest.raises(InvariantViolation):
            curvature.angle_defect(mesh.vertices[0])

    @pytest.mark.parametrize('weighting', list(NormalWeighting))
    def test_vertex_normal(self, weighting):
        mesh = primitives.cube(triangulate=False)

        with pytest.raises(InvariantViolation):
            curvature.vertex_normal(mesh.vertices[0], weighting)

    def test_curvatures(self):
        mesh = primitives.cube(triangulate=False)

        with pytest.raises(InvariantViolation):
            curvature.dihedral_angle(mesh.halfedges[0])

        with pytest.raises(InvariantViolation):
            curvature.principal_curvatures(mesh.vertices[0])


class TestScale:
    """Results do not depend on the size of the mesh."""

    @pytest.mark.parametrize('weighting', list(NormalWeighting))
    def test_vertex_normals(self, icosphere, weighting):
        small = primitives.icosphere(2, radius=1e-6)

        assert numpy.allclose(curvature.vertex_normals(small, weighting),
                              curvature.vertex_normals(icosphere, weighting))

    def test_angles(self, icosphere):
        small = primitives.icosphere(2, radius=1e-6)

        for h, g in zip(small.halfedges, icosphere.halfedges):
            assert curvature.dihedral_angle(h) == \
                pytest.approx(curvature.dihedral_angle(g))

        assert numpy.allclose(curvature.angle_defects(small),
                              curvature.angle_defects(icosphere))

    def test_principal_curvatures(self, icosphere):
        small = primitives.icosphere(2, radius=1e-6)

        for v, w in zip(small.vertices, icosphere.vertices):
            kmin, kmax = curvature.principal_curvatures(v)
            expected = curvature.principal_curvatures(w)

            assert (1e-6 * kmin, 1e-6 * kmax) == \
                pytest.approx(expected, rel=1e-6)

    def test_flat_mean_curvature_normal(self):
        mesh = primitives.grid(4, 4, size=1e-8)

        with pytest.raises(DegenerateGeometryError):
            curvature.vertex_normal_mean_curvature(mesh.vertices[12])

        n = curvature.vertex_normal_area_weighted(mesh.vertices[12])
        assert numpy.allclose(n, [0, 0, 1])
