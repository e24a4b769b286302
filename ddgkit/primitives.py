# Copyright 2024, m3shware
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.

""" Reference meshes.

Small closed and open triangle meshes with known topology and geometry.
Faces are oriented counter-clockwise when viewed from outside, hence face
normals of closed meshes point outwards.
"""

import numpy as np

from ddgkit.hds import Mesh


def tetrahedron():
    """ Regular tetrahedron.

    Returns
    -------
    Mesh
        Closed mesh with 4 vertices and 4 triangles, inscribed in the
        sphere of radius :math:`\\sqrt{3}` about the origin.
    """
    points = [[1.0, 1.0, 1.0],
              [1.0, -1.0, -1.0],
              [-1.0, 1.0, -1.0],
              [-1.0, -1.0, 1.0]]

    faces = [[0, 1, 2], [0, 3, 1], [0, 2, 3], [1, 3, 2]]

    return Mesh(points, faces, name='tetrahedron')


def cube(triangulate=True):
    """ Unit cube.

    Parameters
    ----------
    triangulate : bool, optional
        Split each square into two triangles.

    Returns
    -------
    Mesh
        Closed mesh of the cube :math:`[0, 1]^3` with 8 vertices and
        either 12 triangles or 6 quadrilaterals.
    """
    # Vertex index is x + 2*y + 4*z.
    points = [[x, y, z] for z in (0.0, 1.0)
                        for y in (0.0, 1.0)
                        for x in (0.0, 1.0)]

    quads = [[0, 2, 3, 1], [4, 5, 7, 6],
             [0, 1, 5, 4], [2, 6, 7, 3],
             [0, 4, 6, 2], [1, 3, 7, 5]]

    if triangulate:
        faces = []

        for a, b, c, d in quads:
            faces += [[a, b, c], [a, c, d]]
    else:
        faces = quads

    return Mesh(points, faces, name='cube')


def icosahedron(radius=1.0):
    """ Regular icosahedron.

    Parameters
    ----------
    radius : float, optional
        Circumradius.

    Returns
    -------
    Mesh
        Closed mesh with 12 vertices of valence 5 and 20 triangles.
    """
    t = 0.5 * (1.0 + np.sqrt(5.0))

    points = np.array([[-1, t, 0], [1, t, 0], [-1, -t, 0], [1, -t, 0],
                       [0, -1, t], [0, 1, t], [0, -1, -t], [0, 1, -t],
                       [t, 0, -1], [t, 0, 1], [-t, 0, -1], [-t, 0, 1]],
                      dtype=float)

    points *= radius / np.linalg.norm(points[0])

    faces = [[0, 11, 5], [0, 5, 1], [0, 1, 7], [0, 7, 10], [0, 10, 11],
             [1, 5, 9], [5, 11, 4], [11, 10, 2], [10, 7, 6], [7, 1, 8],
             [3, 9, 4], [3, 4, 2], [3, 2, 6], [3, 6, 8], [3, 8, 9],
             [4, 9, 5], [2, 4, 11], [6, 2, 10], [8, 6, 7], [9, 8, 1]]

    return Mesh(points, faces, name='icosahedron')


def icosphere(subdivisions=1, radius=1.0):
    """ Subdivided icosahedron.

    Each subdivision step splits every triangle into four by inserting
    edge midpoints, which are then projected onto the sphere.

    Parameters
    ----------
    subdivisions : int, optional
        Number of subdivision steps, each quadruples the number of
        triangles.
    radius : float, optional
        Sphere radius.

    Raises
    ------
    ValueError
        If `subdivisions` is negative or `radius` is not positive.

    Returns
    -------
    Mesh
        Closed mesh with ``20 * 4**subdivisions`` triangles.
    """
    if subdivisions < 0:
        raise ValueError(f'subdivisions must be non-negative, '
                         f'got {subdivisions}')

    if radius <= 0.0:
        raise ValueError(f'radius must be positive, got {radius}')

    base = icosahedron()
    points = [p for p in base.points]
    faces = [[int(v) for v in f] for f in base]

    for _ in range(subdivisions):
        midpoints = dict()

        def midpoint(a, b):
            key = (a, b) if a < b else (b, a)

            if key not in midpoints:
                p = 0.5 * (points[a] + points[b])
                points.append(p / np.linalg.norm(p))
                midpoints[key] = len(points) - 1

            return midpoints[key]

        refined = []

        for a, b, c in faces:
            ab, bc, ca = midpoint(a, b), midpoint(b, c), midpoint(c, a)
            refined += [[a, ab, ca], [b, bc, ab], [c, ca, bc], [ab, bc, ca]]

        faces = refined

    return Mesh(radius * np.array(points), faces, name='icosphere')


def grid(nx=4, ny=4, size=1.0):
    """ Planar triangle grid.

    Regular grid in the xy-plane, each square split into two triangles
    along its diagonal.

    Parameters
    ----------
    nx, ny : int, optional
        Number of squares in x and y direction.
    size : float, optional
        Edge length of the squares.

    Returns
    -------
    Mesh
        Open mesh with ``(nx + 1) * (ny + 1)`` vertices, normals point in
        positive z-direction.
    """
    points = [[i * size, j * size, 0.0] for j in range(ny + 1)
                                        for i in range(nx + 1)]

    faces = []

    for j in range(ny):
        for i in range(nx):
            a = j * (nx + 1) + i
            b, c, d = a + 1, a + nx + 2, a + nx + 1

            faces += [[a, b, c], [a, c, d]]

    return Mesh(points, faces, name='grid')
