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

""" Rigid placement of meshes.

Note
----
:func:`normalize` modifies vertex coordinates in place. Quantities
computed before the call refer to the old coordinates and have to be
recomputed.
"""

import numpy as np

import ddgkit.linalg as linalg


def center_of_mass(mesh):
    """ Center of mass.

    Arithmetic mean of vertex coordinates.

    Parameters
    ----------
    mesh : Mesh
        A mesh with at least one vertex.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Mean vertex position.
    """
    return np.mean(mesh.points, axis=0)


def normalize(mesh, origin=None, rescale=False):
    """ Center and rescale mesh.

    Translate the mesh such that its center of mass coincides with
    `origin`. Optionally, scale the mesh to unit radius about its center
    of mass first.

    Parameters
    ----------
    mesh : Mesh
        The mesh to modify.
    origin : array_like, shape (3, ), optional
        Target position of the center of mass, defaults to the origin.
    rescale : bool, optional
        Scale to unit radius, i.e., the vertex farthest from the center of
        mass ends up at distance one.

    Raises
    ------
    DegenerateGeometryError
        If `rescale` is set and all vertices coincide.
    """
    origin = np.zeros(3) if origin is None else np.asarray(origin, dtype=float)
    points = mesh.points - center_of_mass(mesh)

    if rescale:
        radius = np.max(np.linalg.norm(points, axis=1))

        # Centering cancels digits relative to the coordinate magnitude.
        if radius <= linalg.EPS * np.max(np.abs(mesh.points)):
            raise linalg.DegenerateGeometryError('cannot rescale mesh of '
                                                 'zero radius')

        points /= radius

    # Write in place, views of the coordinate array stay valid.
    mesh.points[...] = points + origin
