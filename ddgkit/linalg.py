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

""" Basic vector math.

For basic computations, specialized non-vectorized functions offer better
performance than some NumPy functions. Functions that divide by a vector
length refuse to do so for (numerically) vanishing vectors and raise a
:class:`DegenerateGeometryError` instead of producing ``nan`` values.
"""

import math
import numpy as np


EPS = 1e-12
""" Relative tolerance of degeneracy tests. A vector is degenerate if its
length does not exceed EPS times a reference length of the same scale.
"""


def angle(v, w):
    r""" Angle between vectors.

    Angle between vectors :math:`\mathbf{v}` and :math:`\mathbf{w}` in
    radians, a value in :math:`[0, \pi]`.

    Parameters
    ----------
    v, w : ~numpy.ndarray, shape (3, )
        Vector in 3-space.

    Raises
    ------
    DegenerateGeometryError
        If one of the vectors is the zero vector or vanishes relative to
        the other.

    Returns
    -------
    float
        Angle in radians.
    """
    a, b = norm(v), norm(w)

    if min(a, b) <= EPS * max(a, b):
        raise DegenerateGeometryError('angle undefined for zero vector')

    return math.acos(clamp(dot(v, w) / (a * b), -1.0, 1.0))


def clamp(x, lo, hi):
    """ Clamp value to range.

    Clamp `x` to the closed interval [`lo`, `hi`].

    Parameters
    ----------
    x : float
        Value to clamp.
    lo : float
        Lower bound.
    hi : float
        Upper bound.

    Returns
    -------
    float
        Clamped value.
    """
    assert lo <= hi

    # The order of arguments should guarantee that the data type does
    # not change if x is within bounds.
    return max(min(x, hi), lo)


def cross(u, v):
    r""" Cross product.

    Alternative to NumPy's vectorized :func:`~numpy.cross` function.

    Parameters
    ----------
    u, v : array_like, shape (3, )
        Vector in :math:`\mathbb{R}^3`.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Cross product of vectors :math:`\mathbf{u}` and :math:`\mathbf{v}`.
    """
    # Unpack the arrays. This will also catch any problem with array shape.
    u0, u1, u2 = u
    v0, v1, v2 = v

    return np.array([u1*v2 - u2*v1,
                     u2*v0 - u0*v2,
                     u0*v1 - u1*v0])


def dot(u, v):
    r""" Dot product.

    Inner product of vectors. Alternative to :func:`numpy.dot` for
    3-dimensional vectors.

    Parameters
    ----------
    u, v : array_like, shape (3, )
        Vector in :math:`\mathbb{R}^3`.

    Returns
    -------
    float
        Inner product :math:`\mathbf{u}^T \mathbf{v}`.
    """
    return float(u[0]*v[0] + u[1]*v[1] + u[2]*v[2])


def norm(u):
    r""" Length of vector.

    Parameters
    ----------
    u : array_like, shape (3, )
        Vector in :math:`\mathbb{R}^3`.

    Returns
    -------
    float
        Euclidean length of the vector :math:`\mathbf{u}`.
    """
    return math.sqrt(dot(u, u))


def sqrd(u):
    r""" Squared length of vector.

    Parameters
    ----------
    u : array_like, shape (3, )
        Vector in :math:`\mathbb{R}^3`.

    Returns
    -------
    float
        The value :math:`\mathbf{u}^T \mathbf{u}`.
    """
    return dot(u, u)


def unit(u, scale=1.0):
    r""" Vector normalization.

    Convenience function to normalize a vector.

    Parameters
    ----------
    u : ~numpy.ndarray, shape (3, )
        Vector in :math:`\mathbb{R}^3`.
    scale : float, optional
        Reference length. A vector is considered degenerate relative to
        this length, e.g., the summed lengths of the terms `u` was
        accumulated from.

    Raises
    ------
    DegenerateGeometryError
        If the length of `u` does not exceed ``EPS * scale``.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Normalized copy of input vector.
    """
    length = norm(u)

    if length <= EPS * scale:
        raise DegenerateGeometryError('cannot normalize zero vector')

    return u / length


class DegenerateGeometryError(ArithmeticError):
    """ Degenerate geometry exception.

    Raised when a computation would divide by a vanishing length, area,
    or normal vector, e.g., for zero-area triangles or coincident vertices.
    """

    pass
