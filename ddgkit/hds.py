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

""" Halfedge data structure.

An orientable 2-manifold mesh (with or without boundary) is described by
a vertex coordinate array and a handful of flat integer arrays:

    - halfedge origin, successor, predecessor, and face indices,
    - one outgoing halfedge per vertex,
    - one incident halfedge per face.

The two halfedges of edge ``e`` are stored at positions ``2*e`` and
``2*e + 1``, hence the opposite halfedge of ``h`` is ``h ^ 1``. Halfedge
``2*e`` is the canonical halfedge of edge ``e``; it always has a face.

Vertices, edges, halfedges, faces, and corners are represented by light
weight item objects. Items hold a dense index and a reference to their
parent mesh, every relation is resolved through the index arrays of the
mesh. Items are created once and can be compared by identity.

Note
----
To ease debugging, this module relies on assertions which can slow down
script execution. You can disable assertions by running in optimized mode
via the "-O" command line argument.
"""

from pathlib import Path
from operator import index as _index

import numpy as np


class Mesh:
    """ Mesh kernel.

    The combinatorics of a mesh are built by converting a sequence of
    vertex coordinates and a sequence of face definitions to its halfedge
    representation. Connectivity is immutable after construction, only
    vertex coordinates may change.

    Parameters
    ----------
    points : array_like, shape (n, 3)
        Vertex coordinates. Copied into a new float array.
    faces : array_like
        Face definitions, 0-based vertex indexing. Faces of different
        valence may be mixed.
    name : str, optional
        Name tag.

    Raises
    ------
    NonManifoldError
        When trying to initialize a mesh from non-manifold data.
    IndexError
        If a face refers to a vertex index out of bounds.
    ValueError
        If `points` has the wrong shape or a face definition is invalid.

    Note
    ----
    Face definitions determine the orientation of the mesh. For a closed
    surface, counter-clockwise faces (when viewed from outside) result in
    outward pointing face normals.
    """

    def __init__(self, points, faces, *, name=None):
        """ Initialize from vertex and face lists.
        """
        CWHITERED = '\33[41m'               # white on red background
        CEND = '\33[0m'

        points = np.array(points, dtype=float)

        if points.ndim != 2 or points.shape[1] != 3:
            raise ValueError(f'points must have shape (n, 3), '
                             f'got {points.shape}')

        self._points = points

        # Construction state. Python lists are converted to index arrays
        # once all faces are known.
        self._halfs = dict()
        self._h_origin = []
        self._h_face = []
        self._h_next = []
        self._f_halfedge = []

        for face in faces:
            self._add_face(face)

        self._link_boundary()
        self._freeze()

        # Item objects, one per dense index.
        self._verts = [Vertex(i, self) for i in range(len(self._points))]
        self._edges = [Edge(i, self) for i in range(len(self._h_origin) // 2)]
        self._hedges = [Halfedge(i, self) for i in range(len(self._h_origin))]
        self._faces = [Face(i, self) for i in range(len(self._f_halfedge))]
        self._corners = [Corner(i, self) for i in range(len(self._c_halfedge))]

        # Typically one does not expect isolated vertices in a mesh.
        if np.any(self._v_halfedge < 0):
            print(f'{CWHITERED}there are isolated vertices{CEND}')

        # Vertex neighborhood iterators will not work properly in the
        # presence of non-manifold vertices. Circulating around a manifold
        # vertex visits all of its outgoing halfedges.
        outgoing = np.bincount(self._h_origin, minlength=len(self._verts))

        for v in self._verts:
            if v.degree != outgoing[v._idx]:
                raise NonManifoldError(f'vertex #{v._idx} is non-manifold')

        # The corresponding property setter will strip any directory
        # prefix and type suffix from the name.
        self.name = name

    def __repr__(self):
        nv, ne, nf = self.size
        return f'Mesh({self._name!r}, {nv} vertices, {ne} edges, {nf} faces)'

    def __iter__(self):
        """ Face iterator.

        Yields
        ------
        Face
            Next face in order of ascending face indices.
        """
        return iter(self._faces)

    def __copy__(self):
        return self.copy()

    @property
    def points(self):
        """ Vertex coordinate array.

        Direct read and write access to vertex coordinates. Assigning an
        array of a different shape is not allowed since it would break
        the halfedge data structure.

        :type: ~numpy.ndarray
        """
        return self._points

    @points.setter
    def points(self, value):
        value = np.array(value, dtype=float)

        if value.shape != self._points.shape:
            raise InvariantViolation(f'coordinate array of shape '
                                     f'{self._points.shape} expected, '
                                     f'got {value.shape}')

        self._points = value

    @property
    def vertices(self):
        """ Vertex list.

        Read access to the vertex list, ordered by vertex index. This list
        should not be modified directly.

        :type: list[Vertex]
        """
        return self._verts

    @property
    def edges(self):
        """ Edge list.

        :type: list[Edge]
        """
        return self._edges

    @property
    def halfedges(self):
        """ Halfedge list.

        Halfedges ``mesh.halfedges[2*e]`` and ``mesh.halfedges[2*e + 1]``
        belong to edge ``mesh.edges[e]``.

        :type: list[Halfedge]
        """
        return self._hedges

    @property
    def faces(self):
        """ Face list.

        This is **not** the list passed as argument `faces` during mesh
        construction but it can be generated easily with a list
        comprehension:

        >>> faces = [[int(v) for v in f] for f in mesh]

        :type: list[Face]
        """
        return self._faces

    @property
    def corners(self):
        """ Corner list.

        Corners are enumerated face by face, following the halfedge loop
        of each face.

        :type: list[Corner]
        """
        return self._corners

    @property
    def size(self):
        """ Mesh size.

        The attribute value :math:`(v, e, f)` holds the number of vertices,
        the number of edges, and the number of faces.

        :type: (int, int, int)
        """
        return len(self._verts), len(self._edges), len(self._faces)

    @property
    def triangular(self):
        """ Triangle mesh test.

        :type: bool
        """
        return all(len(f) == 3 for f in self._faces)

    @property
    def name(self):
        """ Name property.

        :type: str
        """
        return self._name

    @name.setter
    def name(self, value):
        self._name = value if value is None else Path(value).stem

    def copy(self):
        """ Mesh copy.

        Duplicate the mesh combinatorics and vertex coordinates.

        Returns
        -------
        Mesh
            Copy of the mesh.
        """
        faces = [[int(v) for v in f] for f in self._faces]
        return Mesh(self._points.copy(), faces, name=self._name)

    def _add_face(self, face):
        """ Add face during construction.

        Parameters
        ----------
        face : sequence of int
            Combinatorial face definition.
        """
        face = [_index(i) for i in face]
        n = len(face)

        # Check for degeneracies: All vertices have to be topologically
        # different. If this test is passed there still need to be at
        # least three vertices. Duplicate coordinates are not a problem.
        if len(set(face)) != n:
            raise ValueError('face contains duplicate vertices')

        if n < 3:
            raise ValueError('face has less than three vertices')

        nv = len(self._points)

        for i in face:
            if not 0 <= i < nv:
                raise IndexError(f'vertex index {i} out of range(0, {nv})')

        # Dry run.
        for k in range(n):
            v, w = face[k], face[(k + 1) % n]
            h = self._halfs.get((v, w))

            if h is not None and self._h_face[h] >= 0:
                raise NonManifoldError(f'edge ({v}, {w}) is non-manifold')

        f = len(self._f_halfedge)
        edge_loop = [self._add_halfedge(face[k], face[(k + 1) % n])
                     for k in range(n)]

        for i, h in enumerate(edge_loop):
            self._h_face[h] = f
            self._h_next[h] = edge_loop[(i + 1) % n]

        self._f_halfedge.append(edge_loop[0])

    def _add_halfedge(self, v, w):
        """ Create and add new halfedge.

        Both halfedges of an edge are created at once, the one pointing
        from `v` to `w` becomes the canonical halfedge of the new edge.
        If the halfedge is already mapped it is returned unchanged.

        Parameters
        ----------
        v : int
            Origin vertex of the halfedge.
        w : int
            Target vertex of the halfedge

        Returns
        -------
        int
            Index of the halfedge pointing from `v` to `w`.
        """
        h = self._halfs.get((v, w))

        if h is None:
            h = len(self._h_origin)

            self._h_origin += [v, w]
            self._h_face += [-1, -1]
            self._h_next += [-1, -1]

            self._halfs[v, w] = h
            self._halfs[w, v] = h + 1

        return h

    def _link_boundary(self):
        """ Close boundary halfedge loops.

        Each boundary halfedge is linked to the boundary halfedge leaving
        its target vertex. A manifold vertex has at most one outgoing
        boundary halfedge.
        """
        boundary = dict()

        for h, f in enumerate(self._h_face):
            if f < 0:
                v = self._h_origin[h]

                if v in boundary:
                    raise NonManifoldError(f'vertex #{v} is non-manifold')

                boundary[v] = h

        # The number of incoming and outgoing boundary halfedges of a
        # vertex agree, so the lookup cannot fail.
        for h in boundary.values():
            self._h_next[h] = boundary[self._h_origin[h ^ 1]]

    def _freeze(self):
        """ Convert construction lists to index arrays.
        """
        nh = len(self._h_origin)

        self._h_origin = np.array(self._h_origin, dtype=np.intp)
        self._h_face = np.array(self._h_face, dtype=np.intp)
        self._h_next = np.array(self._h_next, dtype=np.intp)
        self._f_halfedge = np.array(self._f_halfedge, dtype=np.intp)

        self._h_prev = np.empty(nh, dtype=np.intp)
        self._h_prev[self._h_next] = np.arange(nh)

        # Prefer boundary halfedges as outgoing halfedges of boundary
        # vertices. Later assignments win.
        self._v_halfedge = np.full(len(self._points), -1, dtype=np.intp)
        self._v_halfedge[self._h_origin] = np.arange(nh)

        border = np.flatnonzero(self._h_face < 0)
        self._v_halfedge[self._h_origin[border]] = border

        # Corners follow the halfedge loops of faces.
        corners = []

        for h in self._f_halfedge:
            start = h

            while True:
                corners.append(h)
                h = self._h_next[h]

                if h == start:
                    break

        self._c_halfedge = np.array(corners, dtype=np.intp)
        self._h_corner = np.full(nh, -1, dtype=np.intp)
        self._h_corner[self._c_halfedge] = np.arange(len(corners))

        self._halfs = None

    def _check(self):
        """ Perform sanity checks.
        """
        nh = len(self._hedges)

        assert nh % 2 == 0
        assert np.all(self._h_next[self._h_prev] == np.arange(nh))
        assert np.all(self._h_face[0::2] >= 0)

        for h in self._hedges:
            h._check()

        for v in self._verts:
            assert self._verts[v._idx] is v
            v._check()

        for f in self._faces:
            assert self._faces[f._idx] is f
            f._check()

    def _viter(self):
        return iter(self._verts)

    def _eiter(self):
        return iter(self._edges)

    def _hiter(self):
        return iter(self._hedges)

    def _fiter(self):
        return iter(self._faces)

    def _citer(self):
        return iter(self._corners)


class Vertex:
    """ Vertex base class.

    Vertex coordinates are stored in the parent mesh and accessed via the
    :attr:`point` property.

    Parameters
    ----------
    index : int
        Vertex index.
    parent : Mesh
        The parent mesh object.

    Note
    ----
    In addition to :attr:`index`, implementations of the special functions
    :meth:`~object.__int__` and :meth:`~object.__index__` are provided.
    The latter makes it possible to use vertex instances as list indices.
    """

    def __init__(self, index, parent):
        self._idx = index
        self._mesh = parent

    def __repr__(self):
        return f'Vertex({self._idx})'

    def __str__(self):
        return f'v {self._idx} {self.point}'

    def __index__(self):
        """ Vertex index.

        Vertices can be used directly as list and array indices, i.e.,
        one can write ``some_list[v]`` instead of the slightly longer
        ``some_list[v.index]`` expression.

        Returns
        -------
        int
            Vertex index.
        """
        return self._idx

    def __int__(self):
        return self._idx

    def __bool__(self):
        return True

    @property
    def index(self):
        """ Vertex index.

        Position of the vertex in the list :attr:`~Mesh.vertices` of all
        mesh vertices. Same as ``int(self)``.

        :type: int
        """
        return self._idx

    @property
    def point(self):
        """ Vertex coordinates.

        Read and write access to vertex coordinates. View of the
        vertex coordinate array.

        :type: ~numpy.ndarray
        """
        return self._mesh._points[self._idx, ...]

    @point.setter
    def point(self, value):
        self._mesh._points[self._idx, ...] = value

    @property
    def halfedge(self):
        """ Outward pointing halfedge.

        A halfedge that starts at the vertex or :obj:`None` for isolated
        vertices. For boundary vertices this is the outgoing boundary
        halfedge.

        :type: Halfedge
        """
        h = self._mesh._v_halfedge[self._idx]
        return None if h < 0 else self._mesh._hedges[h]

    @property
    def degree(self):
        """ Vertex degree.

        The number of adjacent vertices, equivalent to the number of
        incident edges -- also called the valence of a vertex.

        :type: int
        """
        return sum(1 for _ in self._hiter())

    @property
    def boundary(self):
        """ Topological state.

        A vertex is defined to be a boundary vertex if it is incident to
        a boundary halfedge.

        :type: bool
        """
        return any(h.boundary for h in self._hiter())

    @property
    def isolated(self):
        """ Topological state.

        A vertex is isolated if it is not incident to any face.

        :type: bool
        """
        return bool(self._mesh._v_halfedge[self._idx] < 0)

    def _check(self):
        """ Perform sanity checks.
        """
        for h in self._hiter():
            assert h.origin is self

    def _viter(self):
        """ Adjacent vertex iterator.
        """
        for h in self._hiter():
            yield h.target

    def _fiter(self):
        """ Incident face iterator.
        """
        for h in self._hiter():
            if not h.boundary:
                yield h.face

    def _citer(self):
        """ Incident corner iterator.
        """
        for h in self._hiter():
            if not h.boundary:
                yield h.corner

    def _hiter(self):
        """ Outgoing halfedge iterator.

        Halfedges are visited in counter-clockwise order.
        """
        mesh = self._mesh
        start = mesh._v_halfedge[self._idx]

        if start < 0:
            return

        h = start

        while True:
            yield mesh._hedges[h]
            h = mesh._h_prev[h] ^ 1

            if h == start:
                return


class Halfedge:
    """ Halfedge base class.

    A closed loop of halfedges defines a face and its orientation. The
    face of a halfedge is the face to its left, successor and predecessor
    refer to the next and previous halfedge in the loop.

    Parameters
    ----------
    index : int
        Halfedge index.
    parent : Mesh
        The parent mesh object.
    """

    def __init__(self, index, parent):
        self._idx = index
        self._mesh = parent

    def __repr__(self):
        return f'Halfedge({self.origin!r}, {self.target!r})'

    def __str__(self):
        return f'h ({int(self.origin)}, {int(self.target)})'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    def __bool__(self):
        return True

    def __iter__(self):
        """ Vertex iterator.

        Produces the origin and target vertex of a halfedge.

        Yields
        ------
        Vertex
            Next vertex.
        """
        yield self.origin
        yield self.target

    @property
    def index(self):
        """ Halfedge index.

        :type: int
        """
        return self._idx

    @property
    def origin(self):
        """ Halfedge origin (tail) vertex.

        :type: Vertex
        """
        return self._mesh._verts[self._mesh._h_origin[self._idx]]

    @property
    def target(self):
        """ Halfedge target (tip) vertex.

        :type: Vertex
        """
        return self._mesh._verts[self._mesh._h_origin[self._idx ^ 1]]

    @property
    def vector(self):
        """ Halfedge direction vector.

        The vector ``self.target.point - self.origin.point``.

        :type: ~numpy.ndarray
        """
        mesh = self._mesh
        points = mesh._points

        return (points[mesh._h_origin[self._idx ^ 1]]
                - points[mesh._h_origin[self._idx]])

    @property
    def next(self):
        """ Successor halfedge.

        :type: Halfedge
        """
        return self._mesh._hedges[self._mesh._h_next[self._idx]]

    @property
    def prev(self):
        """ Predecessor halfedge.

        :type: Halfedge
        """
        return self._mesh._hedges[self._mesh._h_prev[self._idx]]

    @property
    def pair(self):
        """ Opposite halfedge.

        :type: Halfedge
        """
        return self._mesh._hedges[self._idx ^ 1]

    @property
    def edge(self):
        """ Underlying edge.

        :type: Edge
        """
        return self._mesh._edges[self._idx >> 1]

    @property
    def face(self):
        """ Incident face.

        The face to left of the halfedge or :py:obj:`None` in case of
        a boundary halfedge.

        :type: Face
        """
        f = self._mesh._h_face[self._idx]
        return None if f < 0 else self._mesh._faces[f]

    @property
    def corner(self):
        """ Corner at the origin vertex.

        :type: Corner

        Raises
        ------
        BoundaryCaseError
            If called for a boundary halfedge.
        """
        c = self._mesh._h_corner[self._idx]

        if c < 0:
            raise BoundaryCaseError('attribute undefined for boundary '
                                    'halfedge')

        return self._mesh._corners[c]

    @property
    def orientation(self):
        """ Orientation relative to the underlying edge.

        :obj:`True` if the halfedge points from the first to the second
        vertex of its edge.

        :type: bool
        """
        return self._idx & 1 == 0

    @property
    def boundary(self):
        """ Topological state.

        A halfedge is called a boundary halfedge if its :attr:`face`
        attribute evaluates to :obj:`None`.

        :type: bool
        """
        return bool(self._mesh._h_face[self._idx] < 0)

    def _check(self):
        """ Perform sanity checks.
        """
        assert self.pair.pair is self
        assert self.next.prev is self
        assert self.next.origin is self.target
        assert self.edge is self.pair.edge
        assert self.next.face is self.face


class Edge:
    """ Edge base class.

    An edge is an unordered pair of halfedges. Its canonical halfedge
    determines the first and second vertex.

    Parameters
    ----------
    index : int
        Edge index.
    parent : Mesh
        The parent mesh object.
    """

    def __init__(self, index, parent):
        self._idx = index
        self._mesh = parent

    def __repr__(self):
        v, w = self
        return f'Edge({v!r}, {w!r})'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    def __bool__(self):
        return True

    def __iter__(self):
        """ Vertex iterator.

        Yields
        ------
        Vertex
            First vertex, then second vertex.
        """
        yield from self.halfedge

    @property
    def index(self):
        """ Edge index.

        :type: int
        """
        return self._idx

    @property
    def halfedge(self):
        """ Canonical halfedge.

        Never a boundary halfedge.

        :type: Halfedge
        """
        return self._mesh._hedges[2 * self._idx]

    @property
    def boundary(self):
        """ Topological state.

        An edge is a boundary edge if one of its halfedges is a boundary
        halfedge.

        :type: bool
        """
        return bool(self._mesh._h_face[2 * self._idx + 1] < 0)


class Face:
    """ Face base class.

    In a halfedge based mesh representation a face is defined by the
    closed loop of halfedges starting at the :attr:`halfedge` attribute.

    Parameters
    ----------
    index : int
        Face index.
    parent : Mesh
        The parent mesh object.
    """

    def __init__(self, index, parent):
        self._idx = index
        self._mesh = parent

    def __repr__(self):
        return f'Face({self._idx})'

    def __str__(self):
        return f'f {self._idx} {[int(v) for v in self]}'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    def __len__(self):
        """ Face valence.

        Returns
        -------
        int
            Number of vertices.
        """
        return sum(1 for _ in self._hiter())

    def __bool__(self):
        return True

    def __array__(self, dtype=None, copy=None):
        """ NumPy support.

        Returns
        -------
        ~numpy.ndarray
            Array of vertex coordinates.
        """
        return np.array([v.point for v in self], dtype=dtype, copy=copy)

    def __iter__(self):
        """ Vertex iterator.

        The returned :term:`iterator` visits the vertices of ``self``
        starting with the ``self.halfedge.origin`` vertex.

        Yields
        ------
        Vertex
            Next vertex in counter-clockwise traversal.
        """
        return self._viter()

    @property
    def index(self):
        """ Face index.

        :type: int
        """
        return self._idx

    @property
    def halfedge(self):
        """ Incident halfedge.

        :type: Halfedge
        """
        return self._mesh._hedges[self._mesh._f_halfedge[self._idx]]

    @property
    def valence(self):
        """ Face valence.

        Number of incident vertices. Same as ``len(self)``.

        :type: int
        """
        return len(self)

    @property
    def boundary(self):
        """ Topological state.

        A face is defined to be a boundary face if one of the incident
        edges is a boundary edge.

        :type: bool

        Note
        ----
        A face only incident with boundary vertices is **not** classified
        as a boundary face.
        """
        return any(h.pair.boundary for h in self._hiter())

    @property
    def barycenter(self):
        """ Face barycenter.

        Arithmetic mean of vertex coordinates.

        :type: ~numpy.ndarray
        """
        return sum(v.point for v in self) / len(self)

    def _check(self):
        """ Perform sanity checks.
        """
        for h in self._hiter():
            assert h.face is self

    def _viter(self):
        """ Incident vertex iterator.
        """
        for h in self._hiter():
            yield h.origin

    def _citer(self):
        """ Incident corner iterator.
        """
        for h in self._hiter():
            yield h.corner

    def _eiter(self):
        """ Incident edge iterator.
        """
        for h in self._hiter():
            yield h.edge

    def _hiter(self):
        """ Incident halfedge iterator.
        """
        mesh = self._mesh
        start = mesh._f_halfedge[self._idx]
        h = start

        while True:
            yield mesh._hedges[h]
            h = mesh._h_next[h]

            if h == start:
                return


class Corner:
    """ Corner base class.

    The angular region of a face at one of its vertices. A corner is
    identified with the face halfedge that leaves its vertex.

    Parameters
    ----------
    index : int
        Corner index.
    parent : Mesh
        The parent mesh object.
    """

    def __init__(self, index, parent):
        self._idx = index
        self._mesh = parent

    def __repr__(self):
        return f'Corner({self._idx})'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    def __bool__(self):
        return True

    @property
    def index(self):
        """ Corner index.

        :type: int
        """
        return self._idx

    @property
    def halfedge(self):
        """ Defining halfedge.

        The halfedge of :attr:`face` that starts at :attr:`vertex`.

        :type: Halfedge
        """
        return self._mesh._hedges[self._mesh._c_halfedge[self._idx]]

    @property
    def vertex(self):
        """ Corner vertex.

        :type: Vertex
        """
        return self.halfedge.origin

    @property
    def face(self):
        """ Corner face.

        :type: Face
        """
        return self.halfedge.face


class NonManifoldError(Exception):
    """ Manifold exception base class.

    Raised if mesh data violates the manifold condition.
    """

    pass


class BoundaryCaseError(ValueError):
    """ Boundary exception.

    Raised if a quantity only defined for interior mesh items is
    requested for a boundary item.
    """

    pass


class InvariantViolation(Exception):
    """ Precondition exception.

    Raised when an operation receives data that breaks one of its
    structural assumptions, e.g., a non-triangular face passed to a
    function that requires triangles.
    """

    pass
