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

""" Combinatorial mesh item neighborhood iterators.

Adjacent/incident mesh items are visited in counter-clockwise order as
determined by the mesh orientation (whenever it makes sense to consider
oriented item traversal).

Note
----
When applied to a :class:`~ddgkit.hds.Mesh` instance, the iterators
visit the items of the corresponding container in order of ascending
indices.
"""


def verts(obj):
    """ Vertex iterator.

    The returned iterator traverses adjacent/incident vertices
    of `obj` depending on its type:

    .. table::
       :width: 100%
       :widths: 20, 80

       =============== ================================================
       :class:`Vertex` ↺ traversal of adjacent vertices
       --------------- ------------------------------------------------
       :class:`Face`   ↺ traversal of incident vertices
       --------------- ------------------------------------------------
       :class:`Mesh`   in-order traversal of :attr:`~Mesh.vertices`
       =============== ================================================

    Parameters
    ----------
    obj : Vertex or Face or Mesh
        The base object.

    Yields
    ------
    Vertex
    """
    return obj._viter()


def halfs(obj):
    """ Halfedge iterator.

    .. table::
       :width: 100%
       :widths: 20, 80

       =============== ================================================
       :class:`Vertex` ↺ traversal of outgoing halfedges
       --------------- ------------------------------------------------
       :class:`Face`   ↺ traversal of the face's halfedge loop
       --------------- ------------------------------------------------
       :class:`Mesh`   in-order traversal of :attr:`~Mesh.halfedges`
       =============== ================================================

    Parameters
    ----------
    obj : Vertex or Face or Mesh
        The base object.

    Yields
    ------
    Halfedge

    Note
    ----
    Outgoing halfedges of a boundary vertex include its boundary
    halfedge, i.e., a halfedge without face.
    """
    return obj._hiter()


def edges(obj):
    """ Edge iterator.

    Parameters
    ----------
    obj : Face or Mesh
        The base object.

    Yields
    ------
    Edge
    """
    return obj._eiter()


def faces(obj):
    """ Face iterator.

    .. table::
       :width: 100%
       :widths: 20, 80

       =============== ================================================
       :class:`Vertex` ↺ traversal of incident faces
       --------------- ------------------------------------------------
       :class:`Mesh`   in-order traversal of :attr:`~Mesh.faces`
       =============== ================================================

    Parameters
    ----------
    obj : Vertex or Mesh
        The base object.

    Yields
    ------
    Face
    """
    return obj._fiter()


def corners(obj):
    """ Corner iterator.

    .. table::
       :width: 100%
       :widths: 20, 80

       =============== ================================================
       :class:`Vertex` ↺ traversal of incident corners
       --------------- ------------------------------------------------
       :class:`Face`   ↺ traversal of the face's corners
       --------------- ------------------------------------------------
       :class:`Mesh`   in-order traversal of :attr:`~Mesh.corners`
       =============== ================================================

    Parameters
    ----------
    obj : Vertex or Face or Mesh
        The base object.

    Yields
    ------
    Corner
    """
    return obj._citer()
