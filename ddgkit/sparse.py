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

""" Sparse matrix assembly.

Operators are assembled in two phases: entries are appended to an
unordered coordinate list, which is converted once into compressed sparse
row storage. Entries sharing a row and column index are summed during the
conversion.
"""

import numpy as np
import scipy.sparse as sp

import ddgkit.hds as hds


class TripletList:
    """ Coordinate list builder.

    Parameters
    ----------
    shape : (int, int)
        Shape of the assembled matrix.
    dtype : data-type, optional
        Data type of matrix entries.


    A diagonal matrix is assembled via

    .. code-block:: python
       :linenos:

       triplets = TripletList((n, n))

       for i, value in enumerate(values):
           triplets.append(i, i, value)

       matrix = triplets.tocsr()
    """

    def __init__(self, shape, dtype=float):
        self._shape = tuple(int(n) for n in shape)
        self._dtype = np.dtype(dtype)

        self._rows = []
        self._cols = []
        self._vals = []

    def __len__(self):
        return len(self._vals)

    @property
    def shape(self):
        """ Matrix shape.

        :type: (int, int)
        """
        return self._shape

    def append(self, row, col, value):
        """ Append entry.

        Parameters
        ----------
        row : int
            Row index, mesh items are accepted.
        col : int
            Column index, mesh items are accepted.
        value : scalar
            Entry value.

        Raises
        ------
        InvariantViolation
            If the index pair is out of bounds.
        """
        row, col = int(row), int(col)
        n, m = self._shape

        if not (0 <= row < n and 0 <= col < m):
            raise hds.InvariantViolation(f'entry ({row}, {col}) out of '
                                         f'bounds for shape {self._shape}')

        self._rows.append(row)
        self._cols.append(col)
        self._vals.append(value)

    def tocsr(self):
        """ Convert to compressed sparse row matrix.

        Returns
        -------
        ~scipy.sparse.csr_matrix
            The assembled matrix.
        """
        data = np.array(self._vals, dtype=self._dtype)
        rows = np.array(self._rows, dtype=np.intp)
        cols = np.array(self._cols, dtype=np.intp)

        return sp.coo_matrix((data, (rows, cols)), shape=self._shape,
                             dtype=self._dtype).tocsr()
