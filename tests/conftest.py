import pytest

from ddgkit import primitives


@pytest.fixture
def tetrahedron():
    return primitives.tetrahedron()


@pytest.fixture
def cube():
    return primitives.cube()


@pytest.fixture
def icosahedron():
    return primitives.icosahedron()


@pytest.fixture
def icosphere():
    return primitives.icosphere(subdivisions=2)


@pytest.fixture
def grid():
    return primitives.grid(4, 4)


@pytest.fixture(params=['tetrahedron', 'cube', 'icosahedron', 'icosphere'])
def closed_mesh(request):
    return request.getfixturevalue(request.param)
