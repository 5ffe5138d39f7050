import pytest

from sprout.archetype import INVALID_ARCHETYPE_INDEX, Archetype, ArchetypeTable


def test_register_returns_sequential_indices():
    """Archetypes are numbered in registration order."""
    table = ArchetypeTable()

    fern = table.register(Archetype(name="fern"))
    oak = table.register(Archetype(name="oak", placeholder=3))

    assert (fern, oak) == (0, 1)
    assert len(table) == 2
    assert table.get(oak).name == "oak"
    assert table.get(oak).placeholder == 3


@pytest.mark.parametrize("index", [-1, 1, INVALID_ARCHETYPE_INDEX])
def test_get_out_of_range(index):
    """Looking up an unregistered archetype raises IndexError."""
    table = ArchetypeTable()
    table.register(Archetype())

    with pytest.raises(IndexError):
        table.get(index)
