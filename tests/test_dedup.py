import pytest

from lifelapse.dedup import ImportedAssetSet


def test_membership_and_eviction():
    imported = ImportedAssetSet(["a", "b", "c"], max_size=3)
    assert "a" in imported
    imported.add("d")

    assert len(imported) == 3
    assert "b" not in imported
    assert imported.to_list() == ["c", "a", "d"]


def test_rejects_empty_capacity():
    with pytest.raises(ValueError):
        ImportedAssetSet(max_size=0)
