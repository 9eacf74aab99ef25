"""Tests for page_model module (PageDescriptor, SourceRegistry and PageCollection)."""

import pytest

from pdfcollate.editor.page_model import (
    PageCollection,
    PageDescriptor,
    PageId,
    SourceRegistry,
)
from pdfcollate.services.source_loader import MemoryFile
from pdfcollate.utils.exceptions import PageNotFoundError


def _registry_with(*counts: int) -> tuple[SourceRegistry, list]:
    registry = SourceRegistry()
    docs = [
        registry.add(MemoryFile(f"doc{i}.pdf", b""), count, f"doc{i}.pdf")
        for i, count in enumerate(counts)
    ]
    return registry, docs


def _positions(collection: PageCollection) -> list[int]:
    return [page.position for page in collection]


class TestPageId:
    def test_str_form(self):
        assert str(PageId(1, 4)) == "1-4"


class TestPageDescriptor:
    def test_default_values(self):
        page = PageDescriptor(id=PageId(0, 0))
        assert page.rotation == 0
        assert page.selected is False
        assert page.position == 0

    def test_tuple_id_is_normalized(self):
        page = PageDescriptor(id=(0, 2))
        assert isinstance(page.id, PageId)
        assert page.source_index == 0
        assert page.page_index == 2

    def test_rotation_normalization(self):
        assert PageDescriptor(id=PageId(0, 0), rotation=450).rotation == 90

    def test_invalid_rotation_rounds(self):
        assert PageDescriptor(id=PageId(0, 0), rotation=45).rotation in (0, 90)

    def test_rotate_right_and_left(self):
        page = PageDescriptor(id=PageId(0, 0))
        page.rotate_right()
        assert page.rotation == 90
        page.rotate_left()
        page.rotate_left()
        assert page.rotation == 270

    def test_four_rotations_restore_original(self):
        page = PageDescriptor(id=PageId(0, 0), rotation=180)
        for _ in range(4):
            page.rotate(90)
        assert page.rotation == 180

    def test_position_not_settable(self):
        page = PageDescriptor(id=PageId(0, 0))
        with pytest.raises(AttributeError):
            page.position = 5

    def test_to_dict(self):
        page = PageDescriptor(id=PageId(1, 2), display_name="b.pdf", rotation=90)
        d = page.to_dict()
        assert d["id"] == "1-2"
        assert d["rotation"] == 90
        assert d["display_name"] == "b.pdf"


class TestSourceRegistry:
    def test_indices_follow_load_order(self):
        registry, docs = _registry_with(3, 2)
        assert [d.source_index for d in docs] == [0, 1]
        assert registry.get(1) is docs[1]
        assert registry.get(5) is None
        assert registry.total_pages == 5

    def test_clear(self):
        registry, _docs = _registry_with(1)
        registry.clear()
        assert len(registry) == 0


class TestPageCollectionLoad:
    def test_flattens_sources_in_load_order(self):
        _registry, docs = _registry_with(3, 2)
        collection = PageCollection()
        collection.load(docs)
        assert [str(i) for i in collection.ids()] == ["0-0", "0-1", "0-2", "1-0", "1-1"]
        assert _positions(collection) == [1, 2, 3, 4, 5]

    def test_new_pages_start_unrotated_and_unselected(self):
        _registry, docs = _registry_with(2)
        collection = PageCollection()
        created = collection.load(docs)
        assert all(p.rotation == 0 and not p.selected for p in created)
        assert all(p.display_name == "doc0.pdf" for p in created)

    def test_append_keeps_existing_ids_and_positions(self):
        registry, docs = _registry_with(2)
        collection = PageCollection()
        collection.load(docs)
        collection.replace_order(list(reversed(collection.pages())))
        before = [(p.id, p.position) for p in collection]

        extra = registry.add(MemoryFile("c.pdf", b""), 2, "c.pdf")
        collection.load([extra])

        assert [(p.id, p.position) for p in collection][:2] == before
        assert collection.ids()[2:] == [PageId(1, 0), PageId(1, 1)]
        assert len(collection) == registry.total_pages

    def test_replace_drops_previous_pages(self):
        _registry, docs = _registry_with(3, 1)
        collection = PageCollection()
        collection.load(docs)
        collection.load(docs[1:], replace=True)
        assert collection.ids() == [PageId(1, 0)]

    def test_duplicate_ids_rejected(self):
        _registry, docs = _registry_with(2)
        collection = PageCollection()
        collection.load(docs)
        with pytest.raises(ValueError):
            collection.load(docs)


class TestPageCollectionMutations:
    def _collection(self, *counts):
        _registry, docs = _registry_with(*counts)
        collection = PageCollection()
        collection.load(docs)
        return collection

    def test_delete_preserves_order_and_renumbers(self):
        collection = self._collection(3, 2)
        removed = collection.delete([PageId(0, 1), PageId(1, 0)])
        assert removed == 2
        assert collection.ids() == [PageId(0, 0), PageId(0, 2), PageId(1, 1)]
        assert _positions(collection) == [1, 2, 3]

    def test_delete_counts_only_present_ids(self):
        collection = self._collection(3)
        assert collection.delete([PageId(0, 0), PageId(9, 9)]) == 1
        assert len(collection) == 2

    def test_delete_empty_is_noop(self):
        collection = self._collection(3)
        assert collection.delete([]) == 0
        assert len(collection) == 3

    def test_rotate_touches_one_page(self):
        collection = self._collection(3)
        collection.rotate(PageId(0, 1))
        assert [p.rotation for p in collection] == [0, 90, 0]

    def test_rotate_unknown_id_raises(self):
        collection = self._collection(1)
        with pytest.raises(PageNotFoundError):
            collection.rotate(PageId(3, 0))

    def test_renumber_is_idempotent(self):
        collection = self._collection(4)
        collection.renumber()
        collection.renumber()
        assert _positions(collection) == [1, 2, 3, 4]

    def test_replace_order_requires_permutation(self):
        collection = self._collection(3)
        with pytest.raises(ValueError):
            collection.replace_order(collection.pages()[:2])

    def test_snapshot_is_detached(self):
        collection = self._collection(2)
        snapshot = collection.snapshot()
        collection.rotate(PageId(0, 0))
        collection.delete([PageId(0, 1)])
        assert snapshot[0].rotation == 0
        assert [p.position for p in snapshot] == [1, 2]

    def test_at_position_and_contains(self):
        collection = self._collection(2)
        assert collection.at_position(2).id == PageId(0, 1)
        assert collection.at_position(0) is None
        assert PageId(0, 1) in collection
        assert "0-1" not in collection

    def test_clear(self):
        collection = self._collection(2)
        collection.clear()
        assert len(collection) == 0
        assert collection.ids() == []
