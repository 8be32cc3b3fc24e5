"""
Unit tests for the Document record.
"""

import pytest

from settee import Document
from settee.errors import InvalidArgumentError


class TestFields:

    def test_reserved_fields_kept_apart(self):
        doc = Document(fields={"_id": "abc", "_rev": "1-x", "title": "Hello"})
        assert doc.id == "abc"
        assert doc.rev == "1-x"
        assert doc["_id"] == "abc"
        assert doc["title"] == "Hello"
        assert doc.dehydrate() == {"_id": "abc", "_rev": "1-x", "title": "Hello"}

    def test_unset_reserved_fields_are_absent(self):
        doc = Document(fields={"title": "Hello"})
        assert "_id" not in doc
        assert "_rev" not in doc
        assert doc.dehydrate() == {"title": "Hello"}
        with pytest.raises(KeyError):
            doc["_rev"]

    def test_json_values(self):
        fields = {"s": "x", "n": 1.5, "b": False, "z": None, "o": {"a": [1, 2]}, "a": ["x", {"y": 1}]}
        doc = Document(fields=fields)
        assert dict(doc) == fields

    def test_delete_field(self):
        doc = Document(fields={"_id": "a", "title": "t"})
        del doc["title"]
        del doc["_id"]
        assert doc.dehydrate() == {}
        with pytest.raises(KeyError):
            del doc["title"]

    def test_len_and_iter(self):
        doc = Document(fields={"_id": "a", "x": 1, "y": 2})
        assert len(doc) == 3
        assert list(doc) == ["_id", "x", "y"]


class TestDirtyTracking:

    def test_fresh_document_is_clean(self):
        assert not Document().dirty

    def test_assignment_marks_dirty(self):
        doc = Document()
        doc["title"] = "x"
        assert doc.dirty

    def test_deletion_marks_dirty(self):
        doc = Document()
        doc.hydrate({"title": "x"})
        del doc["title"]
        assert doc.dirty

    def test_hydrate_does_not_mark_dirty(self):
        doc = Document()
        doc.hydrate({"_id": "a", "_rev": "1-x", "title": "x"})
        assert not doc.dirty

    def test_mark_clean(self):
        doc = Document(fields={"a": 1})
        doc.mark_clean()
        assert not doc.dirty


class TestHydrate:

    def test_round_trip(self):
        original = Document(fields={"_id": "a", "_rev": "2-b", "title": "t", "tags": ["x"], "meta": {"n": 1}})
        copy = Document()
        copy.hydrate(original.dehydrate())
        assert copy == original
        assert copy.dehydrate() == original.dehydrate()

    def test_partial_hydrate_keeps_other_fields(self):
        doc = Document(fields={"title": "t", "content": "c"})
        doc.hydrate({"_id": "new-id", "_rev": "1-abc"})
        assert doc.dehydrate() == {"_id": "new-id", "_rev": "1-abc", "title": "t", "content": "c"}

    def test_hydrate_overwrites(self):
        doc = Document(fields={"title": "old"})
        doc.hydrate({"title": "new"})
        assert doc["title"] == "new"

    def test_dehydrate_is_a_copy(self):
        doc = Document(fields={"title": "t"})
        data = doc.dehydrate()
        data["title"] = "changed"
        assert doc["title"] == "t"


class TestConvenience:

    def test_is_new(self):
        doc = Document(fields={"_id": "a"})
        assert doc.is_new()
        doc.rev = "1-x"
        assert not doc.is_new()

    def test_save_requires_database(self):
        with pytest.raises(InvalidArgumentError):
            Document().save()

    def test_delete_requires_database(self):
        with pytest.raises(InvalidArgumentError):
            Document().delete()

    def test_save_creates_new_document(self, db, adapter):
        adapter.reply(201, {"ok": True, "id": "gen", "rev": "1-a"})
        doc = db.new_document({"title": "t"})
        doc.save()
        assert adapter.last.method == "POST"
        assert doc.id == "gen"
        assert not doc.dirty

    def test_save_updates_dirty_document(self, db, adapter):
        adapter.reply(201, {"ok": True, "id": "a", "rev": "2-b"})
        doc = db.new_document()
        doc.hydrate({"_id": "a", "_rev": "1-a", "title": "t"})
        doc["title"] = "changed"
        doc.save()
        assert adapter.last.method == "PUT"
        assert adapter.last_body() == {"_id": "a", "_rev": "1-a", "title": "changed"}
        assert doc.rev == "2-b"

    def test_save_skips_clean_document(self, db, adapter):
        doc = db.new_document()
        doc.hydrate({"_id": "a", "_rev": "1-a"})
        doc.save()
        assert adapter.requests == []

    def test_delete(self, db, adapter):
        adapter.reply(200, {"ok": True, "id": "a", "rev": "2-b"})
        doc = db.new_document()
        doc.hydrate({"_id": "a", "_rev": "1-a"})
        assert doc.delete() == {"ok": True, "id": "a", "rev": "2-b"}
        assert adapter.last.get_header("If-Match") == ["1-a"]

    def test_str(self, db):
        doc = db.new_document({"_id": "a"})
        assert str(doc) == "pages/a"
