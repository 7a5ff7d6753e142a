"""Tests for the vocabulary item service."""

import uuid
from datetime import timedelta

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from vocabkeep.core.app_exceptions import (
    ConflictError,
    InternalError,
    InvalidInputError,
    NotFoundError,
)
from vocabkeep.models.progress import LearningProgress
from vocabkeep.models.vocabulary import VocabularyItem
from vocabkeep.services.vocabulary import (
    create_item,
    delete_item,
    get_item,
    list_items,
    update_item,
)
from tests.helpers.seed import count_rows


class TestCreateItem:
    def test_creates_item_with_level_one_progress(self, db, clock, tenant_id):
        item = create_item(db, tenant_id, "ubiquitous", "found everywhere", now=clock.now)

        assert item.term == "ubiquitous"
        assert item.definition == "found everywhere"
        assert item.created_at == clock.now
        assert item.deleted_at is None

        progress = db.execute(
            select(LearningProgress).where(LearningProgress.item_id == item.item_id)
        ).scalar_one()
        assert progress.tenant_id == tenant_id
        assert progress.level == 1
        assert progress.next_due_at == clock.now + timedelta(days=1)
        assert progress.last_reviewed_at is None

    def test_strips_whitespace(self, db, tenant_id):
        item = create_item(db, tenant_id, "  laconic ", "\tusing few words\n")
        assert item.term == "laconic"
        assert item.definition == "using few words"

    def test_duplicate_term_conflicts_and_writes_nothing(self, db, tenant_id):
        create_item(db, tenant_id, "apple", "a fruit")

        with pytest.raises(ConflictError) as exc_info:
            create_item(db, tenant_id, "apple", "a company")

        assert exc_info.value.details == {"term": "apple"}
        assert count_rows(db, VocabularyItem) == 1
        assert count_rows(db, LearningProgress) == 1

    def test_same_term_in_different_tenants(self, db, tenant_id, other_tenant_id):
        create_item(db, tenant_id, "apple", "a fruit")
        create_item(db, other_tenant_id, "apple", "a fruit")

        assert count_rows(db, VocabularyItem) == 2
        assert count_rows(db, LearningProgress) == 2

    def test_term_reusable_after_retirement(self, db, tenant_id):
        first = create_item(db, tenant_id, "apple", "a fruit")
        delete_item(db, tenant_id, first.item_id)

        second = create_item(db, tenant_id, "apple", "still a fruit")

        assert second.item_id != first.item_id
        assert [item.item_id for item in list_items(db, tenant_id)] == [second.item_id]

    @pytest.mark.parametrize(
        ("term", "definition", "field"),
        [("", "defined", "term"), ("   ", "defined", "term"), ("word", "", "definition")],
    )
    def test_empty_fields_rejected(self, db, tenant_id, term, definition, field):
        with pytest.raises(InvalidInputError) as exc_info:
            create_item(db, tenant_id, term, definition)

        assert exc_info.value.details == {"field": field}
        assert count_rows(db, VocabularyItem) == 0

    def test_progress_failure_rolls_back_item(self, db, tenant_id, monkeypatch):
        """A failed progress insert leaves neither row behind."""

        def broken(*args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("connection reset"))

        monkeypatch.setattr("vocabkeep.services.vocabulary.add_progress", broken)

        with pytest.raises(InternalError):
            create_item(db, tenant_id, "orphan", "should not exist")

        assert count_rows(db, VocabularyItem) == 0
        assert count_rows(db, LearningProgress) == 0


class TestReadItems:
    def test_get_item(self, db, tenant_id):
        item = create_item(db, tenant_id, "gregarious", "fond of company")
        assert get_item(db, tenant_id, item.item_id).term == "gregarious"

    def test_get_item_other_tenant(self, db, tenant_id, other_tenant_id):
        item = create_item(db, tenant_id, "gregarious", "fond of company")
        with pytest.raises(NotFoundError):
            get_item(db, other_tenant_id, item.item_id)

    def test_list_items_newest_first(self, db, clock, tenant_id, other_tenant_id):
        older = create_item(db, tenant_id, "older", "first", now=clock.now)
        newer = create_item(db, tenant_id, "newer", "second", now=clock.advance(minutes=5))
        create_item(db, other_tenant_id, "foreign", "other tenant", now=clock.now)

        assert [item.item_id for item in list_items(db, tenant_id)] == [newer.item_id, older.item_id]

    def test_list_items_empty(self, db, tenant_id):
        assert list_items(db, tenant_id) == []


class TestUpdateItem:
    def test_updates_both_fields(self, db, tenant_id):
        item = create_item(db, tenant_id, "colour", "a hue")

        updated = update_item(db, tenant_id, item.item_id, term="color", definition="a visual hue")

        assert updated.term == "color"
        assert updated.definition == "a visual hue"
        db.expire_all()
        assert get_item(db, tenant_id, item.item_id).term == "color"

    def test_omitted_field_is_kept(self, db, tenant_id):
        item = create_item(db, tenant_id, "colour", "a hue")

        updated = update_item(db, tenant_id, item.item_id, definition="a shade")

        assert updated.term == "colour"
        assert updated.definition == "a shade"

    def test_keeping_own_term_is_not_a_conflict(self, db, tenant_id):
        item = create_item(db, tenant_id, "colour", "a hue")
        updated = update_item(db, tenant_id, item.item_id, term="colour", definition="a tint")
        assert updated.definition == "a tint"

    def test_term_taken_by_another_item(self, db, tenant_id):
        create_item(db, tenant_id, "apple", "a fruit")
        pear = create_item(db, tenant_id, "pear", "another fruit")

        with pytest.raises(ConflictError):
            update_item(db, tenant_id, pear.item_id, term="apple")

        db.expire_all()
        assert get_item(db, tenant_id, pear.item_id).term == "pear"

    def test_empty_definition_rejected(self, db, tenant_id):
        item = create_item(db, tenant_id, "terse", "brief")
        with pytest.raises(InvalidInputError):
            update_item(db, tenant_id, item.item_id, definition="  ")

    def test_progress_is_untouched(self, db, clock, tenant_id):
        item = create_item(db, tenant_id, "steady", "unchanging", now=clock.now)
        update_item(db, tenant_id, item.item_id, definition="firm")

        progress = db.execute(
            select(LearningProgress).where(LearningProgress.item_id == item.item_id)
        ).scalar_one()
        assert progress.level == 1
        assert progress.next_due_at == clock.now + timedelta(days=1)

    def test_retired_item_not_found(self, db, tenant_id):
        item = create_item(db, tenant_id, "gone", "away")
        delete_item(db, tenant_id, item.item_id)

        with pytest.raises(NotFoundError):
            update_item(db, tenant_id, item.item_id, definition="back")

    def test_other_tenant_not_found(self, db, tenant_id, other_tenant_id):
        item = create_item(db, tenant_id, "mine", "owned")
        with pytest.raises(NotFoundError):
            update_item(db, other_tenant_id, item.item_id, definition="stolen")


class TestDeleteItem:
    def test_soft_deletes_and_keeps_progress(self, db, clock, tenant_id):
        item = create_item(db, tenant_id, "fleeting", "brief", now=clock.now)

        delete_item(db, tenant_id, item.item_id, now=clock.now)

        stored = db.get(VocabularyItem, item.item_id)
        assert stored is not None
        assert stored.deleted_at == clock.now
        assert count_rows(db, LearningProgress) == 1
        with pytest.raises(NotFoundError):
            get_item(db, tenant_id, item.item_id)

    def test_delete_twice_not_found(self, db, tenant_id):
        item = create_item(db, tenant_id, "once", "one time")
        delete_item(db, tenant_id, item.item_id)

        with pytest.raises(NotFoundError):
            delete_item(db, tenant_id, item.item_id)

    def test_unknown_item_not_found(self, db, tenant_id):
        with pytest.raises(NotFoundError):
            delete_item(db, tenant_id, uuid.uuid4())

    def test_other_tenant_cannot_delete(self, db, tenant_id, other_tenant_id):
        item = create_item(db, tenant_id, "mine", "owned")

        with pytest.raises(NotFoundError):
            delete_item(db, other_tenant_id, item.item_id)

        assert get_item(db, tenant_id, item.item_id).deleted_at is None
