"""Tests for the in-memory TodoStore."""

from datetime import UTC, datetime

import pytest

from todo_service.core.store import DELETED_MESSAGE, TodoStore
from todo_service.exceptions import (
    EmptyPatchError,
    ErrorKind,
    InvalidIdentifierError,
    TodoNotFoundError,
)


class TestCreate:
    """Tests for TodoStore.create."""

    def test_first_todo_gets_id_one(self, store: TodoStore):
        todo = store.create("Test Todo")

        assert todo.id == 1
        assert todo.title == "Test Todo"
        assert todo.description is None
        assert todo.completed is False
        assert todo.archived is False

    def test_create_with_description(self, store: TodoStore):
        todo = store.create("Test Todo", "Test Description")

        assert todo.description == "Test Description"

    def test_ids_increase_by_one(self, store: TodoStore):
        ids = [store.create(f"Todo {i}").id for i in range(5)]

        assert ids == [1, 2, 3, 4, 5]

    def test_ids_never_reused_after_delete(self, store: TodoStore):
        """Deleted identifiers are never handed out again."""
        store.create("Todo 1")
        second = store.create("Todo 2")
        store.delete(second.id)

        third = store.create("Todo 3")

        assert third.id == 3

    def test_ids_not_reused_after_deleting_everything(self, store: TodoStore):
        for _ in range(3):
            store.create("Todo")
        for todo_id in (1, 2, 3):
            store.delete(todo_id)

        assert store.create("Again").id == 4

    def test_timestamps_equal_at_creation(self, store: TodoStore, clock):
        todo = store.create("Test Todo")

        assert todo.created_at == todo.updated_at
        assert clock.calls == 1

    def test_timestamps_not_in_future_with_real_clock(self):
        store = TodoStore()
        before = datetime.now(UTC)

        todo = store.create("Test Todo")

        after = datetime.now(UTC)
        assert before <= todo.created_at <= after
        assert todo.created_at == todo.updated_at
        assert todo.created_at.tzinfo is not None


class TestList:
    """Tests for TodoStore.list."""

    def test_empty_store_returns_empty_list(self, store: TodoStore):
        assert store.list() == []

    def test_returns_records_in_insertion_order(self, store: TodoStore):
        store.create("Todo 1")
        store.create("Todo 2")
        store.create("Todo 3")

        assert [todo.title for todo in store.list()] == ["Todo 1", "Todo 2", "Todo 3"]

    def test_returned_records_are_copies(self, store: TodoStore):
        """Mutating a listed record leaves the stored record untouched."""
        store.create("Original")

        listed = store.list()
        listed[0].title = "Tampered"
        listed.clear()

        assert len(store) == 1
        assert store.get(1).title == "Original"


class TestGet:
    """Tests for TodoStore.get."""

    def test_returns_matching_record(self, store: TodoStore):
        store.create("Todo 1")
        store.create("Todo 2")

        todo = store.get(2)

        assert todo.id == 2
        assert todo.title == "Todo 2"

    def test_missing_id_raises_not_found(self, store: TodoStore):
        store.create("Todo 1")

        with pytest.raises(TodoNotFoundError, match="Todo with ID 999 not found") as exc_info:
            store.get(999)

        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    @pytest.mark.parametrize("bad_id", [0, -1, -100, True, 1.5, "1", None])
    def test_invalid_id_raises_invalid_identifier(self, store: TodoStore, bad_id):
        """Non-positive or non-int identifiers fail even when records exist."""
        store.create("Todo 1")

        with pytest.raises(InvalidIdentifierError) as exc_info:
            store.get(bad_id)

        assert exc_info.value.kind is ErrorKind.INVALID_IDENTIFIER

    def test_returned_record_is_a_copy(self, store: TodoStore):
        store.create("Original")

        store.get(1).completed = True

        assert store.get(1).completed is False


class TestUpdate:
    """Tests for TodoStore.update."""

    def test_updates_title_only(self, store: TodoStore):
        store.create("Original Title", "Original Description")

        todo = store.update(1, {"title": "Updated Title"})

        assert todo.title == "Updated Title"
        assert todo.description == "Original Description"
        assert todo.completed is False

    def test_updates_completed(self, store: TodoStore):
        store.create("Todo")

        todo = store.update(1, {"completed": True})

        assert todo.completed is True
        assert todo.title == "Todo"

    def test_updates_multiple_fields(self, store: TodoStore):
        store.create("Todo", "Description")

        todo = store.update(
            1,
            {"title": "New", "description": "New Description", "completed": True},
        )

        assert (todo.title, todo.description, todo.completed) == ("New", "New Description", True)

    def test_explicit_false_counts_as_present(self, store: TodoStore):
        store.create("Todo")
        store.update(1, {"completed": True})

        todo = store.update(1, {"completed": False})

        assert todo.completed is False

    def test_empty_description_counts_as_present(self, store: TodoStore):
        store.create("Todo", "Some text")

        todo = store.update(1, {"description": ""})

        assert todo.description == ""

    def test_update_persists(self, store: TodoStore):
        store.create("Todo")
        store.update(1, {"title": "Changed"})

        assert store.get(1).title == "Changed"

    def test_updated_at_moves_forward_created_at_unchanged(self, store: TodoStore):
        created = store.create("Todo")

        first = store.update(1, {"title": "One"})
        second = store.update(1, {"title": "Two"})

        assert first.updated_at > created.updated_at
        assert second.updated_at > first.updated_at
        assert second.created_at == created.created_at

    def test_empty_patch_raises(self, store: TodoStore):
        store.create("Todo")

        with pytest.raises(EmptyPatchError, match="At least one field") as exc_info:
            store.update(1, {})

        assert exc_info.value.kind is ErrorKind.EMPTY_PATCH

    def test_patch_with_only_unknown_fields_raises(self, store: TodoStore):
        store.create("Todo")

        with pytest.raises(EmptyPatchError):
            store.update(1, {"archived": True, "id": 7})

    def test_unknown_fields_are_ignored(self, store: TodoStore):
        store.create("Todo")

        todo = store.update(1, {"title": "New", "id": 42})

        assert todo.id == 1
        assert todo.title == "New"

    def test_failed_update_leaves_timestamp_unchanged(self, store: TodoStore):
        created = store.create("Todo")

        with pytest.raises(EmptyPatchError):
            store.update(1, {})

        assert store.get(1).updated_at == created.updated_at

    def test_missing_id_raises_not_found(self, store: TodoStore):
        with pytest.raises(TodoNotFoundError):
            store.update(999, {"title": "Updated"})

    def test_not_found_checked_before_empty_patch(self, store: TodoStore):
        with pytest.raises(TodoNotFoundError):
            store.update(5, {})

    @pytest.mark.parametrize("bad_id", [0, -1])
    def test_invalid_id_raises(self, store: TodoStore, bad_id: int):
        store.create("Todo")

        with pytest.raises(InvalidIdentifierError):
            store.update(bad_id, {"title": "Updated"})


class TestDelete:
    """Tests for TodoStore.delete."""

    def test_returns_confirmation(self, store: TodoStore):
        store.create("Todo 1")

        assert store.delete(1) == {"message": DELETED_MESSAGE}
        assert DELETED_MESSAGE == "Todo item deleted successfully"

    def test_removes_exactly_one_record(self, store: TodoStore):
        store.create("Todo 1")
        store.create("Todo 2")

        store.delete(1)

        remaining = store.list()
        assert [todo.id for todo in remaining] == [2]
        with pytest.raises(TodoNotFoundError):
            store.get(1)

    def test_deleting_everything_leaves_empty_list(self, store: TodoStore):
        store.create("Todo 1")
        store.create("Todo 2")

        store.delete(2)
        store.delete(1)

        assert store.list() == []

    def test_deleting_twice_raises_not_found(self, store: TodoStore):
        store.create("Todo 1")
        store.delete(1)

        with pytest.raises(TodoNotFoundError):
            store.delete(1)

    @pytest.mark.parametrize("bad_id", [0, -3])
    def test_invalid_id_raises(self, store: TodoStore, bad_id: int):
        with pytest.raises(InvalidIdentifierError):
            store.delete(bad_id)


class TestArchive:
    """Tests for TodoStore.archive."""

    def test_sets_archived_and_refreshes_updated_at(self, store: TodoStore):
        created = store.create("Todo")

        archived = store.archive(1)

        assert archived.archived is True
        assert archived.updated_at > created.updated_at
        assert archived.created_at == created.created_at
        assert store.get(1).archived is True

    def test_missing_id_raises_not_found(self, store: TodoStore):
        with pytest.raises(TodoNotFoundError):
            store.archive(3)

    def test_invalid_id_raises(self, store: TodoStore):
        with pytest.raises(InvalidIdentifierError):
            store.archive(0)
