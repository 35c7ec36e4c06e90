"""
Tests for photo collections (PhotoService).

These tests cover:
- Append with id assignment and defaults
- Partial patch semantics (absent vs explicit null)
- Idempotent remove and clear
- Concurrent appends
"""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest


class TestListAndAppend:
    """Tests for list/append."""

    def test_list_unknown_account_is_empty(self, photo_service):
        assert photo_service.list("ghost@example.com") == []

    def test_append_then_list_returns_all_fields(self, photo_service, bob):
        from app.schemas.photo import PhotoCreate

        photo = photo_service.append(
            "bob@example.com",
            PhotoCreate(image_data="blob", caption="hi", angle=30, radius=120.5, group="trip"),
        )

        photos = photo_service.list("bob@example.com")
        assert len(photos) == 1
        stored = photos[0]
        assert stored.id == photo.id
        assert stored.image_data == "blob"
        assert stored.caption == "hi"
        assert stored.angle == 30
        assert stored.radius == 120.5
        assert stored.group == "trip"
        assert stored.created_at == int(stored.id)

    def test_append_defaults(self, photo_service, bob):
        """Caption defaults to empty string and group to absent."""
        from app.schemas.photo import PhotoCreate

        photo = photo_service.append("bob@example.com", PhotoCreate(image_data="blob", angle=0, radius=0))

        assert photo.caption == ""
        assert photo.group is None

    def test_append_creates_missing_collection(self, photo_service, store):
        from app.schemas.photo import PhotoCreate

        photo_service.append("orphan@example.com", PhotoCreate(image_data="blob", angle=0, radius=0))

        assert len(store.snapshot().photos["orphan@example.com"]) == 1

    def test_ids_unique_within_same_millisecond(self, photo_service, bob):
        """Appends sharing a timestamp still get distinct ids."""
        from app.schemas.photo import PhotoCreate

        with patch("app.services.photo_service.epoch_millis", return_value=1700000000000):
            ids = [
                photo_service.append("bob@example.com", PhotoCreate(image_data=str(i), angle=0, radius=0)).id
                for i in range(5)
            ]

        assert len(set(ids)) == 5
        assert ids[0] == "1700000000000"

    def test_ids_are_scoped_per_collection(self, photo_service, bob, user_service, alice_data):
        """The same id may appear in two different accounts' collections."""
        from app.schemas.photo import PhotoCreate

        user_service.create(**alice_data)
        with patch("app.services.photo_service.epoch_millis", return_value=1700000000000):
            bob_photo = photo_service.append("bob@example.com", PhotoCreate(image_data="b", angle=0, radius=0))
            alice_photo = photo_service.append("alice@example.com", PhotoCreate(image_data="a", angle=0, radius=0))

        assert bob_photo.id == alice_photo.id

    def test_concurrent_appends_all_survive(self, photo_service, bob):
        """No appended photo is lost when appends run in parallel."""
        from app.schemas.photo import PhotoCreate

        def add(i: int):
            return photo_service.append("bob@example.com", PhotoCreate(image_data=str(i), angle=i, radius=i))

        with ThreadPoolExecutor(max_workers=8) as pool:
            created = list(pool.map(add, range(16)))

        photos = photo_service.list("bob@example.com")
        assert len(photos) == 16
        assert {p.id for p in photos} == {p.id for p in created}
        assert sorted(p.image_data for p in photos) == sorted(str(i) for i in range(16))


class TestPatch:
    """Tests for PhotoService.patch."""

    @pytest.fixture
    def photo(self, photo_service, bob):
        from app.schemas.photo import PhotoCreate

        return photo_service.append(
            "bob@example.com",
            PhotoCreate(image_data="blob", caption="hi", angle=30, radius=120, group="trip"),
        )

    def test_caption_only_leaves_group(self, photo_service, photo):
        from app.schemas.photo import PhotoUpdate

        patched = photo_service.patch("bob@example.com", photo.id, PhotoUpdate(caption="hello"))

        assert patched.caption == "hello"
        assert patched.group == "trip"
        assert patched.angle == 30
        assert patched.radius == 120

    def test_group_only_leaves_caption(self, photo_service, photo):
        from app.schemas.photo import PhotoUpdate

        patched = photo_service.patch("bob@example.com", photo.id, PhotoUpdate(group="family"))

        assert patched.caption == "hi"
        assert patched.group == "family"

    def test_explicit_null_group_clears_it(self, photo_service, photo):
        from app.schemas.photo import PhotoUpdate

        patched = photo_service.patch(
            "bob@example.com", photo.id, PhotoUpdate.model_validate({"group": None})
        )

        assert patched.group is None
        assert photo_service.list("bob@example.com")[0].group is None

    def test_empty_patch_changes_nothing(self, photo_service, photo):
        from app.schemas.photo import PhotoUpdate

        patched = photo_service.patch("bob@example.com", photo.id, PhotoUpdate())

        assert patched.caption == "hi"
        assert patched.group == "trip"

    def test_unknown_photo(self, photo_service, photo):
        from app.core.exceptions import PhotoNotFoundError
        from app.schemas.photo import PhotoUpdate

        with pytest.raises(PhotoNotFoundError):
            photo_service.patch("bob@example.com", "nope", PhotoUpdate(caption="x"))

    def test_photo_of_other_account_is_not_found(self, photo_service, photo):
        from app.core.exceptions import PhotoNotFoundError
        from app.schemas.photo import PhotoUpdate

        with pytest.raises(PhotoNotFoundError):
            photo_service.patch("alice@example.com", photo.id, PhotoUpdate(caption="x"))


class TestRemoveAndClear:
    """Tests for remove/clear idempotence."""

    def test_remove_one(self, photo_service, bob):
        from app.schemas.photo import PhotoCreate

        first = photo_service.append("bob@example.com", PhotoCreate(image_data="1", angle=0, radius=0))
        second = photo_service.append("bob@example.com", PhotoCreate(image_data="2", angle=0, radius=0))

        photo_service.remove("bob@example.com", first.id)

        assert [p.id for p in photo_service.list("bob@example.com")] == [second.id]

    def test_remove_unknown_id_is_noop(self, photo_service, bob):
        from app.schemas.photo import PhotoCreate

        photo = photo_service.append("bob@example.com", PhotoCreate(image_data="1", angle=0, radius=0))

        photo_service.remove("bob@example.com", "does-not-exist")
        photo_service.remove("ghost@example.com", photo.id)

        assert [p.id for p in photo_service.list("bob@example.com")] == [photo.id]

    def test_clear_twice(self, photo_service, bob):
        from app.schemas.photo import PhotoCreate

        photo_service.append("bob@example.com", PhotoCreate(image_data="1", angle=0, radius=0))

        photo_service.clear("bob@example.com")
        photo_service.clear("bob@example.com")

        assert photo_service.list("bob@example.com") == []

    def test_clear_creates_missing_key(self, photo_service, store):
        photo_service.clear("new@example.com")

        assert store.snapshot().photos["new@example.com"] == []


class TestAccountLifecycle:
    """Photo collection across the life of an account."""

    def test_create_add_patch_delete(self, user_service, photo_service, store):
        from app.schemas.photo import PhotoCreate, PhotoUpdate

        user_service.create("bob@example.com", "Bob", "bob_1", "hunter22")
        photo = photo_service.append(
            "bob@example.com",
            PhotoCreate(image_data="blob", caption="hi", angle=12.5, radius=200),
        )

        patched = photo_service.patch("bob@example.com", photo.id, PhotoUpdate(caption="hello"))
        assert patched.caption == "hello"
        assert patched.angle == 12.5
        assert patched.radius == 200

        user_service.delete("bob@example.com")

        assert "bob@example.com" not in store.snapshot().users
        assert photo_service.list("bob@example.com") == []
