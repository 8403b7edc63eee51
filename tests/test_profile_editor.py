"""Tests for components/profile.py: the profile editor component."""

import pytest
from unittest.mock import patch

from profile_editor.auth.password_utils import verify_password
from profile_editor.components.profile import ProfileEditor
from profile_editor.models.profile_form import ProfileForm, UNIQUE_EMAIL_MESSAGE

TEST_DISK = "testing"
AVATAR_TYPES_MESSAGE = "The avatar must be a file of type: png, jpg, jpeg, bmp, gif."


@pytest.fixture
def editor_with_avatar(editor, store, disk, png_bytes):
    """Editor for a user whose stored avatar is avatars/a.png."""
    path = disk.path("avatars/a.png")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(png_bytes)
    store.update(editor.user.id, avatar="avatars/a.png")
    editor.mount()
    return editor


# ─────────────────────────────────────────────────────────────────
# mount
# ─────────────────────────────────────────────────────────────────


class TestMount:
    def test_loads_current_user(self, editor, user):
        assert editor.user.id == user.id
        assert editor.user.name == "Jane Doe"
        assert editor.user.email == "jane@acme.io"

    def test_starts_clean(self, editor):
        assert not editor.is_dirty
        assert editor.avatar is None
        assert editor.password is None
        assert editor.password_confirmation is None
        assert editor.errors == {}

    def test_prefers_stored_record_over_session_copy(self, store, disk, user):
        stale = user.model_copy(update={"name": "Stale Name"})
        editor = ProfileEditor(storage_disk=TEST_DISK, users=store, auth=lambda: stale)
        editor.mount()
        assert editor.user.name == "Jane Doe"

    def test_falls_back_to_session_copy(self, store, disk, user_factory):
        unsaved = user_factory(name="Session Only", email="session@acme.io")
        editor = ProfileEditor(storage_disk=TEST_DISK, users=store, auth=lambda: unsaved)
        assert editor.mount().name == "Session Only"

    def test_requires_signed_in_user(self, store, disk):
        editor = ProfileEditor(storage_disk=TEST_DISK, users=store, auth=lambda: None)
        with pytest.raises(PermissionError):
            editor.mount()

    def test_operations_require_mount(self, store, disk, user):
        editor = ProfileEditor(storage_disk=TEST_DISK, users=store, auth=lambda: user)
        with pytest.raises(RuntimeError):
            editor.submit()

    def test_unknown_disk_rejected(self, store):
        with pytest.raises(ValueError):
            ProfileEditor(storage_disk="no-such-disk", users=store)


# ─────────────────────────────────────────────────────────────────
# update_name
# ─────────────────────────────────────────────────────────────────


class TestUpdateName:
    def test_valid_name(self, editor):
        result = editor.update_name("Jo")
        assert result.ok
        assert editor.is_dirty

    def test_too_short(self, editor):
        result = editor.update_name("J")
        assert result.errors == {"name": ["The name must be at least 2 characters."]}
        assert editor.errors["name"] == ["The name must be at least 2 characters."]

    def test_blank_is_required(self, editor):
        assert editor.update_name("   ").first("name") == "The name field is required."

    def test_fixing_clears_error(self, editor):
        editor.update_name("J")
        editor.update_name("Jo")
        assert "name" not in editor.errors

    def test_only_name_errors_reported(self, editor):
        editor.user.email = "not-an-email"
        result = editor.update_name("Jo")
        assert result.ok


# ─────────────────────────────────────────────────────────────────
# update_email
# ─────────────────────────────────────────────────────────────────


class TestUpdateEmail:
    def test_email_taken_by_other_user(self, editor, other_user, store, user):
        result = editor.update_email("john@acme.io")
        assert result.errors == {"email": [UNIQUE_EMAIL_MESSAGE]}
        assert store.get(user.id).email == "jane@acme.io"

    def test_taken_check_ignores_case(self, editor, other_user):
        assert not editor.update_email("John@ACME.io").ok

    def test_own_email_is_allowed(self, editor):
        assert editor.update_email("jane@acme.io").ok

    def test_free_email_has_no_effect_beyond_state(self, editor, store, user):
        result = editor.update_email("new@acme.io")
        assert result.ok
        assert editor.user.email == "new@acme.io"
        assert store.get(user.id).email == "jane@acme.io"

    def test_display_name_form_rejected(self, editor, other_user, store, user):
        result = editor.update_email("Mallory <john@acme.io>")
        assert result.errors == {"email": ["The email must be a valid email address."]}

        assert not editor.submit().ok
        assert store.get(user.id).email == "jane@acme.io"

    def test_error_cleared_once_email_is_free(self, editor, other_user):
        editor.update_email("john@acme.io")
        editor.update_email("jane.doe@acme.io")
        assert "email" not in editor.errors


# ─────────────────────────────────────────────────────────────────
# update_avatar
# ─────────────────────────────────────────────────────────────────


class TestUpdateAvatar:
    def test_accepts_image(self, editor, upload, png_bytes):
        result = editor.update_avatar(upload("me.png", png_bytes))
        assert result.ok
        assert editor.avatar.filename == "me.png"
        assert editor.is_dirty

    @pytest.mark.parametrize("filename", ["avatar.php", "avatar.svg", "avatar", "avatar.png.exe"])
    def test_disallowed_extension_silently_cleared(self, editor, upload, png_bytes, filename):
        result = editor.update_avatar(upload(filename, png_bytes))
        assert result.ok
        assert editor.avatar is None

    def test_cleared_before_validation_runs(self, editor, upload, png_bytes):
        seen = []
        with patch.object(ProfileForm, "check", side_effect=lambda data, **kwargs: seen.append(data["avatar"])):
            editor.update_avatar(upload("avatar.php", png_bytes))
        assert seen == [None]

    def test_extension_check_ignores_case(self, editor, upload, png_bytes):
        assert editor.update_avatar(upload("ME.PNG", png_bytes)).ok
        assert editor.avatar is not None

    def test_content_must_be_an_allowed_image(self, editor, upload):
        result = editor.update_avatar(upload("me.png", b"<?php echo 'hi'; ?>"))
        assert result.errors == {"avatar": [AVATAR_TYPES_MESSAGE]}

    def test_size_limit(self, editor, upload, png_bytes):
        oversized = png_bytes + b"\0" * (512 * 1024)
        result = editor.update_avatar(upload("me.png", oversized))
        assert result.first("avatar") == "The avatar may not be greater than 512 kilobytes."

    def test_exactly_at_size_limit(self, editor, upload, png_bytes):
        at_limit = png_bytes + b"\0" * (512 * 1024 - len(png_bytes))
        assert editor.update_avatar(upload("me.png", at_limit)).ok

    def test_none_clears_pending_avatar(self, editor, upload, png_bytes):
        editor.update_avatar(upload("me.png", png_bytes))
        editor.update_avatar(None)
        assert editor.avatar is None

    def test_nothing_persisted(self, editor, upload, png_bytes, store, user, disk):
        editor.update_avatar(upload("me.png", png_bytes))
        assert store.get(user.id).avatar is None
        assert not (disk.root / "avatars").exists()


# ─────────────────────────────────────────────────────────────────
# delete_avatar
# ─────────────────────────────────────────────────────────────────


class TestDeleteAvatar:
    def test_noop_without_avatar(self, editor, disk, notifier):
        with patch.object(disk, "delete") as delete:
            assert editor.delete_avatar() is False
        delete.assert_not_called()
        assert notifier.messages == []

    def test_removes_file_and_reference(self, editor_with_avatar, disk, store, notifier):
        editor = editor_with_avatar
        with patch.object(disk, "delete", wraps=disk.delete) as delete:
            assert editor.delete_avatar() is True

        delete.assert_called_once_with("avatars/a.png")
        assert store.get(editor.user.id).avatar is None
        assert editor.user.avatar is None
        assert not disk.exists("avatars/a.png")
        assert notifier.messages == ["Avatar removed for Jane Doe"]

    def test_clears_pending_avatar(self, editor_with_avatar, upload, png_bytes):
        editor = editor_with_avatar
        editor.update_avatar(upload("new.png", png_bytes))
        editor.delete_avatar()
        assert editor.avatar is None

    def test_does_not_commit_pending_edits(self, editor_with_avatar, store):
        editor = editor_with_avatar
        editor.update_name("Someone Else")
        editor.delete_avatar()
        stored = store.get(editor.user.id)
        assert stored.name == "Jane Doe"
        assert stored.avatar is None

    def test_missing_file_still_clears_reference(self, editor_with_avatar, disk, store):
        disk.path("avatars/a.png").unlink()
        assert editor_with_avatar.delete_avatar() is True
        assert store.get(editor_with_avatar.user.id).avatar is None


# ─────────────────────────────────────────────────────────────────
# submit
# ─────────────────────────────────────────────────────────────────


class TestSubmit:
    def test_saves_name_and_email_without_hashing(self, editor, store, user, notifier):
        editor.update_name("Jo")
        editor.update_email("jo@acme.io")

        with patch("profile_editor.components.profile.hash_password") as hasher:
            result = editor.submit()

        assert result.ok
        hasher.assert_not_called()
        stored = store.get(user.id)
        assert stored.name == "Jo"
        assert stored.email == "jo@acme.io"
        assert stored.password_hash == user.password_hash
        assert notifier.messages == ["Profile saved!"]
        assert not editor.is_dirty

    def test_taken_email_not_persisted(self, editor, other_user, store, user, notifier):
        editor.update_email("john@acme.io")
        result = editor.submit()
        assert result.errors == {"email": [UNIQUE_EMAIL_MESSAGE]}
        assert store.get(user.id).email == "jane@acme.io"
        assert notifier.messages == []

    def test_reports_every_failing_field(self, editor):
        editor.update_name("")
        editor.update_email("not-an-email")
        result = editor.submit()
        assert set(result.errors) == {"name", "email"}
        assert result.first("email") == "The email must be a valid email address."
        assert editor.errors == result.errors

    def test_failure_keeps_editor_dirty(self, editor):
        editor.update_name("J")
        assert not editor.submit().ok
        assert editor.is_dirty

    def test_short_password_rejected(self, editor, store, user):
        editor.update_password("abc")
        editor.update_password_confirmation("abc")
        result = editor.submit()
        assert result.errors == {"password": ["The password must be at least 6 characters."]}
        assert store.get(user.id).password_hash == user.password_hash

    def test_password_must_match_confirmation(self, editor, store, user):
        editor.update_password("newsecret")
        editor.update_password_confirmation("different")
        result = editor.submit()
        assert result.first("password") == "The password confirmation does not match."
        assert store.get(user.id).password_hash == user.password_hash

    def test_password_rotated(self, editor, store, user):
        editor.update_password("newsecret")
        editor.update_password_confirmation("newsecret")

        assert editor.submit().ok

        stored = store.get(user.id)
        assert stored.password_hash != "newsecret"
        assert stored.password_hash != user.password_hash
        assert stored.salt != user.salt
        assert verify_password("newsecret", stored.salt, stored.password_hash)
        assert editor.password is None
        assert editor.password_confirmation is None

    def test_confirmation_ignored_without_password(self, editor, store, user):
        editor.update_password_confirmation("whatever")
        assert editor.submit().ok
        assert store.get(user.id).password_hash == user.password_hash
        assert editor.password_confirmation is None

    def test_stores_pending_avatar(self, editor, upload, png_bytes, store, user, disk):
        editor.update_avatar(upload("me.png", png_bytes))
        assert editor.submit().ok

        reference = store.get(user.id).avatar
        assert reference.startswith("avatars/")
        assert reference.endswith(".png")
        assert disk.get(reference) == png_bytes
        assert editor.avatar is None

    def test_avatar_stored_under_sniffed_extension(self, editor, upload, make_image, store, user):
        editor.update_avatar(upload("me.jpeg", make_image("JPEG")))
        assert editor.submit().ok
        assert store.get(user.id).avatar.endswith(".jpg")

    def test_previous_avatar_file_kept(self, editor_with_avatar, upload, make_image, disk, store):
        editor = editor_with_avatar
        editor.update_avatar(upload("new.gif", make_image("GIF")))
        assert editor.submit().ok
        assert disk.exists("avatars/a.png")
        assert store.get(editor.user.id).avatar != "avatars/a.png"

    def test_invalid_avatar_blocks_save(self, editor, upload, store, user, disk):
        editor.update_name("Jo")
        editor.update_avatar(upload("me.png", b"plain text, not an image"))
        result = editor.submit()
        assert result.errors == {"avatar": [AVATAR_TYPES_MESSAGE]}
        assert store.get(user.id).name == "Jane Doe"
        assert not (disk.root / "avatars").exists()

    def test_failed_save_removes_new_file(self, editor, upload, png_bytes, store, disk):
        editor.update_avatar(upload("me.png", png_bytes))
        with patch.object(store, "save", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                editor.submit()
        assert list((disk.root / "avatars").iterdir()) == []
        assert editor.avatar is not None
        assert editor.user.avatar is None
