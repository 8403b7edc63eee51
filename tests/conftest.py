"""Shared test fixtures for the profile editor tests."""

import io

import pytest
from PIL import Image

from profile_editor.auth.password_utils import generate_salt, hash_password
from profile_editor.auth.user_store import UserStore
from profile_editor.components.profile import ProfileEditor
from profile_editor.models.user import User
from profile_editor.storage.disks import Storage
from profile_editor.utils.notifications import Notifier

TEST_DISK = "testing"


class FakeUpload:
    """Stands in for Streamlit's UploadedFile."""

    def __init__(self, name, content):
        self.name = name
        self._content = content

    def getvalue(self):
        return self._content


def image_bytes(fmt="PNG", size=(4, 4)):
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buffer, format=fmt)
    return buffer.getvalue()


def make_user(name="Jane Doe", email="jane@acme.io", password="secret123", **extra):
    salt = generate_salt()
    return User(name=name, email=email, password_hash=hash_password(password, salt), salt=salt, **extra)


@pytest.fixture
def png_bytes():
    return image_bytes("PNG")


@pytest.fixture
def store(tmp_path):
    return UserStore(tmp_path / "users.json")


@pytest.fixture
def disk(tmp_path):
    fake = Storage.fake(TEST_DISK, tmp_path / "disk")
    yield fake
    Storage.forget(TEST_DISK)


@pytest.fixture
def user(store):
    return store.save(make_user())


@pytest.fixture
def other_user(store):
    return store.save(make_user(name="John Smith", email="john@acme.io"))


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def editor(store, disk, notifier, user):
    component = ProfileEditor(storage_disk=TEST_DISK, users=store, notifier=notifier, auth=lambda: user)
    component.mount()
    return component


@pytest.fixture
def make_image():
    return image_bytes


@pytest.fixture
def upload():
    return FakeUpload


@pytest.fixture
def user_factory():
    return make_user
