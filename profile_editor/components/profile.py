"""
Profile Editor - Edit the signed-in user's own record

The editor keeps a working copy of the current user together with the
transient inputs that are never stored as-is: a pending avatar upload and a
new password with its confirmation. Each widget on the profile page calls
one of the explicit update methods below and gets a ``ValidationResult``
back; nothing reaches the user store until ``submit()`` passes validation,
except ``delete_avatar()`` which removes the stored photo immediately.

State:
    clean  - no pending avatar or password and name/email match the store
    dirty  - at least one pending change; validation failures keep the
             editor dirty with ``errors`` populated
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from pydantic import ValidationError

from ..auth.auth_manager import AuthManager
from ..auth.password_utils import generate_salt, hash_password
from ..auth.user_store import UserStore
from ..config.settings import AVATAR_DIRECTORY, AVATAR_EXTENSIONS, STORAGE_DISK
from ..models.profile_form import AvatarUpload, ProfileForm, collect_errors
from ..models.user import User
from ..storage.disks import Storage
from ..utils.i18n import Translator
from ..utils.images import guess_extension
from ..utils.notifications import Notifier
from .errors import ProfileValidationError, ValidationResult

logger = logging.getLogger(__name__)

TRANSIENT_FIELDS = ("avatar", "password", "password_confirmation")


class ProfileEditor:
    """
    Profile editing component bound to the authenticated user.

    Args:
        storage_disk: Name of the configured disk avatars are stored on
        users: User store used for persistence and the email uniqueness query
        notifier: Sink for messages shown to the user
        auth: Zero-argument callable returning the current principal
    """

    def __init__(
        self,
        storage_disk: str = STORAGE_DISK,
        users: Optional[UserStore] = None,
        notifier: Optional[Notifier] = None,
        auth: Optional[Callable[[], Optional[User]]] = None,
    ):
        self.storage_disk = storage_disk
        self.disk = Storage.disk(storage_disk)
        self.users = users if users is not None else AuthManager.store()
        self.notifier = notifier if notifier is not None else Notifier()
        self.auth = auth or AuthManager.get_current_user

        self.user: Optional[User] = None
        self.avatar: Optional[AvatarUpload] = None
        self.password: Optional[str] = None
        self.password_confirmation: Optional[str] = None
        self.errors: Dict[str, List[str]] = {}
        self._persisted: Optional[User] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self) -> User:
        """
        Load the authenticated user's record into the editor.

        The stored record is preferred over the session copy so edits made
        elsewhere since sign-in are not overwritten.

        Raises:
            PermissionError: If nobody is signed in.
        """
        principal = self.auth()
        if principal is None:
            raise PermissionError("The profile editor requires a signed-in user.")

        stored = self.users.get(principal.id)
        self.user = (stored or principal).model_copy()
        self._persisted = self.user.model_copy()
        self.reset()

        logger.info(f"Profile editor mounted for user {self.user.id}")
        return self.user

    def reset(self, *fields: str) -> None:
        """Clear the given transient fields, or all of them and the error bag."""
        for field in fields or TRANSIENT_FIELDS:
            if field not in TRANSIENT_FIELDS:
                raise ValueError(f"Cannot reset unknown field: {field}")
            setattr(self, field, None)
        if not fields:
            self.errors = {}

    @property
    def is_dirty(self) -> bool:
        if self.avatar is not None or self.password or self.password_confirmation:
            return True
        if self.user is None or self._persisted is None:
            return False
        return (self.user.name, self.user.email) != (self._persisted.name, self._persisted.email)

    # ------------------------------------------------------------------
    # Field updates
    # ------------------------------------------------------------------

    def update_name(self, name: str) -> ValidationResult:
        self._require_mounted()
        self.user.name = name
        return self._check(["name"])

    def update_email(self, email: str) -> ValidationResult:
        """
        Place a candidate email in the working copy and check it is not taken.

        The shape rule runs first, so a "Name <addr>" string never reaches
        the uniqueness query.
        """
        self._require_mounted()
        self.user.email = email
        return self._check(["email"])

    def update_avatar(self, uploaded_file) -> ValidationResult:
        """
        Take a new avatar candidate from an uploaded file.

        Uploads whose filename extension is not allowed are dropped without
        an error before the avatar rules (content type, size) run.
        Passing None clears the pending avatar.
        """
        self._require_mounted()
        if uploaded_file is None or isinstance(uploaded_file, AvatarUpload):
            self.avatar = uploaded_file
        else:
            self.avatar = AvatarUpload.from_uploaded(uploaded_file)

        if self.avatar is not None and self.avatar.extension.lower() not in AVATAR_EXTENSIONS:
            logger.info(f"Discarding avatar upload with unsupported extension: {self.avatar.filename}")
            self.avatar = None

        return self._check(["avatar"])

    def update_password(self, password: Optional[str]) -> ValidationResult:
        """Hold a new password until submit; it is validated together with its confirmation."""
        self._require_mounted()
        self.password = password or None
        return ValidationResult()

    def update_password_confirmation(self, confirmation: Optional[str]) -> ValidationResult:
        self._require_mounted()
        self.password_confirmation = confirmation or None
        return ValidationResult()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def delete_avatar(self) -> bool:
        """
        Remove the stored avatar file and the reference to it.

        Only the avatar attribute of the stored record is written; pending
        name or email edits stay unsaved.

        Returns:
            True if an avatar was removed, False if there was none.
        """
        self._require_mounted()
        avatar = self.user.avatar
        if not avatar:
            return False

        self.disk.delete(avatar)
        self.avatar = None
        self.user.avatar = None
        self._persisted.avatar = None
        self.users.update(self.user.id, avatar=None)

        logger.info(f"Avatar {avatar} removed for user {self.user.id}")
        self.notifier.notify(Translator.t("Avatar removed for :name", name=self.user.name))
        return True

    def submit(self) -> ValidationResult:
        """
        Validate every field and persist the profile.

        A pending avatar is stored as a new file and replaces the reference
        on the record; the previous file is left on the disk. A new password
        is hashed with a fresh salt. On failure nothing is written and the
        field errors are returned.
        """
        self._require_mounted()
        try:
            form = self.validate()
        except ProfileValidationError as e:
            return ValidationResult(errors=e.errors)

        changes = {"name": form.name, "email": form.email}

        stored_avatar = None
        if self.avatar is not None:
            stored_avatar = self.disk.store(
                self.avatar.content, AVATAR_DIRECTORY, guess_extension(self.avatar.content)
            )
            changes["avatar"] = stored_avatar

        if form.password:
            salt = generate_salt()
            changes["salt"] = salt
            changes["password_hash"] = hash_password(form.password, salt)

        updated = self.user.model_copy(update=changes)
        try:
            self.users.save(updated)
        except OSError:
            logger.exception(f"Failed to save profile for user {updated.id}")
            if stored_avatar:
                self.disk.delete(stored_avatar)
            raise

        self.user = updated
        self._persisted = updated.model_copy()
        self.reset(*TRANSIENT_FIELDS)

        logger.info(f"Profile saved for user {updated.id} (fields: {', '.join(sorted(changes))})")
        self.notifier.notify(Translator.t("Profile saved!"))
        return ValidationResult()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, only: Optional[Iterable[str]] = None) -> ProfileForm:
        """
        Run the profile rules against the current state.

        Args:
            only: Restrict validation (and the error bag update) to these fields

        Raises:
            ProfileValidationError: If any checked field fails.
        """
        self._require_mounted()
        fields = set(only) if only is not None else None
        try:
            form = ProfileForm.check(
                self._form_data(), users=self.users, user_id=self.user.id, only=fields
            )
        except ValidationError as e:
            errors = collect_errors(e)
            self._store_errors(errors, fields)
            logger.info(f"Profile validation failed for user {self.user.id}: {sorted(errors)}")
            raise ProfileValidationError(errors) from e

        self._store_errors({}, fields)
        return form

    def _check(self, fields: List[str]) -> ValidationResult:
        try:
            self.validate(only=fields)
        except ProfileValidationError as e:
            return ValidationResult(errors=e.errors)
        return ValidationResult()

    def _form_data(self) -> dict:
        return {
            "name": self.user.name,
            "email": self.user.email,
            "avatar": self.avatar,
            "password": self.password,
            "password_confirmation": self.password_confirmation,
        }

    def _store_errors(self, errors: Dict[str, List[str]], fields: Optional[set]) -> None:
        if fields is None:
            self.errors = dict(errors)
            return
        for field in fields:
            self.errors.pop(field, None)
        self.errors.update(errors)

    def _require_mounted(self) -> None:
        if self.user is None:
            raise RuntimeError("ProfileEditor.mount() must be called first.")
