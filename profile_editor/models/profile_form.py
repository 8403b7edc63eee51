"""Profile form models and validation rules using Pydantic."""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from ..config.settings import (
    AVATAR_EXTENSIONS,
    AVATAR_MAX_KILOBYTES,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PASSWORD_MIN_LENGTH,
)
from ..utils.images import guess_extensions

UNIQUE_EMAIL_MESSAGE = "The email has already been taken."


class AvatarUpload(BaseModel):
    """An uploaded avatar that has not been stored yet."""
    filename: str
    content: bytes = b""

    @property
    def extension(self) -> str:
        """Extension as written in the client-side filename."""
        return self.filename.rsplit(".", 1)[-1] if "." in self.filename else ""

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_uploaded(cls, uploaded) -> "AvatarUpload":
        """Build from an uploaded-file handle exposing ``name`` and ``getvalue()``."""
        return cls(filename=uploaded.name, content=uploaded.getvalue())


def _out_of_scope(info: ValidationInfo) -> bool:
    only = (info.context or {}).get("only")
    return only is not None and info.field_name not in only


class ProfileForm(BaseModel):
    """
    Field rules for the profile editor.

    ``password_confirmation`` is declared before ``password`` so the
    password rule can compare against it. Pass ``users`` and ``user_id``
    in the validation context to enable the email uniqueness rule, and
    ``only`` to restrict validation to a subset of fields.
    """
    model_config = ConfigDict(validate_default=True)

    name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[AvatarUpload] = None
    password_confirmation: Optional[str] = None
    password: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if _out_of_scope(info):
            return value
        value = (value or "").strip()
        if not value:
            raise PydanticCustomError("required", "The name field is required.")
        if len(value) < NAME_MIN_LENGTH:
            raise PydanticCustomError(
                "min_length", "The name must be at least {min} characters.", {"min": NAME_MIN_LENGTH}
            )
        if len(value) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "max_length", "The name may not be greater than {max} characters.", {"max": NAME_MAX_LENGTH}
            )
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if _out_of_scope(info):
            return value
        value = (value or "").strip()
        if not value:
            raise PydanticCustomError("required", "The email field is required.")
        if len(value) > EMAIL_MAX_LENGTH:
            raise PydanticCustomError(
                "max_length", "The email may not be greater than {max} characters.", {"max": EMAIL_MAX_LENGTH}
            )
        try:
            _, address = validate_email(value)
        except PydanticCustomError:
            address = None
        # "Name <addr>" parses as well; only a bare address is accepted
        if address is None or address.casefold() != value.casefold():
            raise PydanticCustomError("email", "The email must be a valid email address.")

        context = info.context or {}
        users = context.get("users")
        if users is not None and users.exists_with_email(value, context.get("user_id")):
            raise PydanticCustomError("unique", UNIQUE_EMAIL_MESSAGE)
        return value

    @field_validator("avatar")
    @classmethod
    def _check_avatar(cls, value: Optional[AvatarUpload], info: ValidationInfo) -> Optional[AvatarUpload]:
        if _out_of_scope(info) or value is None:
            return value
        if not guess_extensions(value.content) & set(AVATAR_EXTENSIONS):
            raise PydanticCustomError(
                "mimes", "The avatar must be a file of type: {types}.", {"types": ", ".join(AVATAR_EXTENSIONS)}
            )
        if value.size > AVATAR_MAX_KILOBYTES * 1024:
            raise PydanticCustomError(
                "max_size", "The avatar may not be greater than {max} kilobytes.", {"max": AVATAR_MAX_KILOBYTES}
            )
        return value

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if _out_of_scope(info):
            return value
        # blank means "keep the current password"; the confirmation is ignored
        if not value:
            return None
        if len(value) < PASSWORD_MIN_LENGTH:
            raise PydanticCustomError(
                "min_length", "The password must be at least {min} characters.", {"min": PASSWORD_MIN_LENGTH}
            )
        if value != info.data.get("password_confirmation"):
            raise PydanticCustomError("confirmed", "The password confirmation does not match.")
        return value

    @classmethod
    def check(
        cls,
        data: Dict[str, Any],
        users=None,
        user_id: Optional[str] = None,
        only: Optional[Iterable[str]] = None,
    ) -> "ProfileForm":
        """
        Validate form data.

        Raises:
            pydantic.ValidationError: if any in-scope field fails its rules.
        """
        context = {
            "users": users,
            "user_id": user_id,
            "only": set(only) if only is not None else None,
        }
        return cls.model_validate(data, context=context)


def collect_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Group validation messages by the top-level field they belong to."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "form"
        errors.setdefault(field, []).append(error["msg"])
    return errors
