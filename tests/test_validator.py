import pytest

from userauth.core.errors import ValidationError
from userauth.schemas import UserPayload
from userauth.services.validator import prepare, validate


def _payload(**overrides) -> UserPayload:
    fields = {"email": "a@b.com", "fname": "A", "lname": "B", "password": "secret"}
    fields.update(overrides)
    return UserPayload(**fields)


class TestPrepare:
    def test_strips_every_string_field(self):
        prepared = prepare(UserPayload(
            email="  a@b.com ", fname="\tA ", lname=" B\n", password=" secret ", profile_image=" x.png ",
        ))
        assert prepared.email == "a@b.com"
        assert prepared.fname == "A"
        assert prepared.lname == "B"
        assert prepared.password == "secret"
        assert prepared.profile_image == "x.png"

    def test_does_not_mutate_input(self):
        payload = _payload(fname="  A  ")
        prepare(payload)
        assert payload.fname == "  A  "


class TestValidateCreate:
    def test_complete_payload_passes(self):
        validate(_payload())

    @pytest.mark.parametrize("field, message", [
        ("fname", "First Name is required"),
        ("lname", "Last Name is required"),
        ("email", "Email is required"),
        ("password", "Password is required"),
    ])
    def test_missing_field(self, field, message):
        with pytest.raises(ValidationError, match=message):
            validate(_payload(**{field: ""}))

    def test_first_missing_field_wins(self):
        with pytest.raises(ValidationError, match="First Name is required"):
            validate(UserPayload())
        with pytest.raises(ValidationError, match="Last Name is required"):
            validate(_payload(lname="", email="", password=""))

    def test_whitespace_only_fails_after_prepare(self):
        with pytest.raises(ValidationError, match="Last Name is required"):
            validate(prepare(_payload(lname="   ")))

    def test_unknown_mode_means_create(self):
        with pytest.raises(ValidationError, match="First Name is required"):
            validate(_payload(fname=""), "")

    def test_profile_image_is_optional(self):
        validate(_payload(profile_image=""))


class TestValidateLogin:
    def test_only_email_and_password_needed(self):
        validate(UserPayload(email="a@b.com", password="secret"), "login")

    def test_mode_is_case_insensitive(self):
        validate(UserPayload(email="a@b.com", password="secret"), "LOGIN")

    def test_missing_email(self):
        with pytest.raises(ValidationError, match="Email is required"):
            validate(UserPayload(password="secret"), "login")

    def test_missing_password(self):
        with pytest.raises(ValidationError, match="Password is required"):
            validate(UserPayload(email="a@b.com"), "login")
