"""Tests for plume.form — fill, validate, errors, and render snapshots."""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import Any

import pytest

from plume.config import FormConfig
from plume.errors import ConfigurationError, ResolutionError
from plume.form import Field, FieldRenderData, Form, RenderData
from plume.submission import FormData, UploadFile
from plume.validation import all_of, regex, required
from plume.widgets import FileInput, HiddenInput, Option, Select


@dataclass
class Signup:
    Name: str = ""
    Age: int = 0


@dataclass
class Profile:
    Name: str = ""
    Age: int = 0
    Born: date | None = None
    Tags: list[str] = field(default_factory=list)
    Scores: list[int] = field(default_factory=list)
    Newsletter: bool = False
    Avatar: UploadFile | None = None
    Extra: dict[str, Any] = field(default_factory=lambda: {"ExtraField": ""})


class Urgency(IntEnum):
    LOW = 1
    HIGH = 2


@dataclass
class Ticket:
    Priority: Urgency = Urgency.LOW


class Draft:
    Title: str


def _signup_form(data: Any) -> Form:
    return Form(
        data,
        {
            "Name": Field("Your name", "Your full name", required("Req!")),
            "Age": Field("Your age", "Years since your birth.", required("Req!")),
        },
    )


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruct:
    def test_record(self) -> None:
        data = Signup()
        assert _signup_form(data).data is data

    def test_mapping(self) -> None:
        data = {"Name": "", "Age": 0}
        assert _signup_form(data).data is data

    def test_unsupported_container(self) -> None:
        with pytest.raises(ConfigurationError):
            _signup_form("not a container")

    def test_frozen_record(self) -> None:
        @dataclass(frozen=True)
        class Frozen:
            Name: str = ""

        with pytest.raises(ConfigurationError):
            _signup_form(Frozen())

    def test_starts_without_errors(self) -> None:
        assert _signup_form(Signup()).errors == {}

    def test_fields_read_only(self) -> None:
        form = _signup_form(Signup())
        with pytest.raises(TypeError):
            form.fields["Other"] = Field("Other")  # type: ignore[index]


# ---------------------------------------------------------------------------
# fill()
# ---------------------------------------------------------------------------


class TestFill:
    def test_valid_submission(self) -> None:
        data = Signup()
        form = _signup_form(data)
        assert form.fill({"Name": ["Foo"], "Age": ["14"]}) is True
        assert data == Signup(Name="Foo", Age=14)

    def test_invalid_submission(self) -> None:
        data = Signup()
        form = _signup_form(data)
        assert form.fill({"Name": [""], "Age": ["14"]}) is False
        assert form.errors == {"Name": ["Req!"]}

    def test_age_coerced_to_int(self) -> None:
        data = Signup(Name="Foo")
        assert _signup_form(data).fill({"Age": ["14"]})
        assert data.Age == 14
        assert isinstance(data.Age, int)

    def test_unparsable_int_is_field_error(self) -> None:
        data = Signup(Name="Foo")
        form = _signup_form(data)
        assert form.fill({"Age": ["not-a-number"]}) is False
        assert form.errors == {"Age": ["Invalid value for Your age: expected int."]}
        assert data.Age == 0

    def test_empty_int_is_field_error(self) -> None:
        data = Signup(Name="Foo", Age=7)
        form = _signup_form(data)
        assert form.fill({"Age": [""]}) is False
        assert form.errors == {"Age": ["Invalid value for Your age: expected int."]}
        assert data.Age == 7

    def test_coercion_error_skips_validator(self) -> None:
        form = Form(Signup(), {"Age": Field("Age", validator=required("Req!"))})
        form.fill({"Age": ["x"]})
        assert form.errors["Age"] == ["Invalid value for Age: expected int."]

    def test_coercion_message_configurable(self) -> None:
        form = Form(
            Signup(),
            {"Age": Field("Your age")},
            config=FormConfig(coercion_message="{name} must be a {expected}"),
        )
        form.fill({"Age": ["x"]})
        assert form.errors == {"Age": ["Age must be a int"]}

    def test_coercion_failure_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="plume.form"):
            _signup_form(Signup()).fill({"Age": ["x"]})
        assert "Rejected value for field 'Age'" in caplog.text

    def test_unknown_keys_ignored(self) -> None:
        data = Signup(Name="Foo", Age=1)
        assert _signup_form(data).fill({"Unknown": ["x"], "Age": ["2"]})
        assert data.Age == 2

    def test_submitted_key_case_must_match_field_name(self) -> None:
        data = Signup(Name="Foo", Age=1)
        assert _signup_form(data).fill({"age": ["99"]})
        assert data.Age == 1

    def test_case_insensitive_field_path(self) -> None:
        data = Signup(Name="Foo")
        form = Form(data, {"AGE": Field("Age")})
        assert form.fill({"AGE": ["7"]})
        assert data.Age == 7

    def test_validates_unsubmitted_fields(self) -> None:
        form = _signup_form(Signup())
        assert form.fill({}) is False
        assert form.errors == {"Name": ["Req!"], "Age": ["Req!"]}

    def test_errors_reset_each_fill(self) -> None:
        data = Signup()
        form = _signup_form(data)
        assert not form.fill({"Name": [""], "Age": ["x"]})
        form.add_error("", "Try again.")
        assert form.fill({"Name": ["Foo"], "Age": ["14"]})
        assert form.errors == {}

    def test_refill_invalidates(self) -> None:
        data = Signup()
        form = _signup_form(data)
        assert form.fill({"Name": ["Foo"], "Age": ["14"]})
        data.Name = ""
        assert not form.fill({"Name": [""], "Age": ["14"]})

    def test_single_string_values(self) -> None:
        data = Signup()
        assert _signup_form(data).fill({"Name": "Foo", "Age": "3"})
        assert data == Signup(Name="Foo", Age=3)

    def test_form_data(self) -> None:
        data = Signup()
        assert _signup_form(data).fill(FormData({"Name": ["Foo"], "Age": ["14"]}))
        assert data.Age == 14

    def test_empty_value_list_ignored(self) -> None:
        data = Signup(Name="Foo", Age=5)
        assert _signup_form(data).fill({"Age": []})
        assert data.Age == 5

    def test_mapping_container(self) -> None:
        data: dict[str, Any] = {"Name": "", "Age": 0}
        assert _signup_form(data).fill({"Name": ["Foo"], "Age": ["14"]})
        assert data == {"Name": "Foo", "Age": 14}

    def test_unresolvable_field_is_fatal(self) -> None:
        form = Form(Signup(), {"Height": Field("Height")})
        with pytest.raises(ResolutionError):
            form.fill({"Height": ["180"]})

    def test_unresolvable_field_fatal_in_validation(self) -> None:
        form = Form(Signup(), {"Height": Field("Height")})
        with pytest.raises(ResolutionError):
            form.fill({})

    def test_result_matches_validators(self) -> None:
        form = Form(
            Signup(),
            {
                "Name": Field("Name", validator=all_of(required("A"), regex("^x", "B"))),
                "Age": Field("Age"),
            },
        )
        assert form.fill({"Name": ["xyz"]}) is True
        assert form.fill({"Name": [""]}) is False
        assert form.errors == {"Name": ["A", "B"]}


class TestFillNested:
    def test_map_inside_record(self) -> None:
        data = Profile()
        form = Form(data, {"Extra.ExtraField": Field("Extra")})
        assert form.fill({"Extra.ExtraField": ["value"]})
        assert data.Extra == {"ExtraField": "value"}

    def test_list_field(self) -> None:
        data = Profile()
        form = Form(data, {"Tags": Field("Tags"), "Scores": Field("Scores")})
        assert form.fill({"Tags": ["a", "b"], "Scores": ["1", "2"]})
        assert data.Tags == ["a", "b"]
        assert data.Scores == [1, 2]

    def test_bool_checkbox(self) -> None:
        data = Profile()
        form = Form(data, {"Newsletter": Field("Newsletter")})
        assert form.fill({"Newsletter": ["on"]})
        assert data.Newsletter is True

    def test_optional_date(self) -> None:
        data = Profile()
        form = Form(data, {"Born": Field("Born")})
        assert form.fill({"Born": ["1815-12-10"]})
        assert data.Born == date(1815, 12, 10)
        assert form.fill({"Born": [""]})
        assert data.Born is None

    def test_upload_bound(self) -> None:
        data = Profile()
        upload = UploadFile("a.png", "image/png", b"png")
        form = Form(data, {"Avatar": Field("Avatar", widget=FileInput())})
        assert form.fill(FormData({}, files={"avatar": upload, "Avatar": upload}))
        assert data.Avatar is upload

    def test_int_enum_field(self) -> None:
        data = Ticket()
        form = Form(data, {"Priority": Field("Priority")})
        assert form.fill({"Priority": ["2"]})
        assert data.Priority is Urgency.HIGH

    def test_int_enum_field_empty(self) -> None:
        data = Ticket(Urgency.HIGH)
        form = Form(data, {"Priority": Field("Priority")})
        assert form.fill({"Priority": [""]}) is False
        assert form.errors == {"Priority": ["Invalid value for Priority: expected Urgency."]}
        assert data.Priority is Urgency.HIGH

    def test_unassigned_attribute_filled(self) -> None:
        draft = Draft()
        assert Form(draft, {"Title": Field("Title")}).fill({"Title": ["Notes"]})
        assert draft.Title == "Notes"

    def test_dynamic_map_entry(self) -> None:
        data: dict[str, Any] = {"settings": {"limit": 10, "label": None}}
        form = Form(data, {"settings.limit": Field("Limit"), "settings.label": Field("Label")})
        assert form.fill({"settings.limit": ["25"], "settings.label": ["Top"]})
        assert data["settings"] == {"limit": 25, "label": "Top"}


# ---------------------------------------------------------------------------
# add_error()
# ---------------------------------------------------------------------------


class TestAddError:
    def test_field_error(self) -> None:
        form = _signup_form(Signup())
        form.add_error("Name", "Taken.")
        form.add_error("Name", "Really.")
        assert form.errors == {"Name": ["Taken.", "Really."]}

    def test_whole_form_error(self) -> None:
        form = _signup_form(Signup())
        form.add_error("", "Server unavailable.")
        assert form.render_data().errors == ("Server unavailable.",)

    def test_after_fill_errors_kept(self) -> None:
        form = _signup_form(Signup())
        form.fill({"Name": [""], "Age": ["1"]})
        form.add_error("Name", "Taken.")
        assert form.errors["Name"] == ["Req!", "Taken."]

    def test_errors_property_is_copy(self) -> None:
        form = _signup_form(Signup())
        form.add_error("Name", "Taken.")
        form.errors["Name"].append("mutated")
        assert form.errors == {"Name": ["Taken."]}


# ---------------------------------------------------------------------------
# render_data()
# ---------------------------------------------------------------------------


class TestRenderData:
    def test_fields(self) -> None:
        data = Signup()
        form = _signup_form(data)
        form.fill({"Name": [""], "Age": ["14"]})
        render = form.render_data()
        assert render.fields == (
            FieldRenderData(
                name="Name",
                label="Your name",
                label_tag='<label for="name">Your name</label>',
                input='<input id="name" type="text" name="Name" value=""/>',
                help="Your full name",
                errors=("Req!",),
            ),
            FieldRenderData(
                name="Age",
                label="Your age",
                label_tag='<label for="age">Your age</label>',
                input='<input id="age" type="text" name="Age" value="14"/>',
                help="Years since your birth.",
                errors=(),
            ),
        )

    def test_order_follows_declaration(self) -> None:
        data = Profile()
        names = ["Tags", "Name", "Extra.ExtraField", "Age"]
        form = Form(data, {n: Field(n) for n in names})
        assert [f.name for f in form.render_data().fields] == names

    def test_idempotent(self) -> None:
        form = _signup_form(Signup())
        form.fill({"Name": [""]})
        assert form.render_data() == form.render_data()

    def test_action(self) -> None:
        form = Form(Signup(), {}, action="/signup")
        assert form.render_data().action == "/signup"

    def test_no_multipart_by_default(self) -> None:
        assert _signup_form(Signup()).render_data().enctype_attr == ""

    def test_multipart_with_file_widget(self) -> None:
        form = Form(
            Profile(),
            {"Name": Field("Name"), "Avatar": Field("Avatar", widget=FileInput())},
        )
        assert form.render_data().enctype_attr == 'enctype="multipart/form-data"'

    def test_unresolvable_field_renders_empty(self) -> None:
        form = Form({"Name": "x"}, {"Name": Field("Name"), "Missing": Field("Missing")})
        render = form.render_data()
        assert render.fields[1].input == '<input id="missing" type="text" name="Missing" value=""/>'

    def test_unassigned_attribute_renders_empty(self) -> None:
        form = Form(Draft(), {"Title": Field("Title")})
        render = form.render_data()
        assert render.fields[0].input == '<input id="title" type="text" name="Title" value=""/>'

    def test_widget_used(self) -> None:
        widget = Select((Option("a", "A"), Option("b", "B")))
        form = Form(
            {"Pick": "b", "Token": "t"},
            {"Pick": Field("Pick", widget=widget), "Token": Field(widget=HiddenInput())},
        )
        fields = form.render_data().fields
        assert '<option value="b" selected>B</option>' in fields[0].input
        assert fields[1].input == '<input id="token" type="hidden" name="Token" value="t"/>'

    def test_label_escaped(self) -> None:
        form = Form({"Name": ""}, {"Name": Field("<b>Name</b>")})
        assert form.render_data().fields[0].label_tag == (
            '<label for="name">&lt;b&gt;Name&lt;/b&gt;</label>'
        )

    def test_snapshot_is_frozen(self) -> None:
        render = _signup_form(Signup()).render_data()
        assert isinstance(render, RenderData)
        with pytest.raises(AttributeError):
            render.action = "/other"  # type: ignore[misc]

    def test_snapshot_unaffected_by_later_errors(self) -> None:
        form = _signup_form(Signup())
        before = form.render_data()
        form.add_error("Name", "Taken.")
        assert before.fields[0].errors == ()
        assert form.render_data().fields[0].errors == ("Taken.",)
