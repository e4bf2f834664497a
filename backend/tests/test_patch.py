from types import SimpleNamespace

import pytest

from showcase.errors import ValidationError
from showcase.utils.patch import PatchField, apply_patch, build_patch, ensure_not_empty
from showcase.utils.validation import boolean, icon, integer, required_text, text

FIELDS = (
    PatchField("title", convert=required_text),
    PatchField("subtitle", column="workflow_subtitle", convert=text),
    PatchField("step_number", convert=integer),
)


def test_build_patch_only_takes_present_keys():
    assert build_patch({"title": "A", "unknown": 1}, FIELDS) == {"title": "A"}


def test_build_patch_maps_columns_and_converts():
    patch = build_patch({"subtitle": None, "step_number": "3"}, FIELDS)

    assert patch == {"workflow_subtitle": None, "step_number": 3}


def test_build_patch_validates():
    with pytest.raises(ValidationError, match="'title' cannot be empty"):
        build_patch({"title": "  "}, FIELDS)


def test_ensure_not_empty():
    ensure_not_empty({"title": "A"})
    ensure_not_empty({}, None, "uploaded-file")

    with pytest.raises(ValidationError, match="Nothing to update"):
        ensure_not_empty({}, None, False)


def test_apply_patch_reports_changed_columns():
    entity = SimpleNamespace(title="A", step_number=1)

    changed = apply_patch(entity, {"title": "A", "step_number": 2})

    assert changed == ["step_number"]
    assert entity.step_number == 2


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), ("yes", True), ("1", True), (0, False), ("off", False), ("", False)],
)
def test_boolean(value, expected):
    assert boolean(value, "flag") is expected


def test_boolean_rejects_other_values():
    with pytest.raises(ValidationError):
        boolean(2, "flag")


def test_integer_rejects_booleans():
    with pytest.raises(ValidationError):
        integer(True, "step_number")


@pytest.mark.parametrize("value", [1.9, float("inf"), "1.5", 2 ** 63, -(2 ** 63) - 1])
def test_integer_rejects_fractions_and_out_of_range(value):
    with pytest.raises(ValidationError):
        integer(value, "step_number")


def test_integer_accepts_whole_values():
    assert integer(3.0, "n") == 3
    assert integer(" 7 ", "n") == 7
    assert integer(2 ** 63 - 1, "n") == 2 ** 63 - 1


def test_icon_serializes_structured_values_once():
    assert icon("<svg/>", "icon") == "<svg/>"
    assert icon({"name": "zap"}, "icon") == '{"name": "zap"}'

    with pytest.raises(ValidationError):
        icon(None, "icon")
