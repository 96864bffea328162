import pytest

from esfields.typemap import TYPE_ALIASES, field_type_matches_alias, get_type_alias, is_metadata_field


@pytest.mark.parametrize(
    "field_type,alias",
    [
        ("float", "number"),
        ("double", "number"),
        ("integer", "number"),
        ("long", "number"),
        ("scaled_float", "number"),
        ("date", "date"),
        ("date_nanos", "date"),
        ("string", "string"),
        ("text", "string"),
        ("nested", "nested"),
    ],
)
def test_type_aliases(field_type, alias):
    assert get_type_alias(field_type) == alias
    assert field_type_matches_alias(field_type, alias)
    for other in {"number", "date", "string", "nested"} - {alias}:
        assert not field_type_matches_alias(field_type, other)


def test_unaliased_types():
    for field_type in ["keyword", "boolean", "object", "half_float", "geo_point", "Text"]:
        assert field_type not in TYPE_ALIASES
        assert get_type_alias(field_type) is None
        for alias in ["number", "date", "string", "nested"]:
            assert not field_type_matches_alias(field_type, alias)


def test_empty_filter_matches_everything():
    for field_type in ["keyword", "text", "long", "nested", "whatever"]:
        assert field_type_matches_alias(field_type, None)
        assert field_type_matches_alias(field_type, "")


def test_is_metadata_field():
    assert is_metadata_field("_id")
    assert is_metadata_field("_field_names")
    assert not is_metadata_field("_Id")
    assert not is_metadata_field("id")
    assert not is_metadata_field("_id_")
