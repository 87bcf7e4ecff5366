import pytest

from roost.routetags import (
    ParamType,
    get_parameter_tag,
    is_parameter_tag_compatible,
    is_valid_route,
    tag_argument_types,
)


@pytest.mark.parametrize("url", ["/", "/about", "/<int>", "/add/<int>/<int>", "<>"])
def test_valid_routes(url):
    assert is_valid_route(url) is True


@pytest.mark.parametrize("url", ["/<int", "/int>", "<<>>", "><", "/<<int>"])
def test_invalid_routes(url):
    assert is_valid_route(url) is False


def test_route_without_parameters_has_zero_tag():
    assert get_parameter_tag("/about") == 0
    assert tag_argument_types(0) == ()


def test_single_parameter_tag_is_its_kind():
    assert get_parameter_tag("/hello/<int>") == ParamType.INT
    assert get_parameter_tag("/x/<uint>") == ParamType.UINT
    assert get_parameter_tag("/static/<path>") == ParamType.PATH


def test_aliases_give_same_tag():
    assert get_parameter_tag("/<float>") == get_parameter_tag("/<double>")
    assert get_parameter_tag("/<str>") == get_parameter_tag("/<string>")


def test_order_of_parameters_matters():
    first = get_parameter_tag("/<int>/<str>")
    second = get_parameter_tag("/<str>/<int>")
    assert first != second
    assert tag_argument_types(first) == (int, str)
    assert tag_argument_types(second) == (str, int)


def test_all_kinds_round_trip():
    tag = get_parameter_tag("/a/<int>/<uint>/<double>/<string>/<path>")
    assert tag_argument_types(tag) == (int, int, float, str, str)


def test_single_kind_tags_give_their_python_type():
    assert [tag_argument_types(kind) for kind in ParamType] == [
        (int,),
        (int,),
        (float,),
        (str,),
        (str,),
    ]


def test_unknown_placeholder_raises():
    with pytest.raises(ValueError):
        get_parameter_tag("/<foo>")


def test_unterminated_placeholder_raises():
    with pytest.raises(ValueError):
        get_parameter_tag("/<int")


def test_tag_with_empty_slot_raises():
    with pytest.raises(ValueError):
        tag_argument_types(ParamType.INT * 6)


def test_negative_tag_raises():
    with pytest.raises(ValueError):
        tag_argument_types(-1)


def test_zero_tags_compatible_only_with_each_other():
    assert is_parameter_tag_compatible(0, 0) is True
    assert is_parameter_tag_compatible(0, get_parameter_tag("/<int>")) is False
    assert is_parameter_tag_compatible(get_parameter_tag("/<int>"), 0) is False


def test_same_route_is_compatible_with_itself():
    tag = get_parameter_tag("/<int>/<path>")
    assert is_parameter_tag_compatible(tag, tag) is True


def test_different_parameter_counts_are_incompatible():
    one = get_parameter_tag("/<int>")
    two = get_parameter_tag("/<int>/<int>")
    assert is_parameter_tag_compatible(one, two) is False
    assert is_parameter_tag_compatible(two, one) is False


def test_compatibility_is_symmetric():
    tags = [get_parameter_tag(u) for u in ["/", "/<int>", "/<str>/<int>", "/<path>"]]
    for a in tags:
        for b in tags:
            assert is_parameter_tag_compatible(a, b) == is_parameter_tag_compatible(b, a)