import enum
from dataclasses import dataclass, field

import pytest
from multidict import CIMultiDict

from roost.cors import CORSHandler


@dataclass
class Response:
    headers: CIMultiDict = field(default_factory=CIMultiDict)


@dataclass
class Request:
    url: str = "/"


@dataclass
class Blueprint:
    prefix: str


class Method(enum.Enum):
    GET = 0
    POST = 1


def _run(handler, url="/"):
    res = Response()
    handler.after_handle(Request(url), res, CORSHandler.Context())
    return res


def test_default_policy_allows_everything():
    res = _run(CORSHandler())
    assert res.headers["Access-Control-Allow-Origin"] == "*"
    assert res.headers["Access-Control-Allow-Methods"] == "*"
    assert res.headers["Access-Control-Allow-Headers"] == "*"
    assert "Access-Control-Max-Age" not in res.headers
    assert "Access-Control-Allow-Credentials" not in res.headers


def test_methods_and_headers_build_lists():
    handler = CORSHandler()
    handler.global_().methods(Method.GET, "POST").headers("X-One", "X-Two")
    res = _run(handler)
    assert res.headers["Access-Control-Allow-Methods"] == "GET, POST"
    assert res.headers["Access-Control-Allow-Headers"] == "X-One, X-Two"


def test_repeated_calls_append():
    handler = CORSHandler()
    handler.global_().methods("GET").methods("POST")
    assert _run(handler).headers["Access-Control-Allow-Methods"] == "GET, POST"


def test_origin_max_age_and_credentials():
    handler = CORSHandler()
    handler.global_().origin("https://app.example.com").max_age(600).allow_credentials()
    res = _run(handler)
    assert res.headers["Access-Control-Allow-Origin"] == "https://app.example.com"
    assert res.headers["Access-Control-Max-Age"] == str(600)
    assert res.headers["Access-Control-Allow-Credentials"] == "true"


def test_existing_header_is_not_overridden():
    handler = CORSHandler()
    res = Response()
    res.headers["Access-Control-Allow-Origin"] = "https://kept.example.com"
    handler.after_handle(Request("/"), res, CORSHandler.Context())
    assert res.headers.getall("Access-Control-Allow-Origin") == ["https://kept.example.com"]


def test_ignore_sends_nothing():
    handler = CORSHandler()
    handler.global_().ignore()
    assert len(_run(handler).headers) == 0


def test_prefix_rule_matches_only_its_paths():
    handler = CORSHandler()
    handler.prefix("/api").origin("https://api.example.com")
    assert _run(handler, "/api/items").headers["Access-Control-Allow-Origin"] == "https://api.example.com"
    assert _run(handler, "/other").headers["Access-Control-Allow-Origin"] == "*"


def test_first_matching_prefix_wins():
    handler = CORSHandler()
    handler.prefix("/a").origin("first")
    handler.prefix("/a/b").origin("second")
    assert _run(handler, "/a/b/c").headers["Access-Control-Allow-Origin"] == "first"


def test_blueprint_rule_uses_prefix():
    handler = CORSHandler()
    handler.global_().blueprint(Blueprint("bp_prefix")).ignore()
    assert len(_run(handler, "bp_prefix/x").headers) == 0
    assert _run(handler, "/x").headers["Access-Control-Allow-Origin"] == "*"


def test_rules_delegate_back_to_handler():
    handler = CORSHandler()
    rules = handler.prefix("/p")
    assert rules.global_() is handler.global_()
    rules.prefix("/q").origin("q-origin")
    assert _run(handler, "/q1").headers["Access-Control-Allow-Origin"] == "q-origin"


def test_methods_without_arguments_raise():
    with pytest.raises(TypeError):
        CORSHandler().global_().methods()
    with pytest.raises(TypeError):
        CORSHandler().global_().headers()


def test_before_handle_leaves_response_untouched():
    res = Response()
    CORSHandler().before_handle(Request("/"), res, CORSHandler.Context())
    assert len(res.headers) == 0