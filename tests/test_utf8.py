from dataclasses import dataclass, field

from multidict import CIMultiDict

from roost.utf8 import UTF8, UTF8_CONTENT_TYPE


@dataclass
class Response:
    headers: CIMultiDict = field(default_factory=CIMultiDict)


def test_sets_content_type_when_missing():
    res = Response()
    UTF8().after_handle(None, res, UTF8.Context())
    assert res.headers["Content-Type"] == "text/plain; charset=utf-8"
    assert UTF8_CONTENT_TYPE == "text/plain; charset=utf-8"


def test_replaces_empty_content_type():
    res = Response()
    res.headers["content-type"] = ""
    UTF8().after_handle(None, res, UTF8.Context())
    assert res.headers.getall("Content-Type") == [UTF8_CONTENT_TYPE]


def test_keeps_existing_content_type():
    res = Response()
    res.headers["Content-Type"] = "application/json"
    UTF8().after_handle(None, res, UTF8.Context())
    assert res.headers.getall("Content-Type") == ["application/json"]


def test_before_handle_does_nothing():
    res = Response()
    UTF8().before_handle(None, res, UTF8.Context())
    assert len(res.headers) == 0