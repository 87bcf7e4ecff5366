# roost

`roost` collects building blocks for small HTTP servers. It does not run a server. It handles the
work between raw request data and your handlers: it parses route patterns, query strings and
multipart bodies, runs middleware hooks and sets CORS headers.

## Modules

- `roost.routetags` checks route patterns such as `/add/<int>/<int>` and encodes their
  placeholders as a tag. The names are `ParamType`, `is_valid_route`, `get_parameter_tag`,
  `is_parameter_tag_compatible` and `tag_argument_types`. The placeholders it recognises are
  `<int>`, `<uint>`, `<float>`/`<double>`, `<str>`/`<string>` and `<path>`. Any other
  placeholder raises `ValueError`.
- `roost.query_string` provides `QueryString`, which holds the key/value pairs after `?`. Values
  are URL-decoded, and lookups decode both sides.
  - `get(name)` returns the first value, or `None`.
  - `get_list(name)` returns all values of `name[]=...`. With `use_brackets=False` it matches
    `name=...` instead.
  - `get_dict(name)` returns the `name[key]=value` pairs as a dict.
  - `pop`, `pop_list` and `pop_dict` return the same results and also remove the matching
    entries.
  - `keys()` and `clear()` are also available.
  - The module functions `qs_decode` and `qs_scanvalue` work on raw strings.
- `roost.multipart` parses `multipart/form-data` bodies into `Part` objects. Each `Part` has
  case-insensitive headers and a body.
  - Message headers are available through `get_header_value`.
  - `get_header_object` looks up a header in a part's header map.
  - Use `Message.from_request(headers, body)` to parse a body, and `get_part_by_name(name)` to
    find a part.
  - `dump()` and `dump_part(index)` serialise the parts again.
  - `Header` and `Part` convert their value or body with `int()` and `float()`.
- `roost.cors` provides `CORSHandler`, a middleware with a default policy (`global_()`) and
  prefix policies (`prefix()`, `blueprint()`). Each policy is a `CORSRules`, configured with
  `origin`, `methods`, `headers`, `max_age`, `allow_credentials` and `ignore`. Lists start as
  `*`. A header that the response already carries is never overwritten.
- `roost.utf8` provides `UTF8`, a middleware that sets `Content-Type` to
  `text/plain; charset=utf-8` when the response has none.
- `roost.middleware` runs middleware hooks:
  - `call_before_handlers` runs the enabled `before_handle` hooks in order. If one of them
    completes the response, it unwinds the matching `after_handle` hooks and returns `True`.
  - `call_after_handlers` runs the enabled `after_handle` hooks from last to first.
  - `OnlyGlobalCriteria` decides which middlewares run by enabling only global middleware.
    `DynamicCriteria(indices, reversed_order)` decides by enabling the listed positions.
  - A middleware subclassing `LocalMiddleware` is not global.
  - `MiddlewareContext` holds one context object per middleware. It uses the middleware
    class's `Context`, or a plain namespace if the class has none.
  - Hooks that take a fourth argument receive the whole `MiddlewareContext`.
- `roost.utility` has these helpers:
  - `base64encode` and `base64encode_urlsafe` encode with padding.
  - `base64decode` accepts both alphabets and optional padding, and returns `bytes`.
  - `sanitize_filename` returns a safe relative path.
  - The remaining helpers are `random_alphanum`, `join_path`, `string_equals` (ASCII
    case-insensitive by default) and `trim`.
- `roost.mime_types` provides `MIME_TYPES` and `mime_type_for(extension, default)`, which
  accepts an extension with or without its dot.
- `roost.settings` provides `LogLevel` and the static directory defaults `STATIC_DIRECTORY` and
  `STATIC_ENDPOINT`. `normalize_static_dir` turns backslashes into slashes and ensures a trailing
  slash.

## Examples

Route patterns:

```python
from roost.routetags import get_parameter_tag, is_valid_route, tag_argument_types

is_valid_route("/add/<int>/<int>")        # True
tag = get_parameter_tag("/add/<int>/<int>")  # 7
tag_argument_types(tag)                      # (int, int)
```

Query strings:

```python
from roost.query_string import QueryString

qs = QueryString("/params?foo=bar&count[]=a&count[]=b&mydict[a]=b")
qs.get("foo")            # "bar"
qs.get_list("count")     # ["a", "b"]
qs.get_dict("mydict")    # {"a": "b"}
qs.keys()                # ["foo", "count[]", "count[]", "mydict[a]"]
```

Multipart form data:

```python
from roost.multipart import Message

headers = {"Content-Type": "multipart/form-data; boundary=XYZ"}
body = '--XYZ\r\nContent-Disposition: form-data; name="field"\r\n\r\nvalue\r\n--XYZ--\r\n'

msg = Message.from_request(headers, body)
msg.get_part_by_name("field").body   # "value"
msg.dump() == body                   # True
```

Middleware with CORS and UTF-8 defaults:

```python
from roost.cors import CORSHandler
from roost.middleware import (
    MiddlewareContext, OnlyGlobalCriteria, call_after_handlers, call_before_handlers,
)
from roost.utf8 import UTF8

cors = CORSHandler()
cors.global_().origin("https://app.example.com").max_age(600)
cors.prefix("/public").origin("*")

middlewares = [cors, UTF8()]
ctx = MiddlewareContext(middlewares)

# req needs a `url`; res needs a multidict `headers` and an `is_completed()` method.
if not call_before_handlers(OnlyGlobalCriteria(), middlewares, req, res, ctx):
    ...  # run the handler
    call_after_handlers(OnlyGlobalCriteria(), middlewares, ctx, req, res)
```

MIME types and filenames:

```python
from roost.mime_types import mime_type_for
from roost.utility import sanitize_filename

mime_type_for(".png", "application/octet-stream")   # "image/png"
sanitize_filename("../etc/passwd")                    # "_/etc/passwd"
```

## What it does not do

`roost` has no HTTP server, socket handling or HTTP request parser. It has no application object,
router or handler dispatch, and no static file serving, websockets or SSL. It installs no
command. The request and response objects passed to the middleware are yours to supply. They only
need the attributes described above.

## Running the tests

```
pip install -e .[test]
pytest
```