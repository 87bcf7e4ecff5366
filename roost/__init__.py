"""Building blocks for small HTTP servers: route tags, query strings, multipart bodies, CORS and UTF-8 middleware, middleware chains and helpers."""

__version__ = "0.1.0"