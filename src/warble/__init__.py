"""Warble — ordered, multi-valued parameter series for Python web code.

Models decoded request parameters the way HTTP does: names repeat, order
matters, and lookups can ignore case. Also ships a memoized, thread-safe
pagination window.

Basic usage::

    from warble import Form, PaginatedWindow

    form = Form.from_query_string(b"tag=python&tag=web&start=0&limit=10")
    form.get_values_array("tag")         # ["python", "web"]
    form.set("tag", "rust")              # one "tag" left

    page = PaginatedWindow(rows, page_size=10, start=0, total_count=len(rows))
    page.get_window()

Form bodies (``pip install warble[forms]`` for multipart)::

    from warble.http.forms import parse_form_data
    form = await parse_form_data(body, content_type)
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "EMPTY_VALUE",
    "ConfigurationError",
    "EmptyValue",
    "Form",
    "FormParameter",
    "Header",
    "HeaderSeries",
    "ImmutableCollectionError",
    "ImmutableSeriesView",
    "PaginatedWindow",
    "Parameter",
    "ParameterSeries",
    "QueryRequest",
    "SeriesConfig",
    "WarbleError",
    "parse_query_string",
    "unmodifiable_view",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "EMPTY_VALUE": "warble.params.entry",
    "EmptyValue": "warble.params.entry",
    "Parameter": "warble.params.entry",
    "ParameterSeries": "warble.params.series",
    "ImmutableSeriesView": "warble.params.view",
    "unmodifiable_view": "warble.params.view",
    "Form": "warble.http.forms",
    "FormParameter": "warble.http.forms",
    "parse_query_string": "warble.http.forms",
    "Header": "warble.http.headers",
    "HeaderSeries": "warble.http.headers",
    "PaginatedWindow": "warble.pagination.window",
    "QueryRequest": "warble.pagination.request",
    "SeriesConfig": "warble.config",
    "ConfigurationError": "warble.errors",
    "ImmutableCollectionError": "warble.errors",
    "WarbleError": "warble.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warble`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
