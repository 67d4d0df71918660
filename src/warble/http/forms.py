"""Form series — query strings and form bodies decoded into a ParameterSeries.

``Form`` is the concrete series for HTML form semantics: case-sensitive
names, repeatable fields (checkboxes, multi-selects), and values that may
be missing entirely (``?flag`` as opposed to ``?flag=``).

URL-encoded data uses stdlib ``urllib.parse``, no extra dependency.
``python-multipart`` is an optional dependency (``pip install warble[forms]``).
"""

import logging
from collections.abc import Callable, Iterable, Mapping, MutableSequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import quote_plus, unquote_plus

from warble.config import DEFAULT_CONFIG, SeriesConfig
from warble.errors import ConfigurationError, FormDecodeError
from warble.params.entry import Parameter
from warble.params.series import ParameterSeries

logger = logging.getLogger("warble.forms")


@dataclass(frozen=True, slots=True)
class UploadFile:
    """An uploaded file from a multipart form submission.

    Immutable metadata with the content held in memory as bytes
    (suitable for typical web uploads).
    """

    filename: str
    content_type: str
    size: int
    _content: bytes

    async def read(self) -> bytes:
        """Return the file content as bytes."""
        return self._content

    async def save(self, path: Path) -> None:
        """Write the file content to disk.

        Args:
            path: Destination file path. Parent directories must exist.
        """
        path.write_bytes(self._content)

    def __repr__(self) -> str:
        return f"UploadFile({self.filename!r}, {self.content_type!r}, {self.size} bytes)"


@dataclass(slots=True)
class FormParameter(Parameter):
    """A form field. Encodes back to ``name=value`` form syntax."""

    def encode(self, encoding: str = "utf-8") -> str:
        """Return ``name=value`` form-encoded; a bare ``name`` when valueless."""
        name = quote_plus(self.name, encoding=encoding)
        if self.value is None:
            return name
        return f"{name}={quote_plus(self.value, encoding=encoding)}"


class Form(ParameterSeries[FormParameter]):
    """Modifiable series of form fields.

    Usage::

        form = Form.from_query_string(b"tag=python&tag=web&page=2")
        form.get_values_array("tag")   # ["python", "web"]
        form.get_int("page")           # 2
        form.encode()                  # "tag=python&tag=web&page=2"
    """

    __slots__ = ("_files",)

    def __init__(
        self,
        delegate: MutableSequence[FormParameter] | None = None,
        files: Mapping[str, Iterable[UploadFile]] | None = None,
    ) -> None:
        super().__init__(delegate, make_entry=FormParameter, make_series=Form)
        self._files: dict[str, tuple[UploadFile, ...]] = {}
        for name, uploads in (files or {}).items():
            batch = tuple(uploads)
            if batch:
                self._files[name] = batch

    @classmethod
    def from_query_string(cls, query: bytes | str, config: SeriesConfig | None = None) -> "Form":
        """Decode a URL query string (without the leading ``?``)."""
        return parse_query_string(query, config)

    @property
    def files(self) -> Mapping[str, UploadFile]:
        """First uploaded file per field name (multipart forms only)."""
        return {name: uploads[0] for name, uploads in self._files.items()}

    def get_files(self, name: str) -> list[UploadFile]:
        """Every file uploaded under *name*, in submission order."""
        return list(self._files.get(name, ()))

    def encode(self, encoding: str | None = None) -> str:
        """Re-encode the fields as ``application/x-www-form-urlencoded``."""
        enc = encoding or DEFAULT_CONFIG.form_encoding
        return "&".join(param.encode(enc) for param in self)

    def get_int(self, name: str, default: int | None = None) -> int | None:
        """Return the first value as int, or *default* if missing or not numeric."""
        value = self.get_first_value(name)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def get_bool(self, name: str, default: bool | None = None) -> bool | None:
        """Return the first value as bool (``true``/``1``/``yes``/``on`` → True)."""
        value = self.get_first_value(name)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")


def parse_query_string(query: bytes | str, config: SeriesConfig | None = None) -> Form:
    """Decode a query string into a ``Form``, keeping order and duplicates.

    ``a=`` decodes to an empty string; a bare ``a`` decodes to ``None``.
    With ``keep_blank_values=False`` both are dropped.
    """
    cfg = config or DEFAULT_CONFIG
    text = query.decode(cfg.query_encoding) if isinstance(query, bytes) else query
    return _decode_pairs(text, cfg.query_encoding, cfg.keep_blank_values)


def _decode_pairs(text: str, encoding: str, keep_blank_values: bool) -> Form:
    # parse_qsl folds ``a`` and ``a=`` together; split by hand to keep them apart
    form = Form()
    for chunk in text.split("&"):
        if not chunk:
            continue
        name, sep, value = chunk.partition("=")
        decoded_name = unquote_plus(name, encoding=encoding)
        if sep:
            decoded = unquote_plus(value, encoding=encoding)
            if decoded or keep_blank_values:
                form.add(decoded_name, decoded)
        elif keep_blank_values:
            form.add(decoded_name, None)
    return form


async def parse_form_data(
    body: bytes,
    content_type: str,
    config: SeriesConfig | None = None,
) -> Form:
    """Parse a form body into a ``Form``.

    Supports:
    - ``application/x-www-form-urlencoded`` (stdlib, no extra dependency)
    - ``multipart/form-data`` (requires ``python-multipart``)

    Args:
        body: Raw request body bytes.
        content_type: The Content-Type header value.
        config: Decoding settings; defaults to ``SeriesConfig()``.

    Returns:
        Parsed Form instance.

    Raises:
        ConfigurationError: If multipart parsing is needed but
            ``python-multipart`` is not installed.
        FormDecodeError: If content type is not a supported form encoding
            or a multipart body has no boundary.
    """
    cfg = config or DEFAULT_CONFIG
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        form = _decode_pairs(body.decode(cfg.form_encoding), cfg.form_encoding, cfg.keep_blank_values)
    elif ct_lower == "multipart/form-data":
        form = await _parse_multipart(body, content_type, cfg)
    else:
        msg = f"Unsupported form content type: {content_type!r}"
        raise FormDecodeError(msg)

    logger.debug("decoded %s form: %d fields, %d file fields", ct_lower, len(form), len(form.files))
    return form


class _PartCollector:
    """Turns python-multipart callbacks into form fields and uploads.

    Header names and values may arrive split across several callbacks, so
    both are buffered until ``on_header_end``.
    """

    __slots__ = (
        "_data",
        "_encoding",
        "_header_name",
        "_header_value",
        "_headers",
        "_parse_options",
        "fields",
        "uploads",
    )

    def __init__(self, encoding: str, parse_options: Callable[[bytes], Any]) -> None:
        self._encoding = encoding
        self._parse_options = parse_options
        self.fields: list[FormParameter] = []
        self.uploads: dict[str, list[UploadFile]] = {}
        self._headers: dict[str, str] = {}
        self._header_name = bytearray()
        self._header_value = bytearray()
        self._data = bytearray()

    def callbacks(self) -> dict[str, Callable[..., None]]:
        return {
            "on_part_begin": self.on_part_begin,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
        }

    def on_part_begin(self) -> None:
        self._headers = {}
        self._data = bytearray()

    def on_header_field(self, chunk: bytes, start: int, end: int) -> None:
        self._header_name.extend(chunk[start:end])

    def on_header_value(self, chunk: bytes, start: int, end: int) -> None:
        self._header_value.extend(chunk[start:end])

    def on_header_end(self) -> None:
        name = self._header_name.decode("latin-1").lower()
        self._headers[name] = self._header_value.decode("latin-1")
        self._header_name = bytearray()
        self._header_value = bytearray()

    def on_part_data(self, chunk: bytes, start: int, end: int) -> None:
        self._data.extend(chunk[start:end])

    def on_part_end(self) -> None:
        disposition = self._headers.get("content-disposition", "")
        _, params = self._parse_options(disposition.encode("latin-1"))
        field = params.get(b"name")
        if field is None:
            logger.debug("skipping multipart part without a field name")
            return

        name = field.decode(self._encoding)
        filename = params.get(b"filename")
        if filename is None:
            value = self._data.decode(self._encoding, errors="replace")
            self.fields.append(FormParameter(name, value))
            return

        content = bytes(self._data)
        self.uploads.setdefault(name, []).append(
            UploadFile(
                filename=filename.decode(self._encoding),
                content_type=self._headers.get("content-type", "application/octet-stream"),
                size=len(content),
                _content=content,
            )
        )


async def _parse_multipart(body: bytes, content_type: str, cfg: SeriesConfig) -> Form:
    """Parse multipart form data using python-multipart.

    Several files under one field name are all kept (``Form.get_files``).
    Raises ``ConfigurationError`` if ``python-multipart`` is not installed.
    """
    try:
        from multipart.multipart import MultipartParser, parse_options_header
    except ImportError:
        msg = (
            "Multipart form parsing requires the 'python-multipart' package. "
            "Install it with: pip install warble[forms]"
        )
        raise ConfigurationError(msg) from None

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise FormDecodeError(msg)

    collector = _PartCollector(cfg.form_encoding, parse_options_header)
    parser = MultipartParser(boundary, collector.callbacks())
    parser.write(body)
    parser.finalize()
    return Form(collector.fields, collector.uploads)
