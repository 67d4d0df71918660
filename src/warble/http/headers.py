"""Case-insensitive HTTP header series.

A ``ParameterSeries`` whose lookups ignore case unless told otherwise.
Built from raw ASGI byte pairs; decodes once on construction.
"""

from collections.abc import Iterable, MutableSequence
from dataclasses import dataclass

from warble.config import DEFAULT_CONFIG, SeriesConfig
from warble.params.entry import Parameter
from warble.params.series import ParameterSeries


@dataclass(slots=True)
class Header(Parameter):
    """A single header field."""


class HeaderSeries(ParameterSeries[Header]):
    """Ordered header fields with case-insensitive lookups.

    ``get_values`` folds repeated headers with ``SeriesConfig.value_separator``.
    Pass ``ignore_case=False`` to any lookup for an exact match.
    """

    __slots__ = ("_separator",)

    def __init__(
        self,
        delegate: MutableSequence[Header] | None = None,
        separator: str = DEFAULT_CONFIG.value_separator,
    ) -> None:
        super().__init__(delegate, make_entry=Header, make_series=self._with_separator)
        self._separator = separator

    def _with_separator(self, delegate: MutableSequence[Header] | None) -> "HeaderSeries":
        return HeaderSeries(delegate, self._separator)

    @classmethod
    def from_raw(
        cls,
        raw: Iterable[tuple[bytes, bytes]],
        config: SeriesConfig | None = None,
    ) -> "HeaderSeries":
        """Decode ASGI ``(name, value)`` byte pairs."""
        cfg = config or DEFAULT_CONFIG
        headers = cls(separator=cfg.value_separator)
        for name, value in raw:
            headers.add(name.decode(cfg.header_encoding), value.decode(cfg.header_encoding))
        return headers

    def raw(self, encoding: str | None = None) -> tuple[tuple[bytes, bytes], ...]:
        """Re-encode as ASGI byte pairs. Valueless headers encode as ``b""``."""
        enc = encoding or DEFAULT_CONFIG.header_encoding
        return tuple(
            (param.name.encode(enc), (param.value or "").encode(enc)) for param in self
        )

    def get_first(self, name: str, ignore_case: bool = True) -> Header | None:
        return super().get_first(name, ignore_case)

    def get_first_value(
        self, name: str, ignore_case: bool = True, default: str | None = None
    ) -> str | None:
        return super().get_first_value(name, ignore_case, default)

    def get_values(
        self, name: str, separator: str | None = None, ignore_case: bool = True
    ) -> str | None:
        return super().get_values(name, separator or self._separator, ignore_case)

    def get_values_array(self, name: str, ignore_case: bool = True) -> list[str | None]:
        return super().get_values_array(name, ignore_case)

    def remove_all(self, name: str, ignore_case: bool = True) -> bool:
        return super().remove_all(name, ignore_case)

    def remove_first(self, name: str, ignore_case: bool = True) -> bool:
        return super().remove_first(name, ignore_case)

    def set(self, name: str, value: str | None, ignore_case: bool = True) -> Header | None:
        return super().set(name, value, ignore_case)

    def sub_list_named(self, name: str, ignore_case: bool = True) -> "ParameterSeries[Header]":
        return super().sub_list_named(name, ignore_case)
