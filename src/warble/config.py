"""Series configuration.

SeriesConfig is a frozen dataclass, validated once in ``__post_init__`` and
shared freely after that.
"""

from dataclasses import dataclass

from warble.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class SeriesConfig:
    """Decoding and paging defaults. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SeriesConfig(default_page_size=50, max_page_size=200)
    """

    # Decoding
    query_encoding: str = "utf-8"
    form_encoding: str = "utf-8"
    header_encoding: str = "latin-1"  # RFC 9110 field values
    keep_blank_values: bool = True

    # Paging
    default_page_size: int = 25
    max_page_size: int = 500  # 0 = no upper bound

    # Header folding
    value_separator: str = ","

    def __post_init__(self) -> None:
        if self.default_page_size < 0:
            msg = f"default_page_size must be >= 0, got {self.default_page_size}"
            raise ConfigurationError(msg)
        if self.max_page_size < 0:
            msg = f"max_page_size must be >= 0, got {self.max_page_size}"
            raise ConfigurationError(msg)
        if self.max_page_size and self.default_page_size > self.max_page_size:
            msg = (
                f"default_page_size ({self.default_page_size}) exceeds "
                f"max_page_size ({self.max_page_size})"
            )
            raise ConfigurationError(msg)
        if not self.value_separator:
            msg = "value_separator must not be empty"
            raise ConfigurationError(msg)

    def clamp_page_size(self, size: int) -> int:
        """Clamp *size* to ``max_page_size`` (no-op when unbounded)."""
        if self.max_page_size and size > self.max_page_size:
            return self.max_page_size
        return size


DEFAULT_CONFIG = SeriesConfig()
