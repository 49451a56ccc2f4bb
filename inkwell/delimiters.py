"""Delimiter handling: one token in, an (open, close) pair out."""

from dataclasses import dataclass

DEFAULT_DELIMITER = "&&"


@dataclass(frozen=True)
class Delimiters:
    """Opening and closing marker tokens."""
    open: str
    close: str

    @property
    def usable(self) -> bool:
        """Whether this pair can bracket a marker at all."""
        return bool(self.open) and bool(self.close)


def split_delimiter(token: str = DEFAULT_DELIMITER) -> Delimiters:
    """Split a delimiter token into its opening and closing halves.

    Examples:
        split_delimiter("&&") -> Delimiters(open="&", close="&")
        split_delimiter("{{}}") -> Delimiters(open="{{", close="}}")
        split_delimiter("%") -> Delimiters(open="%", close="%")

    Even-length tokens are bisected; odd-length tokens are used whole on
    both sides. The empty string gives an unusable pair.
    """
    if len(token) % 2 == 0:
        mid = len(token) // 2
        return Delimiters(open=token[:mid], close=token[mid:])
    return Delimiters(open=token, close=token)
