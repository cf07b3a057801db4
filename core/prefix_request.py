"""
発行依頼（プレフィックスと件数）

"78" means 78 codes with no prefix, "AB3:78" means 78 codes starting with "AB3".
"""
from typing import NamedTuple


class PrefixRequest(NamedTuple):
    prefix: str
    count: int

    @classmethod
    def parse(cls, text: str) -> "PrefixRequest":
        prefix, sep, number = text.partition(":")
        if not sep:
            prefix, number = "", text
        # ASCII digits only: no sign, whitespace or underscores
        if not (number.isascii() and number.isdigit()):
            raise ValueError(f"invalid code count in {text!r}")
        return cls(prefix, int(number))

    def __str__(self):
        return f"{self.prefix}:{self.count}" if self.prefix else str(self.count)
