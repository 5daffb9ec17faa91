"""Identity encoding for stored file paths."""

from cargo.exceptions import IdentityMissing

BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
PAD_WIDTH = 6
SEGMENT_WIDTH = 2


class IdentityEncoder:
    """Turns a record id into the three segments used for its directory and filename.

    The id is converted to base 36, zero-padded to six places and split into
    three parts of two characters each:

    * base 36 keeps directory names and filenames short
    * a maximum of "zz" per part limits each directory to 1296 entries
    * zero-padding keeps directory listings in id order

    For example, 1947 is "1i3" in base 36 and encodes to ``["00", "01", "i3"]``.

    Ids of 36**6 or more don't fit in six places. The extra digits go to the
    first segment, which then grows past two characters; listings of those
    prefix directories no longer sort in id order.
    """

    def to_base36(self, number: int) -> str:
        if number < 0:
            raise ValueError(f"Identity must be non-negative, got {number}")
        if number == 0:
            return "0"
        digits = []
        while number:
            number, remainder = divmod(number, 36)
            digits.append(BASE36_DIGITS[remainder])
        return "".join(reversed(digits))

    def encode(self, identity: int | None) -> list[str]:
        """Return ``[prefix, mid, low]`` for ``identity``."""
        if identity is None:
            raise IdentityMissing()
        if isinstance(identity, bool) or not isinstance(identity, int):
            raise TypeError(f"Identity must be an integer, got {type(identity).__name__}")

        padded = self.to_base36(identity).rjust(PAD_WIDTH, "0")
        # Slicing from the right leaves any overflow digits in the prefix.
        low = padded[-SEGMENT_WIDTH:]
        mid = padded[-2 * SEGMENT_WIDTH : -SEGMENT_WIDTH]
        prefix = padded[: -2 * SEGMENT_WIDTH]
        return [prefix, mid, low]

    def decode(self, segments: list[str]) -> int:
        """Recover the identity from segments produced by ``encode``."""
        if len(segments) != 3 or not all(segments):
            raise ValueError(f"Expected three non-empty segments, got {segments!r}")
        return int("".join(segments), 36)
