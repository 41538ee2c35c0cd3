"""Short opaque identifiers for trips, days and spots."""

import random
import string

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


class IdGenerator:
    """Random base-36 id source.

    Ids are unique enough for a single local client; they carry no ordering
    and are not security tokens.
    """

    def __init__(self, rng: random.Random | None = None, length: int = ID_LENGTH) -> None:
        """Initialize generator.

        Args:
            rng: Optional random number generator (seed it in tests).
            length: Number of characters per id.
        """
        self.rng = rng or random.Random()
        self.length = length

    def __call__(self) -> str:
        return "".join(self.rng.choices(ID_ALPHABET, k=self.length))


_default_generator = IdGenerator()


def generate_id() -> str:
    """Generate a new 9-character id."""
    return _default_generator()
