from typing import Optional, Protocol, TypeVar


T_co = TypeVar("T_co", covariant=True)


class FieldExtractor(Protocol[T_co]):
    """
    Uniform interface for every field heuristic.

    Implementations receive structured text (whole document or one section's
    content), are read-only and independent of each other, and never raise:
    "not found" is None, or an empty list for list-valued fields.
    """

    def extract(self, text: str) -> Optional[T_co]:
        ...
