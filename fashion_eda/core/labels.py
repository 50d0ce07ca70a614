"""Lookup table between integer class codes and category names."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

FASHION_CLASS_NAMES: Tuple[str, ...] = (
    "T-shirt/top",
    "Trouser",
    "Pullover",
    "Dress",
    "Coat",
    "Sandal",
    "Shirt",
    "Sneaker",
    "Bag",
    "Ankle boot",
)


@dataclass(frozen=True)
class LabelMap:
    """
    Fixed mapping from integer class codes to human-readable names.

    Every code has exactly one name and no two codes share a name, so the
    two label encodings can always be converted into each other.

    Example:
        >>> lm = LabelMap.from_names(["cat", "dog"])
        >>> lm.name_of(1)
        'dog'
        >>> lm.code_of("cat")
        0
    """

    table: Dict[int, str]
    _reverse: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        table = {int(code): str(name) for code, name in self.table.items()}
        reverse: Dict[str, int] = {}
        for code, name in table.items():
            if name in reverse:
                raise ValueError(
                    f"Category name '{name}' is used by codes {reverse[name]} and {code}"
                )
            reverse[name] = code
        object.__setattr__(self, "table", dict(sorted(table.items())))
        object.__setattr__(self, "_reverse", reverse)

    @classmethod
    def from_names(cls, names: Iterable[str], start: int = 0) -> "LabelMap":
        """Build a map where the i-th name gets code ``start + i``."""
        return cls({start + i: name for i, name in enumerate(names)})

    @classmethod
    def default(cls) -> "LabelMap":
        """The ten apparel categories, codes 0-9."""
        return cls.from_names(FASHION_CLASS_NAMES)

    @property
    def codes(self) -> List[int]:
        return list(self.table.keys())

    @property
    def names(self) -> List[str]:
        return list(self.table.values())

    def name_of(self, code: int) -> str:
        try:
            return self.table[int(code)]
        except KeyError:
            raise KeyError(f"Code {code} not found. Available: {self.codes}") from None

    def code_of(self, name: str) -> int:
        try:
            return self._reverse[name]
        except KeyError:
            raise KeyError(f"Category '{name}' not found. Available: {self.names}") from None

    def names_for(self, codes: Sequence[int]) -> np.ndarray:
        """Vectorised ``name_of``."""
        return np.array([self.name_of(c) for c in np.asarray(codes).ravel()], dtype=object)

    def __contains__(self, code: object) -> bool:
        try:
            return int(code) in self.table  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False

    def __len__(self) -> int:
        return len(self.table)
