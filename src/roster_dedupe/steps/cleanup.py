from __future__ import annotations

from collections.abc import Callable, Sequence


class NameNormalizer:
    """Composable name normalizer: strip and lower-case, then any extra transforms.

    The normalized form is only used for comparison; records are never rewritten.
    """

    def __init__(self, transforms: Sequence[Callable[[str], str]] | None = None) -> None:
        self._transforms = list(transforms or ())

    def normalize(self, name: str | None) -> str:
        text = (name or "").strip().lower()
        for transform in self._transforms:
            text = transform(text)
        return text


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())
