"""Hint-label assignment and incremental matching for quick-jump mode.

Labels are computed from the visible entries only. While the alphabet has
room, every entry gets one character. Otherwise the leading ``P``
characters become prefixes of two-character labels and the remaining
characters stay single labels, so no single label starts a two-character
one. Everything here is pure; hint mode keeps the result for one session.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from .errors import ConfigError

DEFAULT_HINT_ALPHABET = "tnseriaoplfuwyq;"

T = TypeVar("T")


def normalize_alphabet(alphabet: str, case_sensitive: bool = False) -> str:
    """Validate and de-duplicate a hint alphabet, preserving first occurrence.

    Case-insensitive alphabets are lower-cased before de-duplication.
    Raises ``ConfigError`` for fewer than two usable characters or for
    whitespace/non-printable characters.
    """
    if not isinstance(alphabet, str):
        raise ConfigError("hint_alphabet must be a string")
    source = alphabet if case_sensitive else alphabet.lower()
    out: list[str] = []
    for ch in source:
        if ch.isspace() or not ch.isprintable():
            raise ConfigError(f"hint_alphabet contains unusable character {ch!r}")
        if ch not in out:
            out.append(ch)
    if len(out) < 2:
        raise ConfigError("hint_alphabet needs at least two distinct characters")
    return "".join(out)


def hint_capacity(alphabet_size: int) -> int:
    """Largest number of entries the one/two-character scheme can label."""
    return alphabet_size * alphabet_size


def prefix_count(visible_count: int, alphabet_size: int) -> int:
    """Minimum prefixes ``P`` with ``(A - P) + P * A >= V``, capped at ``A``."""
    if visible_count <= alphabet_size:
        return 0
    for prefixes in range(1, alphabet_size + 1):
        if (alphabet_size - prefixes) + prefixes * alphabet_size >= visible_count:
            return prefixes
    return alphabet_size


def generate_labels(visible_count: int, alphabet: str) -> list[str]:
    """Return labels for ``visible_count`` entries in visible order.

    The list is shorter than ``visible_count`` when the count exceeds
    ``hint_capacity``; entries past the end get no label.
    """
    if visible_count <= 0:
        return []
    size = len(alphabet)
    if visible_count <= size:
        return list(alphabet[:visible_count])

    prefixes = prefix_count(visible_count, size)
    labels = list(alphabet[prefixes:])
    for prefix in alphabet[:prefixes]:
        for second in alphabet:
            if len(labels) >= visible_count:
                return labels
            labels.append(prefix + second)
    return labels


class HintMatch(str, Enum):
    """Outcome of resolving typed input against an assignment."""

    COMPLETE = "complete"
    PARTIAL = "partial"
    NONE = "none"


@dataclass(frozen=True)
class HintResolution:
    match: HintMatch
    index: int | None = None


@dataclass(frozen=True)
class HintAssignment(Generic[T]):
    """Bijection between labels and the visible entries they select.

    ``labels[i]`` is the label of ``entries[i]``; unlabeled trailing entries
    have no key in ``targets``.
    """

    entries: tuple[T, ...]
    labels: tuple[str, ...]
    case_sensitive: bool = False
    targets: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "targets",
            {label: idx for idx, label in enumerate(self.labels)},
        )

    def __len__(self) -> int:
        return len(self.labels)

    def normalize_input(self, text: str) -> str:
        return text if self.case_sensitive else text.lower()

    def label_for(self, index: int) -> str | None:
        if 0 <= index < len(self.labels):
            return self.labels[index]
        return None

    def resolve(self, buffer: str) -> HintResolution:
        """Resolve typed ``buffer`` to a complete, partial, or failed match."""
        typed = self.normalize_input(buffer)
        if not typed:
            return HintResolution(HintMatch.PARTIAL)
        index = self.targets.get(typed)
        if index is not None:
            return HintResolution(HintMatch.COMPLETE, index)
        if any(label.startswith(typed) for label in self.labels):
            return HintResolution(HintMatch.PARTIAL)
        return HintResolution(HintMatch.NONE)


def assign_hints(
    entries: Sequence[T],
    alphabet: str = DEFAULT_HINT_ALPHABET,
    case_sensitive: bool = False,
) -> HintAssignment[T]:
    """Label ``entries`` (the visible viewport slice) deterministically."""
    normalized = normalize_alphabet(alphabet, case_sensitive)
    labels = generate_labels(len(entries), normalized)
    return HintAssignment(
        entries=tuple(entries),
        labels=tuple(labels),
        case_sensitive=case_sensitive,
    )


__all__ = [
    "DEFAULT_HINT_ALPHABET",
    "HintAssignment",
    "HintMatch",
    "HintResolution",
    "assign_hints",
    "generate_labels",
    "hint_capacity",
    "normalize_alphabet",
    "prefix_count",
]
