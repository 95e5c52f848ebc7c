"""MessageBag value object.

Ordered collection of validation messages keyed by field name.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Iterable


class MessageBag(Mapping[str, list[str]]):
    """Field name to list of messages, in insertion order.

    Reads like a plain mapping, so it can be handed anywhere a
    ``Mapping[str, list[str]]`` is expected. Lists returned by item
    access are copies; use ``add`` or ``merge`` to change the bag.

    Example:
        >>> bag = MessageBag({"email": ["The email field is required."]})
        >>> bag.add("email", "The email must be a valid email address.")
        >>> bag.first("email")
        'The email field is required.'
        >>> len(bag["email"])
        2
    """

    def __init__(self, messages: Mapping[str, Iterable[str]] | None = None) -> None:
        """Initialize message bag.

        Args:
            messages: Optional initial field -> messages mapping
        """
        self._messages: dict[str, list[str]] = {}
        if messages:
            for key, values in messages.items():
                for message in _as_list(values):
                    self.add(key, message)

    def __getitem__(self, key: str) -> list[str]:
        return list(self._messages[key])

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MessageBag):
            return self._messages == other._messages
        if isinstance(other, Mapping):
            return self._messages == {k: list(v) for k, v in other.items()}
        return NotImplemented

    def __repr__(self) -> str:
        return f"MessageBag({self._messages!r})"

    def add(self, key: str, message: str) -> None:
        """Append a message for a field, skipping exact duplicates."""
        messages = self._messages.setdefault(key, [])
        if message not in messages:
            messages.append(message)

    def merge(self, other: Mapping[str, Iterable[str]]) -> None:
        """Merge another field -> messages mapping into this bag.

        A field already present is replaced by the incoming messages.
        """
        for key, values in other.items():
            self._messages.pop(key, None)
            for message in _as_list(values):
                self.add(key, message)

    def has(self, key: str) -> bool:
        """Return True if the field has at least one message."""
        return bool(self._messages.get(key))

    def first(self, key: str | None = None, default: str = "") -> str:
        """Return the first message for a field, or of the whole bag."""
        if key is None:
            for messages in self._messages.values():
                if messages:
                    return messages[0]
            return default
        messages = self._messages.get(key)
        return messages[0] if messages else default

    def all(self) -> list[str]:
        """Return every message, flattened in insertion order."""
        return [message for messages in self._messages.values() for message in messages]

    def count(self) -> int:
        """Return the total number of messages."""
        return sum(len(messages) for messages in self._messages.values())

    def is_empty(self) -> bool:
        return not self._messages

    def to_dict(self) -> dict[str, list[str]]:
        """Return a plain dict copy of the bag."""
        return {key: list(messages) for key, messages in self._messages.items()}


def _as_list(values: Iterable[str] | str) -> list[str]:
    if isinstance(values, str):
        return [values]
    return list(values)
