"""Adapter exposing a raw engine session as a groupable validator."""

from __future__ import annotations

from ..domain.interfaces import IEngineSession
from ..domain.value_objects import MessageBag


class NativeValidatorAdapter:
    """Wraps an engine session so it satisfies ValidatableProtocol.

    Example:
        >>> session = engine.make({"terms": "no"}, {"terms": "accepted"})
        >>> GroupedValidator([person_validator, NativeValidatorAdapter(session)])
    """

    def __init__(self, session: IEngineSession) -> None:
        self._session = session
        self._errors: MessageBag | None = None

    def passes(self) -> bool:
        passed = self._session.passes()
        self._errors = MessageBag() if passed else self._session.messages()
        return passed

    def fails(self) -> bool:
        return not self.passes()

    def errors(self) -> MessageBag:
        if self._errors is None:
            self.passes()
        return MessageBag(self._errors)

    def get_message_bag(self) -> MessageBag:
        return self.errors()
