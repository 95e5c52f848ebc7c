"""Grouped validator.

Runs several independent validators and combines their outcome.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..domain.interfaces import ValidatableProtocol
from ..domain.value_objects import MessageBag
from ..domain.exceptions import NoValidatorsError
from .validation_result import ValidationResult

_LOGGER = logging.getLogger(__name__)


class GroupedValidator:
    """Runs a collection of validators as one.

    Every validator is run even after one fails, so the combined messages
    describe every problem at once. When two failing validators report the
    same field, the later validator's messages replace the earlier ones.

    Example:
        >>> group = GroupedValidator([person_validator, address_validator])
        >>> if group.fails():
        ...     print(group.errors().all())
    """

    def __init__(
        self,
        validators: ValidatableProtocol | Sequence[ValidatableProtocol] | None = None,
    ) -> None:
        """Initialize grouped validator.

        Args:
            validators: A validator or a sequence of validators
        """
        self._validators: list[ValidatableProtocol] = []
        self._errors = MessageBag()

        if validators:
            self.add_validator(validators)

    @classmethod
    def make(
        cls,
        validators: ValidatableProtocol | Sequence[ValidatableProtocol] | None = None,
    ) -> GroupedValidator:
        """Static shorthand for creating a new grouped validator."""
        return cls(validators)

    def add_validator(
        self, validators: ValidatableProtocol | Sequence[ValidatableProtocol]
    ) -> GroupedValidator:
        """Add a validator, or a sequence of validators, to the group.

        Raises:
            TypeError: If an item does not provide passes() and errors()
        """
        if isinstance(validators, (list, tuple)):
            items = list(validators)
        else:
            items = [validators]

        for validator in items:
            if not isinstance(validator, ValidatableProtocol):
                raise TypeError(
                    f"{type(validator).__name__} does not provide passes() and errors()"
                )
            self._validators.append(validator)

        return self

    def get_validators(self) -> list[ValidatableProtocol]:
        return list(self._validators)

    def validate(self) -> ValidationResult:
        """Run every validator and combine the messages of those that fail.

        Raises:
            NoValidatorsError: If no validator was added
        """
        if not self._validators:
            raise NoValidatorsError()

        errors = MessageBag()
        failed = 0

        for validator in self._validators:
            if not validator.passes():
                failed += 1
                errors.merge(validator.errors())

        self._errors = errors

        _LOGGER.debug(
            "Grouped validation ran %d validators, %d failed",
            len(self._validators),
            failed,
        )
        return ValidationResult(valid=failed == 0, messages=MessageBag(errors))

    def passes(self) -> bool:
        """Check whether all of the validators pass."""
        return self.validate().valid

    def fails(self) -> bool:
        return not self.passes()

    def errors(self) -> MessageBag:
        """Return the combined messages of the last run."""
        return MessageBag(self._errors)

    def get_message_bag(self) -> MessageBag:
        return self.errors()
