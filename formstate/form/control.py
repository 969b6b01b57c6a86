from typing import Callable, Iterable, List, Optional, Union
import logging

from formstate.core import create_signal, batch_updates
from formstate.form.validator import ErrorKind, Validator

logger = logging.getLogger(__name__)


class FormControl:
    """
    State of a single input: its value, interaction flags and validation
    outcome.

    Validation only runs once the control has been touched (blurred at
    least once) or made dirty (its value changed). A pristine control shows
    no errors even if its initial value would fail. ``validate`` bypasses
    that gate.

    ``touched`` and ``dirty`` only ever go back to ``False`` through
    ``reset``.
    """

    def __init__(self, initial_value: str = "", validators: Iterable[Validator] = (), name: str = ""):
        self.name = name
        self._initial_value = initial_value
        self._validators = tuple(validators)

        self._value, self._set_value = create_signal(initial_value)
        self._errors, self._set_errors = create_signal(())
        self._error_kind, self._set_error_kind = create_signal(None)
        self._touched, self._set_touched = create_signal(False)
        self._dirty, self._set_dirty = create_signal(False)
        self._has_focus, self._set_has_focus = create_signal(False)

    @property
    def initial_value(self) -> str:
        return self._initial_value

    @property
    def validators(self) -> tuple:
        return self._validators

    @property
    def value(self) -> str:
        return self._value()

    @property
    def errors(self) -> List[str]:
        return list(self._errors())

    @property
    def error_kind(self) -> Optional[Union[ErrorKind, str]]:
        """Kind of the first failing validator, or ``None``."""
        return self._error_kind()

    @property
    def touched(self) -> bool:
        return self._touched()

    @property
    def dirty(self) -> bool:
        return self._dirty()

    @property
    def has_focus(self) -> bool:
        return self._has_focus()

    @property
    def valid(self) -> bool:
        return not self._errors()

    @property
    def first_error(self) -> Optional[str]:
        errors = self._errors()
        return errors[0] if errors else None

    @property
    def last_error(self) -> Optional[str]:
        errors = self._errors()
        return errors[-1] if errors else None

    @property
    def is_dirty_unfocused_error(self) -> bool:
        """True when an edited, unfocused control is invalid; the usual cue to show its error."""
        return self.dirty and not self.has_focus and not self.valid

    def set(self, new_value: str) -> None:
        changed = new_value != self._value.peek()
        failing = None
        # rules run before any state is written, so a raising rule leaves the control untouched
        if changed or self._touched.peek() or self._dirty.peek():
            failing = self._failing_validators(new_value)

        def perform_updates():
            if changed:
                self._set_dirty(True)
            self._set_value(new_value)
            if failing is not None:
                self._apply_errors(failing)

        batch_updates(perform_updates)

    def on_focus_change(self, has_focus: bool) -> None:
        failing = None
        if not has_focus and not self._touched.peek():
            failing = self._failing_validators(self._value.peek())

        def perform_updates():
            self._set_has_focus(has_focus)
            if failing is not None:
                self._set_touched(True)
                self._apply_errors(failing)

        batch_updates(perform_updates)

    def validate(self) -> bool:
        """
        Runs every validator against the current value, in order.

        Returns:
            True if no validator failed.
        """
        failing = self._failing_validators(self._value.peek())
        batch_updates(lambda: self._apply_errors(failing))
        return not failing

    def _failing_validators(self, value: str) -> List[Validator]:
        return [validator for validator in self._validators if not validator.is_valid(value)]

    def _apply_errors(self, failing: List[Validator]) -> None:
        self._set_errors(tuple(validator.message for validator in failing))
        self._set_error_kind(failing[0].error_kind if failing else None)
        logger.debug("Validated control %r: %d error(s)", self.name, len(failing))

    def reset(self) -> None:
        """Restores the initial value and clears errors, touched and dirty."""
        batch_updates(lambda: [
            self._set_value(self._initial_value),
            self._set_errors(()),
            self._set_error_kind(None),
            self._set_touched(False),
            self._set_dirty(False),
        ])

    def subscribe(self, listener: Callable[["FormControl"], None]) -> Callable[[], None]:
        """
        Calls ``listener(control)`` after any operation that changes the
        control's observable state.

        Returns:
            A function that removes the subscription.
        """
        def notify():
            listener(self)

        return self.watch(notify)

    def watch(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Subscribes a no-argument ``callback`` to every state signal. Within a
        batch the same callback object runs once, however many signals it
        watches changed.
        """
        unsubscribers = [
            signal.subscribe(callback)
            for signal in (self._value, self._errors, self._error_kind,
                           self._touched, self._dirty, self._has_focus)
        ]

        def unsubscribe():
            for remove in unsubscribers:
                remove()

        return unsubscribe

    def __repr__(self):
        return (
            f"FormControl(name={self.name!r}, value={self.value!r}, errors={self.errors!r}, "
            f"touched={self.touched}, dirty={self.dirty}, has_focus={self.has_focus})"
        )
