from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional
import logging

from formstate.core import batch_updates
from formstate.form.control import FormControl

logger = logging.getLogger(__name__)


class FormBuilder:
    """
    Manages and validates a fixed group of named form controls.

    Views (``valid``, ``invalid``, ``errors``, ``values``,
    ``control_errors``) are computed from the controls on every access, so
    they stay correct when a control is mutated through a direct reference.

    Operations addressing a control by name are lenient: an unknown name is
    a silent no-op (``get`` returns ``None``), which keeps UI bindings that
    reference a field outside the group from failing.

    Named forms should own a ``FormBuilder`` rather than subclass it::

        class LoginForm:
            def __init__(self):
                self.form = FormBuilder({
                    "email": FormControl("", [Required(), Email()]),
                    "password": FormControl("", [Required(), MinLength(8)]),
                })
    """

    def __init__(self, controls: Mapping[str, FormControl]):
        self._controls: Dict[str, FormControl] = dict(controls)

    @classmethod
    def of(cls, *controls: FormControl) -> "FormBuilder":
        """Builds a group keyed by each control's ``name``."""
        mapping: Dict[str, FormControl] = {}
        for control in controls:
            if not control.name:
                raise ValueError(f"Control has no name: {control!r}")
            if control.name in mapping:
                raise ValueError(f"Duplicate control name: {control.name!r}")
            mapping[control.name] = control
        return cls(mapping)

    @property
    def valid(self) -> bool:
        return all(control.valid for control in self._controls.values())

    @property
    def invalid(self) -> bool:
        return not self.valid

    @property
    def errors(self) -> List[str]:
        """All error messages, in control order."""
        return [error for control in self._controls.values() for error in control.errors]

    @property
    def values(self) -> Dict[str, str]:
        return {name: control.value for name, control in self._controls.items()}

    @property
    def control_errors(self) -> Dict[str, List[str]]:
        """Errors per control, only for controls that have at least one."""
        return {
            name: control.errors
            for name, control in self._controls.items()
            if control.errors
        }

    def group(self) -> Mapping[str, FormControl]:
        return MappingProxyType(self._controls)

    def reset_all(self) -> None:
        def perform_updates():
            for control in self._controls.values():
                control.reset()

        batch_updates(perform_updates)

    def get(self, name: str) -> Optional[FormControl]:
        return self._controls.get(name)

    def set(self, name: str, value: str) -> None:
        control = self._controls.get(name)
        if control is None:
            logger.debug("Ignoring set on unknown control %r", name)
            return
        control.set(value)

    def on_focus_change(self, name: str, has_focus: bool) -> None:
        control = self._controls.get(name)
        if control is None:
            logger.debug("Ignoring focus change on unknown control %r", name)
            return
        control.on_focus_change(has_focus)

    def get_value_or_empty(self, name: str) -> str:
        control = self._controls.get(name)
        return control.value if control is not None else ""

    def get_error(self, name: str) -> Optional[str]:
        """Returns the last error of the named control."""
        control = self._controls.get(name)
        return control.last_error if control is not None else None

    def validate(self) -> bool:
        """
        Validates every control regardless of touched/dirty state, as on submit.

        Returns:
            True if every control is valid.
        """
        def perform_updates():
            for control in self._controls.values():
                control.validate()

        batch_updates(perform_updates)
        return self.valid

    def subscribe(self, listener: Callable[["FormBuilder"], None]) -> Callable[[], None]:
        """
        Calls ``listener(form)`` after any control in the group changes.
        A group-wide operation such as ``reset_all`` notifies once.
        """
        def notify():
            listener(self)

        unsubscribers = [control.watch(notify) for control in self._controls.values()]

        def unsubscribe():
            for remove in unsubscribers:
                remove()

        return unsubscribe

    def __contains__(self, name: str) -> bool:
        return name in self._controls

    def __iter__(self):
        return iter(self._controls)

    def __len__(self) -> int:
        return len(self._controls)

    def __repr__(self):
        return f"FormBuilder({list(self._controls)!r})"
