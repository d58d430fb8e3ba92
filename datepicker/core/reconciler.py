"""Merging of externally owned and internally tracked picker state.

A host may take control of any of a component's managed fields. For a
controlled field the host's value is authoritative: internal state mirrors it
and proposed changes are only reported upward, never stored. Uncontrolled
fields are owned by the component and patched directly.

All operations are pure; state mappings are never mutated in place.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from datepicker.core.logging import get_logger

logger = get_logger(__name__)

State = dict[str, Any]


@dataclass(frozen=True)
class Reconciler:
    """Reconciles controlled and uncontrolled values of declared fields.

    Attributes:
        managed_fields: Names of the fields a host is allowed to control.
            Keys outside this set are ignored everywhere.
    """

    managed_fields: frozenset[str]

    @classmethod
    def of(cls, *fields: str) -> "Reconciler":
        return cls(managed_fields=frozenset(fields))

    def controlled(self, names: Iterable[str]) -> frozenset[str]:
        """Restrict ``names`` to the managed fields."""
        return frozenset(names) & self.managed_fields

    def initialize(
        self,
        defaults: Mapping[str, Any],
        controlled: Iterable[str],
        external: Mapping[str, Any],
    ) -> State:
        """Seed internal state.

        Controlled fields with a defined (non-None) external value are seeded
        from it; every other managed field is seeded from ``defaults``.
        """
        owned = self.controlled(controlled)
        state: State = {}
        for name in self.managed_fields:
            if name in owned and external.get(name) is not None:
                state[name] = external[name]
            elif name in defaults:
                state[name] = defaults[name]
        return state

    def try_update(
        self,
        state: Mapping[str, Any],
        controlled: Iterable[str],
        external: Mapping[str, Any],
        patch: Mapping[str, Any],
    ) -> State:
        """Apply a proposed patch to internal state.

        Uncontrolled keys are applied. Controlled keys leave internal state
        untouched apart from re-syncing it with the host's current value; the
        host feeds the new value back through ``receive``. Unknown keys are
        ignored. Never raises.
        """
        owned = self.controlled(controlled)
        new_state: State = dict(state)
        for name, value in patch.items():
            if name not in self.managed_fields:
                logger.debug("patch_key_ignored", field=name)
                continue
            if name in owned:
                if external.get(name) is not None:
                    new_state[name] = external[name]
                continue
            new_state[name] = value
        return new_state

    def receive(
        self,
        state: Mapping[str, Any],
        controlled: Iterable[str],
        external: Mapping[str, Any],
    ) -> State:
        """Copy the host's current values for controlled fields into state."""
        owned = self.controlled(controlled)
        new_state: State = dict(state)
        for name in owned:
            if external.get(name) is not None:
                new_state[name] = external[name]
        return new_state
