"""
Entity Status Model

Each managed table stores the lifecycle of its rows in one status column.
A status in the table's pending set means the row has outstanding work;
the status determines which convergence action the row needs, and the
action determines the status the row ends in once converged.

    toadd / torestore / toenable  -> PROVISION    -> enabled
    tochange                      -> RECONFIGURE  -> enabled
    todisable                     -> DISABLE      -> disabled
    todelete                      -> REMOVE       -> row deleted

Any other status (disabled, ordered, enabled, error, ...) is considered already
converged or owned by someone else and is never touched.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import inspect as sa_inspect

from hostpanel.exceptions import StatusModelError


class EntityStatus(str, enum.Enum):
    TOADD = "toadd"
    TOCHANGE = "tochange"
    TOENABLE = "toenable"
    TODISABLE = "todisable"
    DISABLED = "disabled"
    ORDERED = "ordered"
    TODELETE = "todelete"
    TORESTORE = "torestore"
    ENABLED = "enabled"
    ERROR = "error"

    # Plugin lifecycle
    TOINSTALL = "toinstall"
    TOUPDATE = "toupdate"
    UNINSTALLED = "uninstalled"


class ConvergenceAction(str, enum.Enum):
    PROVISION = "provision_or_enable"
    RECONFIGURE = "reconfigure"
    DISABLE = "disable"
    REMOVE = "remove"


DEFAULT_ACTIONS: Mapping[str, ConvergenceAction] = {
    EntityStatus.TOADD.value: ConvergenceAction.PROVISION,
    EntityStatus.TORESTORE.value: ConvergenceAction.PROVISION,
    EntityStatus.TOENABLE.value: ConvergenceAction.PROVISION,
    EntityStatus.TOCHANGE.value: ConvergenceAction.RECONFIGURE,
    EntityStatus.TODISABLE.value: ConvergenceAction.DISABLE,
    EntityStatus.TODELETE.value: ConvergenceAction.REMOVE,
}

DEFAULT_TERMINALS: Mapping[ConvergenceAction, str] = {
    ConvergenceAction.PROVISION: EntityStatus.ENABLED.value,
    ConvergenceAction.RECONFIGURE: EntityStatus.ENABLED.value,
    ConvergenceAction.DISABLE: EntityStatus.DISABLED.value,
}

# Statuses that never denote outstanding work
NEVER_PENDING = frozenset({EntityStatus.DISABLED.value, EntityStatus.ORDERED.value})

# Statuses left alone when a setup run requeues every entity for reconfiguration
SETUP_PRESERVED = frozenset(
    {
        EntityStatus.TOADD.value,
        EntityStatus.TORESTORE.value,
        EntityStatus.TOENABLE.value,
        EntityStatus.TODISABLE.value,
        EntityStatus.DISABLED.value,
        EntityStatus.ORDERED.value,
        EntityStatus.TODELETE.value,
    }
)


def _value(status: str | enum.Enum) -> str:
    return status.value if isinstance(status, enum.Enum) else str(status)


@dataclass(frozen=True, eq=False)
class TableStatusModel:
    """
    Status state machine of one managed table.

    Attributes:
        table:            Table name, used in logs and handler lookup.
        model:            SQLAlchemy model class of the table.
        status_attr:      Name of the status column attribute.
        message_attr:     Column receiving the error text of a failed row.
        actions:          Pending status -> convergence action.
        terminals:        Convergence action -> terminal status.
                          REMOVE has none: the handler deletes the row.
        error_status:     Status given to a row whose convergence failed.
        extra_filter:     Optional callable(model) -> SQL clause restricting
                          which rows belong to the managed set.
        requeue_statuses: Statuses requeued as 'tochange' at setup time.
                          None requeues every status outside SETUP_PRESERVED
                          and turns 'disabled' into 'todisable'.
    """

    table: str
    model: type
    status_attr: str
    message_attr: str = "status_message"
    actions: Mapping[str, ConvergenceAction] = field(default_factory=lambda: dict(DEFAULT_ACTIONS))
    terminals: Mapping[ConvergenceAction, str] = field(default_factory=lambda: dict(DEFAULT_TERMINALS))
    error_status: str = EntityStatus.ERROR.value
    extra_filter: Callable[[type], Any] | None = None
    requeue_statuses: frozenset[str] | None = None

    def __post_init__(self) -> None:
        actions = {_value(status): ConvergenceAction(action) for status, action in self.actions.items()}
        terminals = {ConvergenceAction(action): _value(status) for action, status in self.terminals.items()}
        object.__setattr__(self, "actions", actions)
        object.__setattr__(self, "terminals", terminals)
        object.__setattr__(self, "error_status", _value(self.error_status))
        if self.requeue_statuses is not None:
            object.__setattr__(self, "requeue_statuses", frozenset(_value(s) for s in self.requeue_statuses))
        self._validate()

    def _validate(self) -> None:
        if not self.actions:
            raise StatusModelError(self.table, "no pending status declared")

        for attr in (self.status_attr, self.message_attr):
            if not hasattr(self.model, attr):
                raise StatusModelError(self.table, f"model {self.model.__name__} has no attribute '{attr}'")

        settled = NEVER_PENDING | set(self.terminals.values()) | {self.error_status}
        for status in self.actions:
            if status in settled:
                raise StatusModelError(self.table, f"status '{status}' cannot be both pending and settled")

        if ConvergenceAction.REMOVE in self.terminals:
            raise StatusModelError(self.table, "remove action cannot declare a terminal status")
        for action in set(self.actions.values()):
            if action is not ConvergenceAction.REMOVE and action not in self.terminals:
                raise StatusModelError(self.table, f"action '{action.value}' has no terminal status")

    # ── Lookup ────────────────────────────────────────────────────────────────

    @property
    def pending_statuses(self) -> frozenset[str]:
        return frozenset(self.actions)

    def is_pending(self, status: str | None) -> bool:
        return status is not None and _value(status) in self.actions

    def action_for(self, status: str) -> ConvergenceAction | None:
        return self.actions.get(_value(status))

    def terminal_for(self, action: ConvergenceAction) -> str | None:
        return self.terminals.get(action)

    # ── SQL helpers ───────────────────────────────────────────────────────────

    @property
    def status_column(self):
        return getattr(self.model, self.status_attr)

    @property
    def primary_key(self):
        return sa_inspect(self.model).primary_key[0]

    def filters(self) -> list[Any]:
        """Clauses selecting the rows belonging to this managed set."""
        return [self.extra_filter(self.model)] if self.extra_filter is not None else []

    def status_of(self, row: Any) -> str:
        return getattr(row, self.status_attr)
