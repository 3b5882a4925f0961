"""
Events emitted while a system is built. Pass any callable taking an
``AccretionEvent`` as ``observer`` to the engine stages to receive them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

SYSTEM_SETUP = "system_setup"
PLANETESIMAL_ACCRETED = "planetesimal_accreted"
COALESCENCE = "coalescence"
MOON_CAPTURED = "moon_captured"
RING_FORMED = "ring_formed"
BOMBARDMENT_COMPLETE = "bombardment_complete"
ENVIRONMENT_GENERATED = "planetary_environment_generated"
SYSTEM_COMPLETE = "system_complete"


@dataclass(frozen=True)
class AccretionEvent:
    name: str
    details: Dict[str, Any] = field(default_factory=dict)


Observer = Callable[[AccretionEvent], None]


def emit(observer: Optional[Observer], name: str, **details) -> None:
    if observer is not None:
        observer(AccretionEvent(name, details))


class EventLog(list):
    """Observer that records every event it receives, in order"""

    def __call__(self, event: AccretionEvent) -> None:
        self.append(event)

    def names(self):
        return [event.name for event in self]
