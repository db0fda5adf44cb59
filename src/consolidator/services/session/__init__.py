"""Planning session state."""

from .service import PlanningSession, PlanSnapshot

__all__ = ["PlanningSession", "PlanSnapshot"]
