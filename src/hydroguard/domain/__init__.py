"""Pure calculation core: hydrology, recovery priority, proposal scoring."""

from .hydrology import compute_runoff, advance_time_step, river_status
from .recovery import score_priority, assess_task
from .proposals import validate_proposal

__all__ = [
    "compute_runoff",
    "advance_time_step",
    "river_status",
    "score_priority",
    "assess_task",
    "validate_proposal",
]
