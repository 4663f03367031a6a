from models.lecture import Lecture
from models.deadline import Ack, Deadline, DeadlineInput, DeadlineUpdate, DeadlineView

__all__ = [
    "Lecture",
    "Deadline",
    "DeadlineView",
    "DeadlineInput",
    "DeadlineUpdate",
    "Ack",
]
