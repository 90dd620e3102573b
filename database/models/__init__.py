from .principals import Principal, Hirer, Talent
from .hiring_requests import HiringRequest
from .submissions import Submission
from .notifications import Notification

__all__ = [
    "Principal",
    "Hirer",
    "Talent",
    "HiringRequest",
    "Submission",
    "Notification",
]
