"""
API Services Layer.

Database operations behind the API endpoints. Each function takes the
request's AsyncSession and raises core.exceptions errors on failure.
"""

from api.services.principals import (
    register,
    verify_otp,
    resend_otp,
    login,
    forgot_password,
    reset_password,
    get_profile,
    update_profile,
    list_talents,
)

from api.services.hiring import (
    send_request,
    list_for_talent,
    list_for_hirer,
    update_status,
)

from api.services.submissions import (
    create_submission,
    update_submission,
    delete_submission,
    list_submissions,
    list_owner_submissions,
)

from api.services.notifications import (
    send_to_all,
    send_to_user,
    global_feed,
    user_feed,
)

from api.services.media import replace_media

__all__ = [
    # Principals
    "register",
    "verify_otp",
    "resend_otp",
    "login",
    "forgot_password",
    "reset_password",
    "get_profile",
    "update_profile",
    "list_talents",
    # Hiring
    "send_request",
    "list_for_talent",
    "list_for_hirer",
    "update_status",
    # Submissions
    "create_submission",
    "update_submission",
    "delete_submission",
    "list_submissions",
    "list_owner_submissions",
    # Notifications
    "send_to_all",
    "send_to_user",
    "global_feed",
    "user_feed",
    # Media
    "replace_media",
]
