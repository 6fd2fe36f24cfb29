"""Identity and session schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StatusLevel(str, Enum):
    """Severity shared by session banners and notifications."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class UserProfile(BaseModel):
    """Authenticated user as reported by the identity provider."""

    user_id: str
    display_name: str
    picture_url: str | None = None
    status_message: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SessionState(BaseModel):
    """Login state used to gate the rest of the application."""

    is_logged_in: bool = False
    profile: UserProfile | None = None
    identity_token: str | None = None
    status_message: str = "Initializing LINE features..."
    status_level: StatusLevel = StatusLevel.INFO
    is_loading: bool = True
    can_login: bool = False
