"""Session gate tests with a scripted identity provider."""

from miniapp_order.schemas.session import StatusLevel, UserProfile
from miniapp_order.services.identity import IdentityError
from miniapp_order.services.session_gate import (
    AUTO_REDIRECT_MESSAGE,
    INIT_FAILED_MESSAGE,
    LOGIN_FAILED_MESSAGE,
    LOGIN_REDIRECT_MESSAGE,
    LOGIN_REQUIRED_MESSAGE,
    SDK_MISSING_MESSAGE,
    SessionGate,
)


class FakeIdentityProvider:
    def __init__(
        self,
        *,
        logged_in: bool = True,
        embedded: bool = False,
        fail_init: bool = False,
        fail_token: bool = False,
        fail_login: bool = False,
    ) -> None:
        self.logged_in = logged_in
        self.embedded = embedded
        self.fail_init = fail_init
        self.fail_token = fail_token
        self.fail_login = fail_login
        self.init_calls: list[str] = []
        self.login_calls = 0

    def initialize(self, app_id: str) -> None:
        self.init_calls.append(app_id)
        if self.fail_init:
            raise IdentityError("init failed")

    def is_logged_in(self) -> bool:
        return self.logged_in

    def get_profile(self) -> UserProfile:
        return UserProfile(user_id="U1", display_name="Amy")

    def get_identity_token(self) -> str:
        if self.fail_token:
            raise IdentityError("token unavailable")
        return "id-token"

    def login(self) -> None:
        self.login_calls += 1
        if self.fail_login:
            raise IdentityError("login failed")

    def is_embedded_client(self) -> bool:
        return self.embedded


def test_logged_in_session_gets_profile_and_token() -> None:
    gate = SessionGate(FakeIdentityProvider(), "app-1")

    state = gate.initialize()

    assert state.is_logged_in
    assert state.profile is not None and state.profile.display_name == "Amy"
    assert state.identity_token == "id-token"
    assert state.status_level is StatusLevel.SUCCESS
    assert "Amy" in state.status_message
    assert not state.is_loading


def test_initialize_runs_once() -> None:
    provider = FakeIdentityProvider()
    gate = SessionGate(provider, "app-1")

    gate.initialize()
    gate.initialize()

    assert provider.init_calls == ["app-1"]


def test_token_failure_fails_whole_initialization() -> None:
    gate = SessionGate(FakeIdentityProvider(fail_token=True), "app-1")

    state = gate.initialize()

    assert not state.is_logged_in
    assert state.profile is None
    assert state.status_level is StatusLevel.ERROR
    assert state.status_message == INIT_FAILED_MESSAGE


def test_embedded_client_redirects_automatically() -> None:
    provider = FakeIdentityProvider(logged_in=False, embedded=True)
    gate = SessionGate(provider, "app-1")

    state = gate.initialize()

    assert provider.login_calls == 1
    assert state.status_message == AUTO_REDIRECT_MESSAGE
    assert state.status_level is StatusLevel.INFO
    assert not state.can_login


def test_standalone_browser_offers_manual_login() -> None:
    provider = FakeIdentityProvider(logged_in=False)
    gate = SessionGate(provider, "app-1")

    state = gate.initialize()

    assert provider.login_calls == 0
    assert state.status_message == LOGIN_REQUIRED_MESSAGE
    assert state.status_level is StatusLevel.WARNING
    assert state.can_login


def test_missing_sdk_is_an_error() -> None:
    state = SessionGate(None, "app-1").initialize()

    assert state.status_message == SDK_MISSING_MESSAGE
    assert state.status_level is StatusLevel.ERROR
    assert not state.is_logged_in
    assert not state.can_login


def test_init_failure_is_an_error() -> None:
    state = SessionGate(FakeIdentityProvider(fail_init=True), "app-1").initialize()

    assert state.status_level is StatusLevel.ERROR
    assert not state.is_loading


def test_login_redirects_and_stays_loading() -> None:
    provider = FakeIdentityProvider(logged_in=False)
    gate = SessionGate(provider, "app-1")
    gate.initialize()

    state = gate.login()

    assert provider.login_calls == 1
    assert state.is_loading
    assert state.status_message == LOGIN_REDIRECT_MESSAGE


def test_login_is_ignored_while_loading() -> None:
    provider = FakeIdentityProvider(logged_in=False)
    gate = SessionGate(provider, "app-1")

    gate.login()
    gate.initialize()
    gate.login()
    gate.login()

    assert provider.login_calls == 1


def test_login_without_sdk_is_noop() -> None:
    gate = SessionGate(None, "app-1")
    gate.initialize()

    state = gate.login()

    assert state.status_message == SDK_MISSING_MESSAGE


def test_login_failure_reports_error_and_clears_loading() -> None:
    provider = FakeIdentityProvider(logged_in=False, fail_login=True)
    gate = SessionGate(provider, "app-1")
    gate.initialize()

    state = gate.login()

    assert state.status_message == LOGIN_FAILED_MESSAGE
    assert state.status_level is StatusLevel.ERROR
    assert not state.is_loading
