"""PasswordResetService unit tests: link delivery, reset, staging fallback, sign-in completion."""

from urllib.parse import parse_qs, urlparse

import pytest

from app.application.services.password_reset_service import (
    EMAIL_MISMATCH_ERROR,
    NO_PENDING_ERROR,
    STAGED_MESSAGE,
    STAGING_FAILED_ERROR,
    UPDATED_MESSAGE,
    PasswordResetService,
)
from app.application.services.pending_reset_store import PendingResetStore
from app.core.limiter import ResetRateLimiter
from app.domain.exceptions import (
    IdentityProviderUnavailableException,
    PasswordUpdateRejectedException,
)
from app.infrastructure.security.reset_token import ResetTokenCodec
from tests.support import (
    BrokenKeyValueStore,
    FakeClock,
    FakeEmailSender,
    FakeIdentityProvider,
    FakeMonotonic,
)


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture
def monotonic() -> FakeMonotonic:
    return FakeMonotonic()


@pytest.fixture
def service(
    codec: ResetTokenCodec,
    staging: PendingResetStore,
    identity: FakeIdentityProvider,
    sender: FakeEmailSender,
    monotonic: FakeMonotonic,
) -> PasswordResetService:
    return PasswordResetService(
        codec=codec,
        staging=staging,
        identity_provider=identity,
        email_sender=sender,
        rate_limiter=ResetRateLimiter(cooldown_seconds=60, clock=monotonic),
        reset_link_base="https://ai.example.com/",
    )


class TestRequestReset:
    def test_sends_link_with_valid_token(
        self, service: PasswordResetService, sender: FakeEmailSender, codec: ResetTokenCodec
    ) -> None:
        result = service.request_reset("a@x.com")
        assert result.success is True
        assert len(sender.sent) == 1
        to, link = sender.sent[0]
        assert to == "a@x.com"
        parsed = urlparse(link)
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == (
            "https://ai.example.com/auth/reset-password"
        )
        token = parse_qs(parsed.query)["token"][0]
        assert codec.validate(token).email == "a@x.com"

    def test_link_encodes_token(self, service: PasswordResetService) -> None:
        link = service.build_reset_link("abc+/=.def")
        assert link == "https://ai.example.com/auth/reset-password?token=abc%2B%2F%3D.def"

    def test_delivery_failure(self, codec, staging, identity) -> None:
        svc = PasswordResetService(codec, staging, identity, FakeEmailSender(fail=True))
        result = svc.request_reset("a@x.com")
        assert result.success is False
        assert result.error == "Email service down"

    def test_empty_email(self, service: PasswordResetService, sender: FakeEmailSender) -> None:
        result = service.request_reset("")
        assert result.success is False
        assert result.error == "Email is required"
        assert sender.sent == []


class TestResetPassword:
    def test_success_updates_password(
        self,
        service: PasswordResetService,
        codec: ResetTokenCodec,
        identity: FakeIdentityProvider,
        staging: PendingResetStore,
    ) -> None:
        token = codec.issue("a@x.com")
        result = service.reset_password("a@x.com", "n3w-pass", token)
        assert result.success is True
        assert result.message == UPDATED_MESSAGE
        assert result.staged is False
        assert identity.calls == [("a@x.com", "n3w-pass", token)]
        assert staging.has_pending("a@x.com") is False

    def test_invalid_token(self, service: PasswordResetService, identity: FakeIdentityProvider) -> None:
        result = service.reset_password("a@x.com", "pw", "garbage")
        assert result.success is False
        assert result.error == "Invalid token format"
        assert identity.calls == []

    def test_expired_token(
        self, service: PasswordResetService, codec: ResetTokenCodec, clock: FakeClock
    ) -> None:
        token = codec.issue("a@x.com", ttl_hours=1)
        clock.advance(hours=2)
        result = service.reset_password("a@x.com", "pw", token)
        assert result.error == "Token has expired"

    def test_email_mismatch(
        self, service: PasswordResetService, codec: ResetTokenCodec, identity: FakeIdentityProvider
    ) -> None:
        result = service.reset_password("b@y.com", "pw", codec.issue("a@x.com"))
        assert result.success is False
        assert result.error == EMAIL_MISMATCH_ERROR
        assert identity.calls == []

    def test_rate_limited_second_attempt(
        self,
        service: PasswordResetService,
        codec: ResetTokenCodec,
        monotonic: FakeMonotonic,
    ) -> None:
        token = codec.issue("a@x.com")
        assert service.reset_password("a@x.com", "pw", token).success is True
        monotonic.advance(15.5)
        result = service.reset_password("a@x.com", "pw", token)
        assert result.success is False
        assert result.error == (
            "For security purposes, you can only request this after 45 seconds."
        )
        monotonic.advance(45)
        assert service.reset_password("a@x.com", "pw", token).success is True

    def test_bypass_rate_limit(
        self, service: PasswordResetService, codec: ResetTokenCodec, identity: FakeIdentityProvider
    ) -> None:
        token = codec.issue("a@x.com")
        service.reset_password("a@x.com", "pw", token)
        result = service.reset_password("a@x.com", "pw2", token, bypass_rate_limit=True)
        assert result.success is True
        assert len(identity.calls) == 2

    def test_strips_email_for_provider(
        self, service: PasswordResetService, codec: ResetTokenCodec, identity: FakeIdentityProvider
    ) -> None:
        token = codec.issue(" a@x.com ")
        service.reset_password(" a@x.com ", "pw", token)
        assert identity.calls[0][0] == "a@x.com"

    def test_provider_rejection_is_final(
        self,
        service: PasswordResetService,
        codec: ResetTokenCodec,
        identity: FakeIdentityProvider,
        staging: PendingResetStore,
    ) -> None:
        identity.error = PasswordUpdateRejectedException("User not found", status_code=404)
        result = service.reset_password("a@x.com", "pw", codec.issue("a@x.com"))
        assert result.success is False
        assert result.error == "User not found"
        assert staging.has_pending("a@x.com") is False

    def test_provider_unavailable_stages_password(
        self,
        service: PasswordResetService,
        codec: ResetTokenCodec,
        identity: FakeIdentityProvider,
        staging: PendingResetStore,
    ) -> None:
        identity.error = IdentityProviderUnavailableException()
        result = service.reset_password("a@x.com", "pw", codec.issue("a@x.com"))
        assert result.success is True
        assert result.staged is True
        assert result.message == STAGED_MESSAGE
        assert staging.retrieve("a@x.com") == "pw"

    def test_provider_unavailable_and_staging_broken(
        self, codec: ResetTokenCodec, clock: FakeClock, sender: FakeEmailSender
    ) -> None:
        identity = FakeIdentityProvider(error=IdentityProviderUnavailableException())
        svc = PasswordResetService(
            codec,
            PendingResetStore(BrokenKeyValueStore(), clock=clock),
            identity,
            sender,
        )
        result = svc.reset_password("a@x.com", "pw", codec.issue("a@x.com"))
        assert result.success is False
        assert result.error == STAGING_FAILED_ERROR


class TestCompletePendingReset:
    def test_applies_staged_password(
        self,
        service: PasswordResetService,
        codec: ResetTokenCodec,
        identity: FakeIdentityProvider,
        staging: PendingResetStore,
    ) -> None:
        token = codec.issue("a@x.com")
        staging.store("a@x.com", "staged-pw")
        result = service.complete_pending_reset("a@x.com", token)
        assert result.success is True
        assert identity.calls == [("a@x.com", "staged-pw", token)]
        assert staging.has_pending("a@x.com") is False

    def test_nothing_staged(self, service: PasswordResetService, codec: ResetTokenCodec) -> None:
        result = service.complete_pending_reset("a@x.com", codec.issue("a@x.com"))
        assert result.success is False
        assert result.error == NO_PENDING_ERROR

    def test_staged_record_expired(
        self,
        service: PasswordResetService,
        codec: ResetTokenCodec,
        staging: PendingResetStore,
        clock: FakeClock,
    ) -> None:
        staging.store("a@x.com", "staged-pw")
        clock.advance(minutes=10)
        result = service.complete_pending_reset("a@x.com", codec.issue("a@x.com"))
        assert result.error == NO_PENDING_ERROR

    def test_token_for_other_email_leaves_record(
        self,
        service: PasswordResetService,
        codec: ResetTokenCodec,
        staging: PendingResetStore,
    ) -> None:
        staging.store("a@x.com", "staged-pw")
        result = service.complete_pending_reset("a@x.com", codec.issue("b@y.com"))
        assert result.error == EMAIL_MISMATCH_ERROR
        assert staging.has_pending("a@x.com") is True

    def test_provider_failure_consumes_record(
        self,
        service: PasswordResetService,
        codec: ResetTokenCodec,
        identity: FakeIdentityProvider,
        staging: PendingResetStore,
    ) -> None:
        identity.error = IdentityProviderUnavailableException("down")
        staging.store("a@x.com", "staged-pw")
        result = service.complete_pending_reset("a@x.com", codec.issue("a@x.com"))
        assert result.success is False
        assert result.error == "down"
        assert staging.has_pending("a@x.com") is False


def test_validate_token_delegates(service: PasswordResetService, codec: ResetTokenCodec) -> None:
    assert service.validate_token(codec.issue("a@x.com")).email == "a@x.com"
