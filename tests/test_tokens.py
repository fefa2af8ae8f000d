"""Unit tests for app.core.tokens: issuance, subject extraction, expiry boundary."""

import unittest
from datetime import timedelta

import jwt

from app.core.errors import TokenExpired, TokenInvalid
from app.core.tokens import TokenConfig, TokenService
from tests.support import TEST_SECRET, FakeClock, make_token_service


class TestIssueTokens(unittest.TestCase):
    """Access and refresh tokens carry sub, iat and exp = iat + lifetime."""

    def setUp(self) -> None:
        self.clock = FakeClock()
        self.tokens = make_token_service(self.clock)

    def test_access_token_claims(self) -> None:
        token = self.tokens.issue_access_token("a@x.com")
        claims = jwt.decode(
            token, TEST_SECRET, algorithms=["HS256"], options={"verify_exp": False, "verify_iat": False}
        )
        self.assertEqual(claims["sub"], "a@x.com")
        issued = int(self.clock.now.timestamp())
        self.assertEqual(claims["iat"], issued)
        self.assertEqual(claims["exp"], issued + 24 * 3600)

    def test_refresh_token_embeds_extra_claims(self) -> None:
        token = self.tokens.issue_refresh_token("a@x.com", {"device": "web"})
        claims = self.tokens.decode(token)
        self.assertEqual(claims["device"], "web")
        self.assertEqual(claims["sub"], "a@x.com")

    def test_extra_claims_cannot_override_subject_or_expiry(self) -> None:
        token = self.tokens.issue_refresh_token("a@x.com", {"sub": "b@x.com", "exp": 0})
        claims = self.tokens.decode(token)
        self.assertEqual(claims["sub"], "a@x.com")
        self.assertGreater(claims["exp"], 0)

    def test_issue_pair_subjects_match(self) -> None:
        pair = self.tokens.issue_pair("a@x.com")
        self.assertEqual(self.tokens.extract_subject(pair.access_token), "a@x.com")
        self.assertEqual(self.tokens.extract_subject(pair.refresh_token), "a@x.com")

    def test_expiration_label(self) -> None:
        self.assertEqual(self.tokens.expiration_label, "24Hrs")
        short = TokenService(TokenConfig(secret=TEST_SECRET, expire_minutes=45))
        self.assertEqual(short.expiration_label, "45Mins")

    def test_empty_secret_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TokenService(TokenConfig(secret=""))


class TestExtractSubject(unittest.TestCase):
    """extract_subject verifies signature and format and raises TokenInvalid otherwise."""

    def setUp(self) -> None:
        self.tokens = make_token_service(FakeClock())

    def test_garbage_token(self) -> None:
        with self.assertRaises(TokenInvalid):
            self.tokens.extract_subject("not-a-jwt")

    def test_empty_token(self) -> None:
        with self.assertRaises(TokenInvalid):
            self.tokens.extract_subject("")

    def test_token_signed_with_other_key(self) -> None:
        other = make_token_service(FakeClock(), secret="another-signing-key-0123456789abcdef012345")
        token = other.issue_access_token("a@x.com")
        with self.assertRaises(TokenInvalid):
            self.tokens.extract_subject(token)

    def test_tampered_payload(self) -> None:
        token = self.tokens.issue_access_token("a@x.com")
        header, _, signature = token.split(".")
        forged = jwt.encode(
            {"sub": "admin@x.com", "iat": 0, "exp": 2**31},
            "wrong-key-0123456789abcdef0123456789ab",
            algorithm="HS256",
        )
        forged_payload = forged.split(".")[1]
        with self.assertRaises(TokenInvalid):
            self.tokens.extract_subject(".".join([header, forged_payload, signature]))

    def test_missing_subject_claim(self) -> None:
        token = jwt.encode({"iat": 0, "exp": 2**31}, TEST_SECRET, algorithm="HS256")
        with self.assertRaises(TokenInvalid):
            self.tokens.extract_subject(token)

    def test_expired_token_still_yields_subject(self) -> None:
        clock = FakeClock()
        tokens = make_token_service(clock)
        token = tokens.issue_access_token("a@x.com")
        clock.advance(days=2)
        self.assertEqual(tokens.extract_subject(token), "a@x.com")

    def test_token_expired_is_a_token_invalid(self) -> None:
        self.assertTrue(issubclass(TokenExpired, TokenInvalid))


class TestExpiryBoundary(unittest.TestCase):
    """A token expiring at T is valid strictly before T; at and after T it is expired."""

    def setUp(self) -> None:
        self.clock = FakeClock()
        self.tokens = make_token_service(self.clock)
        self.token = self.tokens.issue_access_token("a@x.com")
        self.expires_at = self.clock.now + timedelta(hours=24)

    def test_valid_just_before_expiry(self) -> None:
        self.clock.now = self.expires_at - timedelta(seconds=1)
        self.assertFalse(self.tokens.is_expired(self.token))
        self.assertTrue(self.tokens.is_valid(self.token, "a@x.com"))

    def test_expired_at_expiry(self) -> None:
        self.clock.now = self.expires_at
        self.assertTrue(self.tokens.is_expired(self.token))
        self.assertFalse(self.tokens.is_valid(self.token, "a@x.com"))

    def test_expired_after_expiry(self) -> None:
        self.clock.now = self.expires_at + timedelta(minutes=5)
        self.assertTrue(self.tokens.is_expired(self.token))
        self.assertFalse(self.tokens.is_valid(self.token, "a@x.com"))


class TestIsValid(unittest.TestCase):
    """is_valid never raises and requires a matching subject."""

    def setUp(self) -> None:
        self.tokens = make_token_service(FakeClock())

    def test_subject_mismatch(self) -> None:
        token = self.tokens.issue_access_token("a@x.com")
        self.assertFalse(self.tokens.is_valid(token, "b@x.com"))

    def test_garbage_is_not_valid(self) -> None:
        self.assertFalse(self.tokens.is_valid("garbage", "a@x.com"))

    def test_is_expired_raises_for_garbage(self) -> None:
        with self.assertRaises(TokenInvalid):
            self.tokens.is_expired("garbage")
