"""Settings validation: database URL, signing secret, algorithm and expiry bounds."""

import base64
import unittest

from pydantic import ValidationError

from invoice_registry.core.config import Settings
from invoice_registry.core.tokens import TokenCodec


def _settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestJwtSettings(unittest.TestCase):
    def test_defaults_build_a_codec(self) -> None:
        settings = _settings()
        self.assertGreaterEqual(len(settings.jwt_signing_key), 32)
        codec = TokenCodec.from_settings(settings)
        self.assertEqual(codec.ttl_ms, settings.JWT_EXPIRATION_MILLISECONDS)

    def test_signing_key_is_base64_decoded(self) -> None:
        raw = b"k" * 40
        settings = _settings(JWT_SECRET=base64.b64encode(raw).decode())
        self.assertEqual(settings.jwt_signing_key, raw)

    def test_rejects_bad_secrets(self) -> None:
        short = base64.b64encode(b"too-short").decode()
        for secret in ("", "   ", "not base64!!", short):
            with self.subTest(secret=secret):
                with self.assertRaises(ValidationError):
                    _settings(JWT_SECRET=secret)

    def test_algorithm_must_be_hmac(self) -> None:
        self.assertEqual(_settings(JWT_ALGORITHM="hs512").JWT_ALGORITHM, "HS512")
        for algorithm in ("RS256", "none", ""):
            with self.subTest(algorithm=algorithm):
                with self.assertRaises(ValidationError):
                    _settings(JWT_ALGORITHM=algorithm)

    def test_expiration_bounds(self) -> None:
        self.assertEqual(_settings(JWT_EXPIRATION_MILLISECONDS=1_000).JWT_EXPIRATION_MILLISECONDS, 1_000)
        for ttl in (0, 999, 604_800_001):
            with self.subTest(ttl=ttl):
                with self.assertRaises(ValidationError):
                    _settings(JWT_EXPIRATION_MILLISECONDS=ttl)


class TestOtherSettings(unittest.TestCase):
    def test_database_url_scheme(self) -> None:
        self.assertEqual(_settings(DATABASE_URL=" sqlite:// ").DATABASE_URL, "sqlite://")
        self.assertEqual(
            _settings(DATABASE_URL="\tpostgresql+psycopg2://u@h/db\n").DATABASE_URL,
            "postgresql+psycopg2://u@h/db",
        )
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://localhost/db")

    def test_default_role_name_required(self) -> None:
        self.assertEqual(_settings(DEFAULT_ROLE_NAME=" ROLE_MEMBER ").DEFAULT_ROLE_NAME, "ROLE_MEMBER")
        with self.assertRaises(ValidationError):
            _settings(DEFAULT_ROLE_NAME="  ")

    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS=3)


if __name__ == "__main__":
    unittest.main()
