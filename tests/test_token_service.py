"""Unit tests for product_api.services.tokens: issuance, rotation and access-token verification."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import jwt

from product_api.core.config import settings
from product_api.core.errors import InvalidToken, Unauthenticated
from product_api.core.security import REFRESH_TOKEN_TYPE, create_refresh_token
from product_api.models import User
from product_api.schemas.auth import Principal
from product_api.services.tokens import (
    authenticate,
    issue_access_token,
    issue_refresh_token,
    issue_token_pair,
    rotate,
)
from tests.utils import add_user, make_session_factory


class TestIssueTokens(unittest.TestCase):
    """Issued refresh tokens replace the stored one; access tokens need no store."""

    def setUp(self) -> None:
        self.session = make_session_factory()()
        self.user = add_user(self.session, "alice", "a@x.com", "secret1")

    def tearDown(self) -> None:
        self.session.close()

    def test_refresh_token_is_persisted(self) -> None:
        token = issue_refresh_token(self.session, self.user)
        self.session.commit()
        stored = self.session.query(User).filter(User.username == "alice").one()
        self.assertEqual(stored.refresh_token, token)

    def test_new_refresh_token_replaces_previous(self) -> None:
        first = issue_refresh_token(self.session, self.user)
        second = issue_refresh_token(self.session, self.user)
        self.session.commit()
        self.assertNotEqual(first, second)
        self.assertEqual(self.user.refresh_token, second)

    def test_token_pair_shape(self) -> None:
        pair = issue_token_pair(self.session, self.user)
        self.session.commit()
        self.assertEqual(pair.token_type, "Bearer")
        self.assertEqual(pair.expires_in, 15 * 60)
        self.assertEqual(self.user.refresh_token, pair.refresh_token)
        principal = authenticate(pair.access_token)
        self.assertEqual(principal.username, "alice")
        self.assertEqual(principal.roles, frozenset({"USER"}))


class TestRotate(unittest.TestCase):
    """rotate is single-use: the presented token stops matching once exchanged."""

    def setUp(self) -> None:
        self.session = make_session_factory()()
        self.user = add_user(self.session, "alice", "a@x.com", "secret1")
        self.pair = issue_token_pair(self.session, self.user)
        self.session.commit()

    def tearDown(self) -> None:
        self.session.close()

    def test_rotation_invalidates_old_token(self) -> None:
        rotated = rotate(self.session, self.pair.refresh_token)
        self.session.commit()
        self.assertNotEqual(rotated.refresh_token, self.pair.refresh_token)
        stored = self.session.query(User).filter(User.username == "alice").one()
        self.assertEqual(stored.refresh_token, rotated.refresh_token)
        with self.assertRaises(InvalidToken):
            rotate(self.session, self.pair.refresh_token)

    def test_rotated_token_can_rotate_again(self) -> None:
        rotated = rotate(self.session, self.pair.refresh_token)
        self.session.commit()
        again = rotate(self.session, rotated.refresh_token)
        self.session.commit()
        self.assertNotEqual(again.refresh_token, rotated.refresh_token)

    def test_unknown_token_rejected(self) -> None:
        with self.assertRaises(InvalidToken):
            rotate(self.session, "not-a-token")

    def test_validly_signed_but_unstored_token_rejected(self) -> None:
        with self.assertRaises(InvalidToken):
            rotate(self.session, create_refresh_token(sub="alice"))

    def test_expired_stored_token_rejected(self) -> None:
        issued = datetime.now(UTC) - timedelta(days=2)
        expired = jwt.encode(
            {
                "sub": "alice",
                "type": REFRESH_TOKEN_TYPE,
                "jti": "expired",
                "iat": issued,
                "exp": issued + timedelta(days=1),
            },
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        self.user.refresh_token = expired
        self.session.commit()

        with self.assertRaises(InvalidToken):
            rotate(self.session, expired)
        self.session.expire_all()
        stored = self.session.query(User).filter(User.username == "alice").one()
        self.assertEqual(stored.refresh_token, expired)

    def test_invalid_token_maps_to_not_found(self) -> None:
        self.assertEqual(InvalidToken("x").status_code, 404)


class TestRotateCompareAndSwap(unittest.TestCase):
    """A concurrent rotation that already replaced the stored token makes this one fail."""

    def test_lost_race_raises_invalid_token(self) -> None:
        token = create_refresh_token(sub="alice")
        user = MagicMock()
        user.id = 1
        user.username = "alice"
        user.role_names = {"USER"}
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = user
        session.query.return_value.filter.return_value.update.return_value = 0
        with self.assertRaises(InvalidToken):
            rotate(session, token)
        session.commit.assert_not_called()

    def test_subject_mismatch_rejected(self) -> None:
        token = create_refresh_token(sub="mallory")
        user = MagicMock()
        user.id = 1
        user.username = "alice"
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = user
        with self.assertRaises(InvalidToken):
            rotate(session, token)
        session.query.return_value.filter.return_value.update.assert_not_called()


class TestAuthenticate(unittest.TestCase):
    """authenticate verifies access tokens statelessly."""

    def test_valid_access_token(self) -> None:
        token = issue_access_token(Principal(username="bob", roles=frozenset({"USER", "ADMIN"})))
        principal = authenticate(token)
        self.assertEqual(principal.username, "bob")
        self.assertEqual(principal.roles, frozenset({"USER", "ADMIN"}))

    def test_refresh_token_is_not_an_access_token(self) -> None:
        with self.assertRaises(Unauthenticated):
            authenticate(create_refresh_token(sub="bob"))

    def test_garbage_rejected(self) -> None:
        with self.assertRaises(Unauthenticated) as ctx:
            authenticate("abc.def.ghi")
        self.assertEqual(ctx.exception.status_code, 401)


if __name__ == "__main__":
    unittest.main()
