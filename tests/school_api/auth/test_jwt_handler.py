from datetime import datetime, timedelta, timezone

import jwt
import pytest

from school_api.auth import jwt_handler
from school_api.core import config

ISSUED_AT = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


def test_issued_token_round_trips_subject_and_email() -> None:
    token = jwt_handler.create_access_token(subject_id=7, email='alice@example.com', now=ISSUED_AT)

    claims = jwt_handler.verify_access_token(token, now=ISSUED_AT + timedelta(minutes=5))

    assert claims == jwt_handler.TokenClaims(subject_id=7, email='alice@example.com')


def test_token_expires_one_hour_after_issue() -> None:
    token = jwt_handler.create_access_token(subject_id=1, email='a@example.com', now=ISSUED_AT)

    payload = jwt_handler.decode_access_token(token)

    assert payload['exp'] - payload['iat'] == 3600
    assert payload['sub'] == '1'


def test_token_is_accepted_at_exactly_its_expiry_instant() -> None:
    token = jwt_handler.create_access_token(subject_id=1, email='a@example.com', now=ISSUED_AT)

    claims = jwt_handler.verify_access_token(token, now=ISSUED_AT + timedelta(hours=1))

    assert claims.subject_id == 1


def test_token_is_rejected_after_its_expiry_instant() -> None:
    token = jwt_handler.create_access_token(subject_id=1, email='a@example.com', now=ISSUED_AT)

    with pytest.raises(jwt_handler.ExpiredToken):
        jwt_handler.verify_access_token(token, now=ISSUED_AT + timedelta(hours=1, seconds=1))


def test_tampered_token_is_malformed() -> None:
    token = jwt_handler.create_access_token(subject_id=1, email='a@example.com', now=ISSUED_AT)
    header, payload, signature = token.split('.')
    tampered = '.'.join([header, payload, signature[::-1]])

    with pytest.raises(jwt_handler.MalformedToken):
        jwt_handler.verify_access_token(tampered, now=ISSUED_AT)


def test_token_signed_with_another_secret_is_malformed() -> None:
    token = jwt.encode(
        {'sub': '1', 'email': 'a@example.com', 'exp': ISSUED_AT + timedelta(hours=1)},
        'some-other-secret-that-is-long-enough',
        algorithm=config.JWT_ALGORITHM,
    )

    with pytest.raises(jwt_handler.MalformedToken):
        jwt_handler.verify_access_token(token, now=ISSUED_AT)


@pytest.mark.parametrize('token', ['', 'not-a-token', 'a.b.c'])
def test_garbage_is_malformed(token: str) -> None:
    with pytest.raises(jwt_handler.MalformedToken):
        jwt_handler.verify_access_token(token, now=ISSUED_AT)


def test_token_without_email_claim_is_malformed() -> None:
    token = jwt.encode(
        {'sub': '1', 'exp': ISSUED_AT + timedelta(hours=1)},
        config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
    )

    with pytest.raises(jwt_handler.MalformedToken):
        jwt_handler.verify_access_token(token, now=ISSUED_AT)


def test_token_with_non_numeric_subject_is_malformed() -> None:
    token = jwt.encode(
        {'sub': 'alice', 'email': 'a@example.com', 'exp': ISSUED_AT + timedelta(hours=1)},
        config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
    )

    with pytest.raises(jwt_handler.MalformedToken):
        jwt_handler.verify_access_token(token, now=ISSUED_AT)


def test_expired_token_is_an_invalid_token() -> None:
    assert issubclass(jwt_handler.ExpiredToken, jwt_handler.InvalidToken)
    assert issubclass(jwt_handler.MalformedToken, jwt_handler.InvalidToken)
