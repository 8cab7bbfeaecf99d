import asyncio
from datetime import datetime, timedelta, timezone
from unittest import mock

import jwt
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import OperationalError
from django.test import SimpleTestCase, TestCase

from apps.core.exceptions import Unauthenticated
from config.auth import get_auth_config, DEVELOPMENT_JWT_SECRET, DEVELOPMENT_SECRET_KEY
from .models import User
from .jwt_auth import decode_token, extract_credential, get_email_claim
from .services import resolve_principal


def make_token(claims=None, secret=None, expires_in=timedelta(hours=1)):
    payload = {'email': 'player@example.com'} if claims is None else dict(claims)
    if expires_in is not None:
        payload['exp'] = datetime.now(timezone.utc) + expires_in
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm='HS256')


class AuthConfigTest(SimpleTestCase):
    def test_development_defaults(self):
        config = get_auth_config({})
        self.assertEqual(config['DEPLOYMENT_MODE'], 'development')
        self.assertEqual(config['JWT_SECRET'], DEVELOPMENT_JWT_SECRET)
        self.assertFalse(config['AUTH_BYPASS'])
        self.assertEqual(config['SECRET_KEY'], DEVELOPMENT_SECRET_KEY)
        self.assertNotEqual(config['SECRET_KEY'], config['JWT_SECRET'])

    def test_bypass_allowed_in_development(self):
        config = get_auth_config({'AUTH_BYPASS': 'true', 'AUTH_BYPASS_OPERATOR_EMAIL': 'Ops@Example.com'})
        self.assertTrue(config['AUTH_BYPASS'])
        self.assertEqual(config['AUTH_BYPASS_OPERATOR_EMAIL'], 'ops@example.com')

    def test_bypass_rejected_in_production(self):
        with self.assertRaises(ImproperlyConfigured):
            get_auth_config({'DEPLOYMENT_MODE': 'production', 'JWT_SECRET': 's3cret', 'AUTH_BYPASS': 'true'})

    def test_production_requires_secret(self):
        with self.assertRaises(ImproperlyConfigured):
            get_auth_config({'DEPLOYMENT_MODE': 'production'})

    def test_production_requires_django_secret_key(self):
        with self.assertRaises(ImproperlyConfigured):
            get_auth_config({'DEPLOYMENT_MODE': 'production', 'JWT_SECRET': 's3cret'})

    def test_production_rejects_shared_secret(self):
        with self.assertRaises(ImproperlyConfigured):
            get_auth_config({'DEPLOYMENT_MODE': 'production', 'JWT_SECRET': 's3cret', 'DJANGO_SECRET_KEY': 's3cret'})

    def test_production_with_secrets(self):
        config = get_auth_config({
            'DEPLOYMENT_MODE': 'Production',
            'JWT_SECRET': 's3cret',
            'DJANGO_SECRET_KEY': 'another-s3cret',
        })
        self.assertEqual(config['DEPLOYMENT_MODE'], 'production')
        self.assertEqual(config['JWT_SECRET'], 's3cret')
        self.assertEqual(config['SECRET_KEY'], 'another-s3cret')

    def test_unknown_mode(self):
        with self.assertRaises(ImproperlyConfigured):
            get_auth_config({'DEPLOYMENT_MODE': 'staging'})


class JWTVerificationTest(SimpleTestCase):
    def test_valid_token(self):
        payload = decode_token(make_token())
        self.assertEqual(payload['email'], 'player@example.com')

    def test_expired_token(self):
        self.assertIsNone(decode_token(make_token(expires_in=timedelta(seconds=-30))))

    def test_wrong_secret(self):
        self.assertIsNone(decode_token(make_token(secret='not-the-server-secret-but-long-enough')))

    def test_malformed_token(self):
        self.assertIsNone(decode_token('definitely.not.a-jwt'))
        self.assertIsNone(decode_token('garbage'))

    def test_email_claim(self):
        self.assertEqual(get_email_claim({'email': 'a@b.c'}), 'a@b.c')
        self.assertIsNone(get_email_claim({'sub': '123'}))
        self.assertIsNone(get_email_claim({'email': '   '}))
        self.assertIsNone(get_email_claim({'email': 42}))

    def test_extract_credential(self):
        self.assertEqual(extract_credential('Bearer abc.def'), 'abc.def')
        self.assertEqual(extract_credential('bearer abc.def'), 'abc.def')
        self.assertEqual(extract_credential('abc.def'), 'abc.def')
        self.assertEqual(extract_credential(''), '')
        self.assertEqual(extract_credential(None), '')


class ResolvePrincipalTest(TestCase):
    async def test_missing_credential(self):
        with self.assertRaises(Unauthenticated):
            await resolve_principal(None)
        with self.assertRaises(Unauthenticated):
            await resolve_principal('')

    async def test_invalid_credential_creates_nothing(self):
        with self.assertRaises(Unauthenticated):
            await resolve_principal(make_token(secret='forged-secret-nobody-on-the-server-knows'))
        self.assertEqual(await User.objects.acount(), 0)

    async def test_missing_email_claim(self):
        with self.assertRaises(Unauthenticated):
            await resolve_principal(make_token({'sub': 'someone'}))

    async def test_new_email_provisions_user_with_zero_balance(self):
        principal = await resolve_principal(make_token({'email': 'new@example.com'}))

        user = await User.objects.aget(email='new@example.com')
        self.assertEqual(principal.user_id, user.id)
        self.assertEqual(user.points, 0)
        self.assertFalse(principal.is_bypass)
        self.assertEqual(principal.claims['email'], 'new@example.com')

    async def test_same_credential_resolves_same_user(self):
        token = make_token({'email': 'again@example.com'})
        first = await resolve_principal(token)
        second = await resolve_principal(token)

        self.assertEqual(first.user_id, second.user_id)
        self.assertEqual(await User.objects.filter(email='again@example.com').acount(), 1)

    async def test_email_is_case_insensitive(self):
        first = await resolve_principal(make_token({'email': 'Mixed@Example.com'}))
        second = await resolve_principal(make_token({'email': 'mixed@example.com'}))
        self.assertEqual(first.user_id, second.user_id)

    async def test_concurrent_first_logins_create_one_user(self):
        """
        Interleaves first logins at their awaits. The ORM calls share one
        worker thread, so uniqueness rests on the email constraint, not on
        true parallelism here.
        """
        token = make_token({'email': 'race@example.com'})
        principals = await asyncio.gather(*[resolve_principal(token) for _ in range(5)])

        self.assertEqual(len({p.user_id for p in principals}), 1)
        self.assertEqual(await User.objects.filter(email='race@example.com').acount(), 1)

    async def test_bypass_mode_ignores_credential(self):
        with self.settings(AUTH_BYPASS=True, AUTH_BYPASS_OPERATOR_EMAIL='operator@localhost'):
            principal = await resolve_principal(None)

        self.assertTrue(principal.is_bypass)
        self.assertEqual(principal.email, 'operator@localhost')
        self.assertEqual(principal.claims, {})
        self.assertTrue(await User.objects.filter(id=principal.user_id).aexists())


class MeAPITest(TestCase):
    async def test_requires_credential(self):
        response = await self.async_client.get('/api/identity/me')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['code'], 'UNAUTHENTICATED')

    async def test_rejects_invalid_credential(self):
        response = await self.async_client.get(
            '/api/identity/me',
            headers={'Authorization': f"Bearer {make_token(secret='forged-secret-nobody-on-the-server-knows')}"},
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['code'], 'UNAUTHENTICATED')

    async def test_returns_current_user(self):
        response = await self.async_client.get(
            '/api/identity/me',
            headers={'Authorization': f"Bearer {make_token({'email': 'me@example.com'})}"},
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['email'], 'me@example.com')
        self.assertEqual(data['points'], 0)

    async def test_accepts_bare_token(self):
        response = await self.async_client.get(
            '/api/identity/me',
            headers={'Authorization': make_token({'email': 'bare@example.com'})},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['email'], 'bare@example.com')

    async def test_store_failure_is_retryable(self):
        with mock.patch('apps.identity.api.get_user_dto', side_effect=OperationalError("down")):
            response = await self.async_client.get(
                '/api/identity/me',
                headers={'Authorization': f"Bearer {make_token({'email': 'me@example.com'})}"},
            )
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['code'], 'TRANSIENT_STORE_FAILURE')
