"""Tests for login orchestration (resolve profile, then provision)."""

import unittest
from unittest.mock import MagicMock

from adapter.fake.email_directory import FakeEmailDirectory
from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import AuthenticationError, PersistenceError
from domain.model.provider import AccessToken
from services.login_service import complete_login
from services.profile_resolver import ProfileResolver


class TestCompleteLogin(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.resolver = ProfileResolver(FakeEmailDirectory())

    def test_github_end_to_end(self):
        attrs = {
            'id': 12345,
            'login': 'octocat',
            'name': 'Mona Lisa',
            'email': None,
            'avatar_url': 'https://avatars.example/octo.png',
        }
        token = AccessToken('t', frozenset({'read:user'}))

        user = complete_login(self.repo, self.resolver, 'github', attrs, token)

        self.assertIsNotNone(user.id)
        self.assertEqual(user.provider, 'GITHUB')
        self.assertEqual(user.external_id, '12345')
        self.assertEqual(user.username, 'octocat')
        self.assertEqual(user.display_name, 'Mona Lisa')
        self.assertIsNone(user.email)
        self.assertEqual(user.avatar_url, 'https://avatars.example/octo.png')
        self.assertIsNotNone(user.last_login_at)

    def test_missing_external_id_is_rejected_without_persisting(self):
        with self.assertRaises(AuthenticationError):
            complete_login(self.repo, self.resolver, 'keycloak', {'name': 'No Sub'})

        self.assertEqual(self.repo.save_calls, 0)

    def test_resolution_failure_becomes_authentication_error(self):
        resolver = MagicMock()
        resolver.resolve.side_effect = KeyError('boom')

        with self.assertRaises(AuthenticationError) as ctx:
            complete_login(self.repo, resolver, 'github', {'id': 1})

        self.assertIsInstance(ctx.exception.__cause__, KeyError)
        self.assertEqual(self.repo.save_calls, 0)

    def test_persistence_failure_propagates(self):
        repo = MagicMock()
        repo.find_by_provider_and_external_id.side_effect = PersistenceError("down")

        with self.assertRaises(PersistenceError):
            complete_login(repo, self.resolver, 'azure', {'sub': 's'})


if __name__ == '__main__':
    unittest.main()
