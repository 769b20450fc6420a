"""Tests for provider profile mapping.

Tests cover the field-resolution priority of each mapper:
1. GitHub: display name prefers name over login, username prefers login over id
2. Azure: external id prefers oid over sub, username/display name fallback chains
3. Generic fallback for unrecognized registrations
"""

import unittest

from services.profile_mapper import map_from_azure, map_from_github, map_generic


class TestMapFromGithub(unittest.TestCase):

    def test_full_attribute_set(self):
        attrs = {
            'id': 12345,
            'login': 'octocat',
            'name': 'Mona Lisa',
            'email': None,
            'avatar_url': 'https://avatars.githubusercontent.com/u/1?v=4',
        }

        profile = map_from_github(attrs)

        self.assertEqual(profile.provider, 'GITHUB')
        self.assertEqual(profile.external_id, '12345')
        self.assertEqual(profile.username, 'octocat')
        self.assertEqual(profile.display_name, 'Mona Lisa')
        self.assertIsNone(profile.email)
        self.assertIn('avatars.githubusercontent.com', profile.avatar_url)

    def test_display_name_falls_back_to_login(self):
        for name in (None, '', '   '):
            with self.subTest(name=name):
                profile = map_from_github({'id': 777, 'login': 'no-name', 'name': name})
                self.assertEqual(profile.display_name, 'no-name')
                self.assertEqual(profile.username, 'no-name')

    def test_username_falls_back_to_id(self):
        profile = map_from_github({'id': 42, 'login': ' '})
        self.assertEqual(profile.username, '42')
        self.assertIsNone(profile.display_name)

    def test_public_email_is_kept(self):
        profile = map_from_github({'id': 1, 'login': 'a', 'email': 'a@example.com'})
        self.assertEqual(profile.email, 'a@example.com')

    def test_empty_attributes_do_not_raise(self):
        profile = map_from_github({})
        self.assertIsNone(profile.external_id)
        self.assertIsNone(profile.username)
        self.assertIsNone(profile.display_name)


class TestMapFromAzure(unittest.TestCase):

    def test_name_resolution_priority(self):
        attrs = {
            'sub': 'abc-sub',
            'preferred_username': 'user@contoso.com',
            'mailNickname': 'usernick',
            'name': 'Azure User',
        }

        profile = map_from_azure(attrs)

        self.assertEqual(profile.provider, 'AZURE')
        self.assertEqual(profile.external_id, 'abc-sub')
        self.assertEqual(profile.username, 'user@contoso.com')
        self.assertEqual(profile.display_name, 'Azure User')
        self.assertIsNone(profile.avatar_url)

    def test_oid_wins_over_sub(self):
        profile = map_from_azure({'oid': 'object-id', 'sub': 'pairwise-sub'})
        self.assertEqual(profile.external_id, 'object-id')

    def test_username_chain(self):
        cases = [
            ({'userPrincipalName': 'upn@contoso.com', 'mailNickname': 'nick'}, 'upn@contoso.com'),
            ({'mailNickname': 'nick', 'email': 'e@contoso.com'}, 'nick'),
            ({'email': 'e@contoso.com', 'sub': 's'}, 'e@contoso.com'),
            ({'sub': 's'}, 's'),
        ]
        for attrs, expected in cases:
            with self.subTest(attrs=attrs):
                self.assertEqual(map_from_azure(attrs).username, expected)

    def test_display_name_chain(self):
        self.assertEqual(
            map_from_azure({'mailNickname': 'nick', 'userPrincipalName': 'upn'}).display_name, 'nick',
        )
        self.assertEqual(map_from_azure({'userPrincipalName': 'upn'}).display_name, 'upn')
        self.assertEqual(map_from_azure({'preferred_username': 'pu'}).display_name, 'pu')

    def test_avatar_is_never_mapped(self):
        self.assertIsNone(map_from_azure({'sub': 's', 'avatar_url': 'http://x'}).avatar_url)


class TestMapGeneric(unittest.TestCase):

    def test_oidc_claims(self):
        attrs = {
            'sub': 'kc-1',
            'preferred_username': 'jdoe',
            'name': 'Jane Doe',
            'email': 'jdoe@example.com',
            'picture': 'http://pic',
        }

        profile = map_generic('keycloak', attrs)

        self.assertEqual(profile.provider, 'KEYCLOAK')
        self.assertEqual(profile.external_id, 'kc-1')
        self.assertEqual(profile.username, 'jdoe')
        self.assertEqual(profile.display_name, 'Jane Doe')
        self.assertEqual(profile.email, 'jdoe@example.com')
        self.assertIsNone(profile.avatar_url)

    def test_username_falls_back_to_name(self):
        profile = map_generic('okta', {'sub': 'o-1', 'name': 'Jane Doe'})
        self.assertEqual(profile.username, 'Jane Doe')

    def test_missing_claims_yield_none(self):
        profile = map_generic('okta', {})
        self.assertEqual(profile.provider, 'OKTA')
        self.assertIsNone(profile.external_id)
        self.assertIsNone(profile.username)


if __name__ == '__main__':
    unittest.main()
