"""Tests for the GitHub emails API adapter.

Requests are served by httpx.MockTransport; no network access.
"""

import json
import unittest

import httpx

from adapter.external.github_emails import GitHubEmailsAdapter, parse_email_records
from domain.model.errors import EmailLookupError
from domain.model.provider import EmailAddress


def _adapter(handler):
    return GitHubEmailsAdapter(transport=httpx.MockTransport(handler))


class TestListEmails(unittest.TestCase):

    def test_request_shape_and_parsing(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen['request'] = request
            return httpx.Response(200, json=[
                {'email': 'a@x.com', 'primary': False, 'verified': True, 'visibility': None},
                {'email': 'b@x.com', 'primary': True, 'verified': True, 'visibility': 'private'},
            ])

        records = _adapter(handler).list_emails('gho_token')

        request = seen['request']
        self.assertEqual(request.method, 'GET')
        self.assertEqual(str(request.url), 'https://api.github.com/user/emails')
        self.assertEqual(request.headers['Authorization'], 'Bearer gho_token')
        self.assertEqual(request.headers['Accept'], 'application/json')
        self.assertEqual(records, [
            EmailAddress('a@x.com', primary=False, verified=True),
            EmailAddress('b@x.com', primary=True, verified=True),
        ])

    def test_http_error_raises_lookup_error(self):
        adapter = _adapter(lambda request: httpx.Response(403, json={'message': 'Forbidden'}))

        with self.assertRaises(EmailLookupError) as ctx:
            adapter.list_emails('t')
        self.assertEqual(ctx.exception.status_code, 403)

    def test_transport_error_raises_lookup_error(self):
        def handler(request):
            raise httpx.ConnectTimeout('timed out', request=request)

        with self.assertRaises(EmailLookupError):
            _adapter(handler).list_emails('t')

    def test_invalid_json_raises_lookup_error(self):
        adapter = _adapter(lambda request: httpx.Response(200, content=b'<html>oops</html>'))

        with self.assertRaises(EmailLookupError):
            adapter.list_emails('t')

    def test_non_list_payload_raises_lookup_error(self):
        adapter = _adapter(lambda request: httpx.Response(200, content=json.dumps({'email': 'a@x.com'})))

        with self.assertRaises(EmailLookupError):
            adapter.list_emails('t')

    def test_empty_list(self):
        self.assertEqual(_adapter(lambda request: httpx.Response(200, json=[])).list_emails('t'), [])


class TestParseEmailRecords(unittest.TestCase):

    def test_skips_unusable_entries(self):
        records = parse_email_records([
            'not-a-dict',
            {'primary': True, 'verified': True},
            {'email': '   '},
            {'email': 'ok@x.com', 'primary': 'yes', 'verified': 1},
        ])

        self.assertEqual(records, [EmailAddress('ok@x.com', primary=False, verified=False)])


if __name__ == '__main__':
    unittest.main()
