"""Tests for the health endpoint."""

import unittest
from unittest.mock import patch, MagicMock

from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from api.main import app


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    @patch('api.routes.health.get_mongodb_client')
    def test_healthy_when_mongodb_answers(self, mock_get_client):
        mock_get_client.return_value = MagicMock()

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["services"]["mongodb"]["status"], "healthy")

    @patch('api.routes.health.get_mongodb_client')
    def test_degraded_when_mongodb_unconfigured(self, mock_get_client):
        mock_get_client.return_value = None

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "degraded")

    @patch('api.routes.health.get_mongodb_client')
    def test_degraded_when_ping_fails(self, mock_get_client):
        mock_client = MagicMock()
        mock_client.admin.command.side_effect = PyMongoError("down")
        mock_get_client.return_value = mock_client

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertIn("Connection error", response.json()["services"]["mongodb"]["message"])


if __name__ == '__main__':
    unittest.main()
