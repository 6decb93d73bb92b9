import json
import unittest
from unittest import mock

from django.db import OperationalError

from apps.common import views
from apps.common.db import QueryExecutionError


class HealthViewsUnitTests(unittest.TestCase):
    def test_live_health_returns_alive_payload(self):
        response = views.live_health(None)
        self.assertEqual(response.status_code, 200)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'alive')

    @mock.patch('apps.common.views._db_check', return_value={'status': 'ok', 'latency_ms': 1.23})
    def test_ready_health_ok_when_database_answers(self, mock_db_check):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 200)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'ok')
        self.assertEqual(payload['checks']['database'], mock_db_check.return_value)

    @mock.patch('apps.common.views._db_check', return_value={'status': 'fail', 'error': 'db down'})
    def test_ready_health_degraded_on_database_failure(self, mock_db_check):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 503)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'degraded')
        self.assertEqual(payload['checks']['database'], mock_db_check.return_value)


class DatabaseCheckTests(unittest.TestCase):
    @mock.patch('apps.common.views.SQLGateway')
    def test_db_check_reports_ok(self, gateway_cls):
        gateway_cls.return_value.ping.return_value = True
        result = views._db_check()
        self.assertEqual(result['status'], 'ok')
        self.assertIn('latency_ms', result)
        gateway_cls.assert_called_once_with('default')

    @mock.patch('apps.common.views.SQLGateway')
    def test_db_check_reports_underlying_cause(self, gateway_cls):
        error = QueryExecutionError()
        error.__cause__ = OperationalError('connection refused')
        gateway_cls.return_value.ping.side_effect = error
        result = views._db_check()
        self.assertEqual(result['status'], 'fail')
        self.assertEqual(result['error'], 'connection refused')
        self.assertEqual(result['exception'], 'OperationalError')

    @mock.patch('apps.common.views.SQLGateway')
    def test_db_check_unexpected_row(self, gateway_cls):
        gateway_cls.return_value.ping.return_value = False
        result = views._db_check()
        self.assertEqual(result['status'], 'fail')
        self.assertEqual(result['error'], 'unexpected response')
