"""
Tests for health check endpoints
"""
import pytest
import time
from unittest.mock import Mock, patch
from health_checks import (
    get_system_metrics,
    get_uptime,
    check_pricing_config,
    check_database,
)


@pytest.mark.unit
class TestSystemMetrics:
    """Tests for system metrics collection"""

    def test_get_system_metrics_returns_dict(self):
        metrics = get_system_metrics()
        assert isinstance(metrics, dict)

    def test_system_metrics_has_memory_info(self):
        metrics = get_system_metrics()
        if metrics:
            assert 'memory_mb' in metrics
            assert 'memory_percent' in metrics

    @patch('health_checks.psutil.Process')
    def test_system_metrics_handles_errors(self, mock_process):
        """psutil failures produce an empty dict, not an exception"""
        mock_process.side_effect = Exception("Test error")
        metrics = get_system_metrics()
        assert metrics == {}


@pytest.mark.unit
class TestUptime:
    """Tests for uptime calculation"""

    def test_uptime_has_required_fields(self):
        uptime = get_uptime()
        assert 'uptime_seconds' in uptime
        assert 'uptime_minutes' in uptime
        assert 'uptime_hours' in uptime
        assert 'started_at' in uptime

    def test_uptime_increases_over_time(self):
        uptime1 = get_uptime()
        time.sleep(0.1)
        uptime2 = get_uptime()
        assert uptime2['uptime_seconds'] > uptime1['uptime_seconds']


@pytest.mark.unit
class TestPricingConfigCheck:
    """Tests for the rate table check"""

    def test_valid_rate_table(self):
        from config import Config
        mock_app = Mock()
        mock_app.config = {'PRICING': Config.PRICING}

        status = check_pricing_config(mock_app)

        assert status['healthy'] is True
        assert status['volume_tiers'] == 3
        assert status['membership_tiers'] == 4

    def test_missing_rate_table(self):
        mock_app = Mock()
        mock_app.config = {}

        status = check_pricing_config(mock_app)

        assert status['healthy'] is False
        assert 'error' in status

    def test_negative_rate(self):
        mock_app = Mock()
        mock_app.config = {'PRICING': {'pallet_in': -5}}

        assert check_pricing_config(mock_app)['healthy'] is False


@pytest.mark.unit
class TestDatabaseCheck:
    """Tests for the database check"""

    @patch('health_checks.check_db_connection')
    def test_database_reachable(self, mock_check):
        mock_check.return_value = True
        assert check_database() == {'healthy': True}

    @patch('health_checks.check_db_connection')
    def test_database_unreachable(self, mock_check):
        mock_check.side_effect = RuntimeError("Cannot connect to database: refused")
        status = check_database()
        assert status['healthy'] is False
        assert 'refused' in status['error']


@pytest.mark.integration
class TestHealthCheckEndpoints:
    """Integration tests for health check endpoints"""

    def test_health_endpoint_returns_200(self, client):
        response = client.get('/api/health')
        assert response.status_code == 200
        assert response.get_json()['status'] == 'healthy'

    def test_ping_endpoint_returns_pong(self, client):
        response = client.get('/api/ping')
        assert response.status_code == 200
        assert response.data == b'pong'

    def test_ready_endpoint_reports_checks(self, client):
        response = client.get('/api/ready')
        data = response.get_json()
        assert response.status_code == 200
        assert data['status'] == 'ready'
        assert data['checks']['pricing_config']['healthy'] is True
        assert data['checks']['database']['healthy'] is True

    @patch('health_checks.check_db_connection')
    def test_ready_endpoint_not_ready_without_database(self, mock_check, client):
        mock_check.side_effect = RuntimeError("down")
        response = client.get('/api/ready')
        assert response.status_code == 503
        assert response.get_json()['status'] == 'not_ready'

    def test_metrics_endpoint(self, client):
        response = client.get('/api/metrics')
        data = response.get_json()
        assert response.status_code == 200
        assert data['service'] == 'warehouse-planner'
        assert 'uptime_seconds' in data['uptime']
        assert 'version' in data

    def test_security_headers_present(self, client):
        response = client.get('/api/health')
        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Frame-Options'] == 'DENY'

    def test_unknown_route_returns_json_404(self, client):
        response = client.get('/api/does-not-exist')
        assert response.status_code == 404
        assert response.get_json()['success'] is False
