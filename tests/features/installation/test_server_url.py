"""
Server address discovery tests
"""
from unittest.mock import patch

import pytest

from app.features.installation.services import server_url as server_url_service
from app.features.installation.services.server_url import get_local_ip, resolve_server_url


class TestResolveServerUrl:
    def test_explicit_base_url_wins(self, settings):
        settings.BASE_URL = "https://olimpico.example.org"
        settings.VERCEL_URL = "olimpico.vercel.app"
        settings.TUNNEL_URL = "https://abc.ngrok.app"

        result = resolve_server_url(settings, local_ip="192.168.1.20")

        assert result.url == "https://olimpico.example.org"
        assert result.type == "hosted"
        assert result.scan_url == "https://olimpico.example.org/scan"

    def test_next_public_base_url_is_preferred(self, settings):
        settings.NEXT_PUBLIC_BASE_URL = "https://public.example.org/"
        settings.BASE_URL = "https://private.example.org"

        result = resolve_server_url(settings)

        assert result.url == "https://public.example.org/"
        assert result.scan_url == "https://public.example.org/scan"

    def test_vercel_url_gets_https(self, settings):
        settings.VERCEL_URL = "olimpico.vercel.app"
        settings.TUNNEL_URL = "https://abc.ngrok.app"

        result = resolve_server_url(settings)

        assert result.url == "https://olimpico.vercel.app"
        assert result.type == "vercel"

    def test_tunnel_url(self, settings):
        settings.TUNNEL_URL = "https://abc.ngrok.app"

        result = resolve_server_url(settings, local_ip="192.168.1.20")

        assert result.url == "https://abc.ngrok.app"
        assert result.type == "tunnel"

    def test_local_network_address(self, settings):
        settings.PORT = 8000

        result = resolve_server_url(settings, local_ip="192.168.1.20")

        assert result.url == "http://192.168.1.20:8000"
        assert result.type == "local"
        assert result.scan_url == "http://192.168.1.20:8000/scan"

    def test_fallback(self, settings):
        with patch.object(server_url_service, "get_local_ip", return_value=None):
            result = resolve_server_url(settings)

        assert result.url == "http://localhost:3000"
        assert result.type == "fallback"


class TestGetLocalIp:
    def test_returns_routed_address(self):
        with patch.object(server_url_service.socket, "socket") as mock_socket:
            mock_socket.return_value.getsockname.return_value = ("192.168.0.7", 54321)

            assert get_local_ip() == "192.168.0.7"
            mock_socket.return_value.close.assert_called_once()

    def test_ignores_loopback(self):
        with patch.object(server_url_service.socket, "socket") as mock_socket, \
             patch.object(server_url_service.socket, "gethostbyname", return_value="127.0.1.1"):
            mock_socket.return_value.connect.side_effect = OSError("network unreachable")

            assert get_local_ip() is None


@pytest.mark.parametrize("local_ip, expected_type", [("10.0.0.5", "local"), (None, "fallback")])
def test_server_url_endpoint(client, local_ip, expected_type):
    with patch.object(server_url_service, "get_local_ip", return_value=local_ip):
        response = client.get("/api/v1/server-url")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["type"] == expected_type
    assert data["scanUrl"] == data["url"] + "/scan"
