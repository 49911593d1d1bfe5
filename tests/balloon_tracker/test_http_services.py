"""Tests for the HTTP-backed services (trajectory, water, mail) and map links."""
from unittest.mock import MagicMock
from urllib.parse import unquote

import pytest
import requests

from balloon_tracker.config import WATER_API_URL
from balloon_tracker.services.mail_service import MailService
from balloon_tracker.services.map_service import MapService
from balloon_tracker.services.trajectory_service import TrajectoryService
from balloon_tracker.services.water_service import WaterService


def _response(text="", json_data=None, status_error=None) -> MagicMock:
    """Fake requests.Response."""
    response = MagicMock()
    response.text = text
    response.json.return_value = json_data
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


def _session(response=None, error=None) -> MagicMock:
    """Fake requests.Session whose get/post return `response` or raise `error`."""
    session = MagicMock()
    session.headers = {}
    for method in (session.get, session.post):
        if error is not None:
            method.side_effect = error
        else:
            method.return_value = response
    return session


class TestTrajectoryService:
    """Tests for TrajectoryService."""

    def test_fetch_passes_tls_flag(self):
        """Test the verify setting is passed through to the request."""
        session = _session(_response(text="<html></html>"))
        service = TrajectoryService(verify_tls=False, timeout=5, session=session)

        assert service.fetch("https://traj.test/") == "<html></html>"
        session.get.assert_called_once_with("https://traj.test/", verify=False, timeout=5)

    def test_fetch_with_verification(self):
        session = _session(_response(text="ok"))
        service = TrajectoryService(verify_tls=True, session=session)

        service.fetch("https://traj.test/")

        assert session.get.call_args.kwargs["verify"] is True

    def test_fetch_http_error_raises(self):
        """Test non-2xx responses surface as request errors."""
        session = _session(_response(status_error=requests.HTTPError("500 Server Error")))
        service = TrajectoryService(session=session)

        with pytest.raises(requests.RequestException):
            service.fetch("https://traj.test/")

    def test_fetch_point(self):
        html = "<pre>header</pre><pre>H M lat lon alt\n1 2 35.5 -80.2 15000</pre>"
        service = TrajectoryService(session=_session(_response(text=html)))

        point = service.fetch_point("https://traj.test/")

        assert (point.latitude, point.longitude, point.altitude_meters) == (35.5, -80.2, 15000)


class TestWaterService:
    """Tests for WaterService."""

    def test_water(self):
        session = _session(_response(json_data={"water": True}))
        service = WaterService(api_host="host.test", api_key="secret", session=session)

        assert service.is_water(35.5, -80.2) is True
        session.get.assert_called_once_with(
            WATER_API_URL,
            params={"latitude": 35.5, "longitude": -80.2},
            timeout=None,
        )

    def test_auth_headers(self):
        session = _session(_response(json_data={"water": False}))
        WaterService(api_host="host.test", api_key="secret", session=session)

        assert session.headers["x-rapidapi-host"] == "host.test"
        assert session.headers["x-rapidapi-key"] == "secret"

    def test_land(self):
        session = _session(_response(json_data={"water": False}))
        service = WaterService(api_host="h", api_key="k", session=session)

        assert service.is_water(35.5, -80.2) is False

    def test_connection_error_falls_back_to_land(self):
        """Test request failures are treated as land."""
        session = _session(error=requests.ConnectionError("unreachable"))
        service = WaterService(api_host="h", api_key="k", session=session)

        assert service.is_water(35.5, -80.2) is False

    def test_http_error_falls_back_to_land(self):
        session = _session(_response(status_error=requests.HTTPError("429 Too Many Requests")))
        service = WaterService(api_host="h", api_key="k", session=session)

        assert service.is_water(35.5, -80.2) is False

    def test_bad_body_falls_back_to_land(self):
        response = _response()
        response.json.side_effect = ValueError("not json")
        service = WaterService(api_host="h", api_key="k", session=_session(response))

        assert service.is_water(35.5, -80.2) is False


class TestMailService:
    """Tests for MailService."""

    def test_send(self):
        session = _session(_response(text='{"message": "Queued. Thank you."}'))
        service = MailService(api_key="key-1", domain="mg.test", session=session)

        assert service.send(["a@test", "b@test"], "Subject", "<p>hi</p>") is True

        args, kwargs = session.post.call_args
        assert args[0] == "https://api.mailgun.net/v3/mg.test/messages"
        assert kwargs["auth"] == ("api", "key-1")
        assert kwargs["data"] == {
            "from": "Weather Balloon Tracker <noreply@mg.test>",
            "to": ["a@test", "b@test"],
            "subject": "Subject",
            "html": "<p>hi</p>",
        }

    def test_custom_api_base(self):
        service = MailService(api_key="k", domain="mg.test", api_base="https://api.eu.mailgun.net/",
                              session=_session())

        assert service.messages_url == "https://api.eu.mailgun.net/v3/mg.test/messages"

    def test_send_failure_is_logged_not_raised(self):
        session = _session(error=requests.ConnectionError("down"))
        service = MailService(api_key="k", domain="mg.test", session=session)

        assert service.send(["a@test"], "Subject", "") is False

    def test_no_recipients(self):
        session = _session(_response())
        service = MailService(api_key="k", domain="mg.test", session=session)

        assert service.send([], "Subject", "") is False
        session.post.assert_not_called()


class TestMapService:
    """Tests for MapService."""

    def test_map_link(self):
        assert MapService.get_map_link(35.5, -80.2) == "https://www.openstreetmap.org/?mlat=35.5&mlon=-80.2"

    def test_map_image_url(self):
        service = MapService(access_token="pk.test", width=600, height=400, zoom=9)

        url = service.get_map_image_url(35.5, -80.2)

        assert url.startswith("https://api.mapbox.com/styles/v1/mapbox/streets-v12/static/geojson(")
        assert '{"type":"Point","coordinates":[-80.2,35.5]}' in unquote(url)
        assert "/-80.2,35.5,9/600x400?access_token=pk.test" in url
