"""Tests for rat CLI commands."""

import base64
from pathlib import Path
from unittest import mock

import pytest
from click.testing import CliRunner

from rat.cli import cli

CONFIG_YAML = """\
centerdevice:
  client_id: id1
  client_secret: secret1
pocket:
  client_id: pocket_id
  client_secret: pocket_secret
slack:
  client_id: slack_id
  client_secret: slack_secret
"""


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML)
    return str(path)


@pytest.fixture(autouse=True)
def clean_env():
    with mock.patch.dict("os.environ", {}, clear=True):
        yield


def make_response(content: bytes, status_code: int = 200):
    response = mock.Mock()
    response.status_code = status_code
    response.content = content
    return response


class TestCenterDeviceAuth:
    """Tests for 'rat centerdevice auth'."""

    @mock.patch("requests.request")
    def test_auth_prints_tokens(self, mock_request, runner, config_file):
        """A successful flow prints the configuration lines."""
        mock_request.return_value = make_response(
            b'{"token_type":"bearer","expires_in":3600,'
            b'"refresh_token":"ref","access_token":"tok"}'
        )

        result = runner.invoke(
            cli, ["--config-file", config_file, "centerdevice", "auth"], input="CODE123\n"
        )

        assert result.exit_code == 0, result.output
        assert "https://auth.centerdevice.de/authorize?client_id=id1" in result.output
        assert "response_type=code" in result.output
        assert "Authentication code: " in result.output
        assert "section 'centerdevice'" in result.output
        assert "refresh_token: 'ref'" in result.output
        assert "access_token: 'tok'" in result.output

        call_args = mock_request.call_args
        assert call_args[0] == ("POST", "https://auth.centerdevice.de/token")
        assert call_args[1]["headers"]["Authorization"] == (
            "Basic " + base64.b64encode(b"id1:secret1").decode()
        )
        assert call_args[1]["data"] == (
            b"grant_type=authorization_code"
            b"&redirect_uri=https://lukaspustina.github.io/rat/redirects/centerdevice.html"
            b"&code=CODE123"
        )

    @mock.patch("webbrowser.open", return_value=True)
    @mock.patch("requests.request")
    def test_auth_with_browser(self, mock_request, mock_open, runner, config_file):
        """--browser opens the authorization page."""
        mock_request.return_value = make_response(
            b'{"token_type":"bearer","expires_in":3600,'
            b'"refresh_token":"ref","access_token":"tok"}'
        )

        result = runner.invoke(
            cli,
            ["--config-file", config_file, "centerdevice", "auth", "--browser"],
            input="CODE123\n",
        )

        assert result.exit_code == 0, result.output
        mock_open.assert_called_once()
        assert mock_open.call_args[0][0].startswith("https://auth.centerdevice.de/authorize?")
        assert "web browser window" in result.output

    @mock.patch("webbrowser.open", return_value=False)
    @mock.patch("requests.request")
    def test_browser_failure_exits_1(self, mock_request, mock_open, runner, config_file):
        result = runner.invoke(
            cli,
            ["--config-file", config_file, "centerdevice", "auth", "--browser"],
            input="CODE123\n",
        )

        assert result.exit_code == 1
        assert "stage 'start'" in result.output
        mock_request.assert_not_called()

    @mock.patch("requests.request")
    def test_invalid_json_exits_1(self, mock_request, runner, config_file):
        """Unexpected responses fail the command."""
        mock_request.return_value = make_response(b"not json")

        result = runner.invoke(
            cli, ["--config-file", config_file, "centerdevice", "auth"], input="CODE123\n"
        )

        assert result.exit_code == 1
        assert "Failed to authenticate with CenterDevice" in result.output
        assert "stage 'code_requested'" in result.output

    @mock.patch("requests.request")
    def test_json_output_echoes_response(self, mock_request, runner, config_file):
        body = (
            b'{"token_type":"bearer","expires_in":3600,'
            b'"refresh_token":"ref","access_token":"tok"}'
        )
        mock_request.return_value = make_response(body)

        result = runner.invoke(
            cli,
            ["--config-file", config_file, "--output-format", "json", "centerdevice", "auth"],
            input="CODE123\n",
        )

        assert result.exit_code == 0, result.output
        assert "Received response:" in result.output
        assert body.decode() in result.output

    def test_empty_code_exits_1(self, runner, config_file):
        result = runner.invoke(
            cli, ["--config-file", config_file, "centerdevice", "auth"], input="\n"
        )

        assert result.exit_code == 1
        assert "No authentication code entered" in result.output


class TestSlackAuth:
    """Tests for 'rat slack auth'."""

    @mock.patch("requests.request")
    def test_auth_uses_url_params(self, mock_request, runner, config_file):
        mock_request.return_value = make_response(
            b'{"ok":true,"access_token":"xoxp-1","scope":"channels:read",'
            b'"user_id":"U1","team_name":"Team","team_id":"T1"}'
        )

        result = runner.invoke(
            cli, ["--config-file", config_file, "slack", "auth"], input="CODE123\n"
        )

        assert result.exit_code == 0, result.output
        assert "scope=channels%3Aread+chat%3Awrite%3Auser" in result.output
        assert "user id 'U1', team 'Team'" in result.output
        assert "access_token: 'xoxp-1'" in result.output

        method, url = mock_request.call_args[0]
        assert method == "GET"
        assert url == (
            "https://slack.com/api/oauth.access"
            "?client_id=slack_id&client_secret=slack_secret&code=CODE123"
        )
        assert mock_request.call_args[1]["data"] is None


class TestPocketAuth:
    """Tests for 'rat pocket auth'."""

    @mock.patch("requests.request")
    def test_auth_prints_username(self, mock_request, runner, config_file):
        mock_request.return_value = make_response(b'{"access_token":"abc","username":"bob"}')

        result = runner.invoke(
            cli, ["--config-file", config_file, "pocket", "auth"], input="CODE123\n"
        )

        assert result.exit_code == 0, result.output
        assert "user 'bob'" in result.output
        assert "access_token: 'abc'" in result.output

    @mock.patch("requests.request")
    def test_http_error_exits_1(self, mock_request, runner, config_file):
        mock_request.return_value = make_response(b'{"error":"denied"}', status_code=403)

        result = runner.invoke(
            cli, ["--config-file", config_file, "pocket", "auth"], input="CODE123\n"
        )

        assert result.exit_code == 1
        assert "403" in result.output

    @mock.patch("requests.request")
    def test_json_output_echoes_error_body(self, mock_request, runner, config_file):
        """The provider's error document is shown when the exchange is rejected."""
        mock_request.return_value = make_response(
            b'{"error":"invalid_grant"}', status_code=400
        )

        result = runner.invoke(
            cli,
            ["--config-file", config_file, "--output-format", "json", "pocket", "auth"],
            input="CODE123\n",
        )

        assert result.exit_code == 1
        assert '{"error":"invalid_grant"}' in result.output
        assert "400" in result.output


class TestConfiguration:
    """Tests for configuration handling in the CLI."""

    def test_missing_credentials_exits_2(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("general:\n  verbosity: normal\n")

        result = runner.invoke(cli, ["--config-file", str(path), "slack", "auth"])

        assert result.exit_code == 2
        assert "Missing slack credentials" in result.output

    def test_invalid_config_exits_2(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("general: [unclosed")

        result = runner.invoke(cli, ["--config-file", str(path), "slack", "auth"])

        assert result.exit_code == 2
        assert "Invalid YAML" in result.output

    def test_non_mapping_section_exits_2(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("general: human\n" + CONFIG_YAML)

        result = runner.invoke(cli, ["--config-file", str(path), "centerdevice", "auth"])

        assert result.exit_code == 2
        assert "Section 'general' must contain a mapping" in result.output

    def test_help_lists_providers(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("centerdevice", "pocket", "slack"):
            assert name in result.output
