"""
Tests for the command line entry point.
"""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

import main
from lib.easemob import EasemobClient, ListOptions
from lib.easemob.exceptions import ConfigurationError

CONFIG_TOML = """
[easemob]
org-name = "test-org"
app-name = "test-app"
client-id = "cid"
client-secret = "secret"
base-url = "https://test.easemob.com/"
"""


def makeMockClient(token: str = "tok") -> MagicMock:
    """Create EasemobClient mock with async service methods."""
    client = MagicMock()
    client.token = token
    client.getToken = AsyncMock()
    client.users.get = AsyncMock(return_value="user")
    client.users.listAll = AsyncMock(return_value="users")
    client.groups.get = AsyncMock(return_value="groups")
    client.messages.sendTextMessagesToUsers = AsyncMock(return_value="sent")
    return client


def makeHttpClient(handler) -> EasemobClient:
    client = EasemobClient("cid", "secret", "test-org", "test-app", baseUrl="https://test.easemob.com/")
    client._httpClient = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return client


@pytest.fixture
def configPath(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TOML)
    return path


class TestParseArguments:
    """Command line parsing"""

    def testTokenCommand(self):
        args = main.parse_arguments(["-c", "custom.toml", "token"])
        assert args.command == "token"
        assert args.config.endswith("custom.toml")
        assert Path(args.config).is_absolute()

    def testUsersListOptions(self):
        args = main.parse_arguments(["users-list", "--limit", "10", "--cursor", "abc"])
        assert args.limit == 10
        assert args.cursor == "abc"
        assert args.ql == ""

    def testGroupGetTakesSeveralIds(self):
        args = main.parse_arguments(["group-get", "g1", "g2"])
        assert args.group_ids == ["g1", "g2"]

    def testSendText(self):
        args = main.parse_arguments(["send-text", "--from", "admin", "--text", "hi", "bob", "eve"])
        assert args.sender == "admin"
        assert args.text == "hi"
        assert args.users == ["bob", "eve"]

    def testConfigDirsAreAbsolute(self):
        args = main.parse_arguments(["--config-dir", "conf.d", "--config-dir", "more", "token"])
        assert len(args.config_dir) == 2
        assert all(Path(p).is_absolute() for p in args.config_dir)

    def testCommandIsRequired(self):
        with pytest.raises(SystemExit):
            main.parse_arguments([])

    def testPrintConfigWithoutCommand(self):
        args = main.parse_arguments(["--print-config"])
        assert args.print_config
        assert args.command is None


class TestRunCommand:
    """Dispatching of subcommands to the client"""

    async def testTokenCommandFetchesToken(self):
        client = makeMockClient(token="")
        await main.runCommand(client, main.parse_arguments(["token"]))
        client.getToken.assert_awaited_once()

    async def testTokenFetchedWhenMissing(self):
        client = makeMockClient(token="")
        result = await main.runCommand(client, main.parse_arguments(["user-get", "alice"]))
        client.getToken.assert_awaited_once()
        client.users.get.assert_awaited_once_with("alice")
        assert result == "user"

    async def testConfiguredTokenIsReused(self):
        client = makeMockClient(token="configured")
        await main.runCommand(client, main.parse_arguments(["user-get", "alice"]))
        client.getToken.assert_not_awaited()

    async def testUsersList(self):
        client = makeMockClient()
        await main.runCommand(client, main.parse_arguments(["users-list", "--limit", "5", "--ql", "order by created"]))
        client.users.listAll.assert_awaited_once_with(ListOptions(limit=5, cursor="", ql="order by created"))

    async def testGroupGet(self):
        client = makeMockClient()
        await main.runCommand(client, main.parse_arguments(["group-get", "g1", "g2"]))
        client.groups.get.assert_awaited_once_with("g1", "g2")

    async def testSendText(self):
        client = makeMockClient()
        await main.runCommand(client, main.parse_arguments(["send-text", "--text", "hi", "bob"]))
        client.messages.sendTextMessagesToUsers.assert_awaited_once_with("", "hi", "bob")


class TestMain:
    """End-to-end runs of main() against a mocked API"""

    def testPrintConfig(self, configPath, capsys):
        assert main.main(["-c", str(configPath), "--print-config"]) == 0
        printed = json.loads(capsys.readouterr().out)
        assert printed["easemob"]["org-name"] == "test-org"

    def testTokenCommandPrintsToken(self, configPath, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/test-org/test-app/token"
            return httpx.Response(200, json={"access_token": "new_token", "expires_in": 5184000})

        with patch.object(EasemobClient, "fromConfig", return_value=makeHttpClient(handler)):
            assert main.main(["-c", str(configPath), "token"]) == 0

        printed = json.loads(capsys.readouterr().out)
        assert printed == {"access_token": "new_token", "expires_in": 5184000}

    def testUserGetPrintsEnvelope(self, configPath, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/token"):
                return httpx.Response(200, json={"access_token": "tok", "expires_in": 60})
            assert request.headers["Authorization"] == "Bearer tok"
            return httpx.Response(200, json={"action": "get", "entities": [{"username": "alice"}]})

        with patch.object(EasemobClient, "fromConfig", return_value=makeHttpClient(handler)):
            assert main.main(["-c", str(configPath), "user-get", "alice"]) == 0

        printed = json.loads(capsys.readouterr().out)
        assert printed["action"] == "get"
        assert printed["entities"] == [{"username": "alice"}]

    def testApiErrorReturnsNonZero(self, configPath, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": "unauthorized", "error_description": "bad credentials"})

        with patch.object(EasemobClient, "fromConfig", return_value=makeHttpClient(handler)):
            assert main.main(["-c", str(configPath), "token"]) == 1

        assert "401 bad credentials" in capsys.readouterr().err

    def testConfigurationErrorReturnsNonZero(self, configPath):
        with patch.object(EasemobClient, "fromConfig", side_effect=ConfigurationError("Missing easemob configuration")):
            assert main.main(["-c", str(configPath), "token"]) == 1
