"""
Tests for the Configuration Manager.

Covers loading the [easemob] section from TOML files, merging config
directories, environment variable substitution, .env loading and the
fatal error paths.
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from internal.config.manager import ConfigManager, substituteEnvVars

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def tempDir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sampleConfigToml():
    """Provide sample valid TOML configuration."""
    return """
[easemob]
org-name = "test-org"
app-name = "test-app"
client-id = "test_client_id"
client-secret = "test_client_secret"

[logging]
level = "INFO"
"""


@pytest.fixture
def defaultsToml():
    """Provide default configuration TOML."""
    return """
[easemob]
org-name = "default-org"
app-name = "default-app"
base-url = "https://a1.easemob.com/"
timeout = 30
max-retries = 3
"""


@pytest.fixture
def overrideToml():
    """Provide override configuration TOML."""
    return """
[easemob]
timeout = 60
rate-limit-delay = 1.5

[logging]
level = "DEBUG"
"""


@pytest.fixture
def invalidSyntaxToml():
    """Provide invalid TOML syntax."""
    return """
[easemob
org-name = "missing_bracket"
"""


@pytest.fixture
def missingAppNameToml():
    """Provide TOML missing the required app name."""
    return """
[easemob]
org-name = "test-org"
client-id = "cid"
"""


# ============================================================================
# Helper Functions
# ============================================================================


def createConfigFile(directory: Path, filename: str, content: str) -> Path:
    """Create a TOML config file in the specified directory."""
    filePath = directory / filename
    filePath.write_text(content)
    return filePath


def createConfigDir(baseDir: Path, dirName: str, files: dict) -> Path:
    """Create a config directory with multiple TOML files."""
    configDir = baseDir / dirName
    configDir.mkdir(parents=True, exist_ok=True)

    for filename, content in files.items():
        createConfigFile(configDir, filename, content)

    return configDir


def makeManager(configPath: Path, configDirs=None, dotEnvFile=None) -> ConfigManager:
    """Create ConfigManager that never picks up a .env from the working directory."""
    if dotEnvFile is None:
        dotEnvFile = str(configPath.parent / "nonexistent.env")
    return ConfigManager(str(configPath), configDirs=configDirs, dotEnvFile=dotEnvFile)


# ============================================================================
# Initialization Tests
# ============================================================================


class TestConfigManagerInitialization:
    """Test ConfigManager initialization."""

    def testInitWithValidConfig(self, tempDir, sampleConfigToml):
        """Test initialization with valid configuration file."""
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)

        manager = makeManager(configPath)

        assert manager.config_path == str(configPath)
        assert manager.config["easemob"]["org-name"] == "test-org"
        assert manager.config["easemob"]["client-id"] == "test_client_id"

    def testInitWithoutConfigFile(self, tempDir, defaultsToml):
        """Test initialization without main config file but with config dirs."""
        configDir = createConfigDir(tempDir, "defaults", {"defaults.toml": defaultsToml})

        manager = makeManager(tempDir / "nonexistent.toml", configDirs=[str(configDir)])

        assert manager.config["easemob"]["org-name"] == "default-org"

    def testInitWithNonExistentConfigAndNoDirs(self, tempDir):
        """Test initialization fails when config file doesn't exist and no dirs provided."""
        with pytest.raises(SystemExit):
            makeManager(tempDir / "nonexistent.toml")

    def testInvalidSyntaxExits(self, tempDir, invalidSyntaxToml):
        """Test invalid main config file is fatal."""
        configPath = createConfigFile(tempDir, "config.toml", invalidSyntaxToml)

        with pytest.raises(SystemExit):
            makeManager(configPath)

    def testMissingAppNameExits(self, tempDir, missingAppNameToml):
        """Test [easemob] without app-name is fatal."""
        configPath = createConfigFile(tempDir, "config.toml", missingAppNameToml)

        with pytest.raises(SystemExit):
            makeManager(configPath)

    def testMissingEasemobSectionExits(self, tempDir):
        """Test config without [easemob] section is fatal."""
        configPath = createConfigFile(tempDir, "config.toml", '[logging]\nlevel = "INFO"\n')

        with pytest.raises(SystemExit):
            makeManager(configPath)


# ============================================================================
# Configuration Merging Tests
# ============================================================================


class TestConfigurationMerging:
    """Test configuration merging logic."""

    def testConfigDirsOverrideMainConfig(self, tempDir, sampleConfigToml, defaultsToml):
        """Test config dirs merge on top of the main config."""
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(tempDir, "defaults", {"defaults.toml": defaultsToml})

        manager = makeManager(configPath, configDirs=[str(configDir)])

        easemob = manager.getEasemobConfig()
        assert easemob["org-name"] == "default-org"
        assert easemob["client-id"] == "test_client_id"
        assert easemob["max-retries"] == 3
        assert manager.getLoggingConfig()["level"] == "INFO"

    def testFilesMergedInSortedOrder(self, tempDir, sampleConfigToml, defaultsToml, overrideToml):
        """Test later files in a config dir win."""
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(
            tempDir,
            "configs",
            {
                "01-override.toml": overrideToml,
                "00-defaults.toml": defaultsToml,
            },
        )

        manager = makeManager(configPath, configDirs=[str(configDir)])

        easemob = manager.getEasemobConfig()
        assert easemob["timeout"] == 60
        assert easemob["rate-limit-delay"] == 1.5
        assert easemob["base-url"] == "https://a1.easemob.com/"
        assert manager.getLoggingConfig()["level"] == "DEBUG"

    def testNestedDirectoriesAreSearched(self, tempDir, sampleConfigToml, overrideToml):
        """Test .toml files are found recursively."""
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(tempDir, "configs", {})
        createConfigDir(configDir, "nested", {"override.toml": overrideToml})

        manager = makeManager(configPath, configDirs=[str(configDir)])

        assert manager.getEasemobConfig()["timeout"] == 60

    def testBrokenFileInConfigDirIsSkipped(self, tempDir, sampleConfigToml, invalidSyntaxToml, overrideToml):
        """Test broken files in config dirs do not stop loading."""
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(
            tempDir,
            "configs",
            {"00-broken.toml": invalidSyntaxToml, "01-override.toml": overrideToml},
        )

        manager = makeManager(configPath, configDirs=[str(configDir)])

        assert manager.getEasemobConfig()["timeout"] == 60

    def testNonExistentConfigDirIsSkipped(self, tempDir, sampleConfigToml):
        """Test missing config dirs are ignored."""
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)

        manager = makeManager(configPath, configDirs=[str(tempDir / "missing")])

        assert manager.getEasemobConfig()["org-name"] == "test-org"


# ============================================================================
# Environment Tests
# ============================================================================


class TestEnvironmentSubstitution:
    """Test ${VAR} placeholders and .env loading."""

    def testSubstituteEnvVars(self):
        """Test placeholders are replaced recursively."""
        with patch.dict(os.environ, {"EASEMOB_TEST_SECRET": "s3cret"}):
            result = substituteEnvVars(
                {"secret": "${EASEMOB_TEST_SECRET}", "list": ["x-${EASEMOB_TEST_SECRET}"], "timeout": 30}
            )

        assert result == {"secret": "s3cret", "list": ["x-s3cret"], "timeout": 30}

    def testUnknownVariableIsKept(self):
        """Test unset variables keep their placeholder."""
        with patch.dict(os.environ, {}, clear=True):
            assert substituteEnvVars("${EASEMOB_TEST_UNSET}") == "${EASEMOB_TEST_UNSET}"

    def testConfigValuesFromEnvironment(self, tempDir):
        """Test credentials can be taken from the environment."""
        configPath = createConfigFile(
            tempDir,
            "config.toml",
            """
[easemob]
org-name = "test-org"
app-name = "test-app"
client-secret = "${EASEMOB_TEST_SECRET}"
""",
        )

        with patch.dict(os.environ, {"EASEMOB_TEST_SECRET": "from_env"}):
            manager = makeManager(configPath)

        assert manager.getEasemobConfig()["client-secret"] == "from_env"

    def testDotEnvFileIsLoaded(self, tempDir):
        """Test variables from .env file are used for substitution."""
        configPath = createConfigFile(
            tempDir,
            "config.toml",
            """
[easemob]
org-name = "${EASEMOB_TEST_ORG}"
app-name = "test-app"
""",
        )
        dotEnv = createConfigFile(tempDir, ".env", '# comment\n\nEASEMOB_TEST_ORG="dotenv-org"\n')

        with patch.dict(os.environ, {}, clear=True):
            manager = makeManager(configPath, dotEnvFile=str(dotEnv))

        assert manager.getEasemobConfig()["org-name"] == "dotenv-org"

    def testDotEnvDoesNotOverrideEnvironment(self, tempDir):
        """Test process environment wins over .env file."""
        configPath = createConfigFile(
            tempDir,
            "config.toml",
            """
[easemob]
org-name = "${EASEMOB_TEST_ORG}"
app-name = "test-app"
""",
        )
        dotEnv = createConfigFile(tempDir, ".env", "EASEMOB_TEST_ORG=dotenv-org\n")

        with patch.dict(os.environ, {"EASEMOB_TEST_ORG": "env-org"}):
            manager = makeManager(configPath, dotEnvFile=str(dotEnv))

        assert manager.getEasemobConfig()["org-name"] == "env-org"


# ============================================================================
# Accessor Tests
# ============================================================================


class TestAccessors:
    """Test configuration accessors."""

    def testGetWithDefault(self, tempDir, sampleConfigToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        manager = makeManager(configPath)

        assert manager.get("missing", "fallback") == "fallback"
        assert manager.get("easemob")["app-name"] == "test-app"

    def testLoggingConfigDefaultsToEmpty(self, tempDir):
        configPath = createConfigFile(tempDir, "config.toml", '[easemob]\norg-name = "o"\napp-name = "a"\n')
        manager = makeManager(configPath)

        assert manager.getLoggingConfig() == {}
