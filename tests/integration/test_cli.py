import pytest
from click.testing import CliRunner

from cloudru_mcp import __version__
from cloudru_mcp.CLI.main import cli


@pytest.fixture
def env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CLOUDRU_KEY_ID", "keyid-12345")
    monkeypatch.setenv("CLOUDRU_KEY_SECRET", "secret-67890")
    monkeypatch.setenv("CLOUDRU_REGISTRY_NAME", "myreg")


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ['--help'], obj={})
    assert result.exit_code == 0
    assert 'Serve MCP over stdin/stdout' in result.output


def test_cli_version():
    runner = CliRunner()
    result = runner.invoke(cli, ['--version'], obj={})
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_missing_credentials(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CLOUDRU_KEY_ID", "")
    monkeypatch.setenv("CLOUDRU_KEY_SECRET", "")
    runner = CliRunner()
    result = runner.invoke(cli, ['describe'], obj={})
    assert result.exit_code == 1
    assert 'CLOUDRU_KEY_ID and CLOUDRU_KEY_SECRET' in result.output


def test_cli_describe(env):
    runner = CliRunner()
    result = runner.invoke(cli, ['describe'], obj={})
    assert result.exit_code == 0
    assert 'CLOUDRU_REGISTRY_NAME: (myreg)' in result.output
    assert 'secret-67890' not in result.output


def test_cli_tools(env):
    runner = CliRunner()
    result = runner.invoke(cli, ['tools'], obj={})
    assert result.exit_code == 0
    assert 'cloudru_create_containerapp' in result.output
    assert len(result.output.strip().splitlines()) == 14


def test_cli_env_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CLOUDRU_KEY_ID", "")
    monkeypatch.setenv("CLOUDRU_KEY_SECRET", "")
    monkeypatch.setenv("CLOUDRU_PROJECT_ID", "")
    env_file = tmp_path / "custom.env"
    env_file.write_text("CLOUDRU_KEY_ID=filekey1\nCLOUDRU_KEY_SECRET=filesecret\nCLOUDRU_PROJECT_ID=proj-from-file\n")

    runner = CliRunner()
    result = runner.invoke(cli, ['--env-file', str(env_file), 'describe'], obj={})

    assert result.exit_code == 0
    assert 'CLOUDRU_PROJECT_ID: (proj-from-file)' in result.output


def test_cli_log_file(env, tmp_path):
    log_file = tmp_path / "server.log"
    runner = CliRunner()
    result = runner.invoke(cli, ['--log-file', str(log_file), 'describe'], obj={})
    assert result.exit_code == 0
    assert log_file.exists()
