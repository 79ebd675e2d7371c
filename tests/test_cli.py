"""Tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from conftest import FakeClient
from promptengineer.cli.main import main
from promptengineer.core.requester import FAILURE_MESSAGE, PromptRequester


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep user and project config files out of the tests."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fake_service():
    """Route requesters built by the CLI to a fake client, recording their config."""
    client = FakeClient(text="Act as a patient teacher.")
    configs = []

    def build(state, config):
        configs.append(config)
        return PromptRequester(state, client=client)

    with patch("promptengineer.cli.main.PromptRequester", side_effect=build):
        yield client, configs


class TestGenerate:
    """Test the generate command."""

    def test_generate(self, runner, fake_service):
        """Test a successful generation is printed."""
        client, configs = fake_service
        result = runner.invoke(
            main,
            ["generate", "-p", "Explain recursion", "-r", "Teacher", "-f", "bullet-points", "--api-key", "sk-x"],
        )
        assert result.exit_code == 0, result.output
        assert "Act as a patient teacher." in result.output

        user_message = client.calls[0][1]["content"]
        assert '- Role: "Teacher"' in user_message
        assert '- Output Format: "bullet-points"' in user_message
        assert "Topic" not in user_message
        assert configs[0].api_key == "sk-x"

    def test_prompt_required(self, runner, fake_service):
        """Test that no request is made without a prompt."""
        client, _ = fake_service
        result = runner.invoke(main, ["generate", "-r", "Teacher"])
        assert result.exit_code == 1
        assert "prompt is required" in result.output
        assert client.calls == []

    def test_prompt_from_stdin(self, runner, fake_service):
        """Test reading the prompt from stdin."""
        client, _ = fake_service
        result = runner.invoke(main, ["generate", "-p", "-"], input="Explain recursion\n")
        assert result.exit_code == 0, result.output
        assert '- Prompt: "Explain recursion"' in client.calls[0][1]["content"]

    def test_invalid_choice(self, runner, fake_service):
        """Test that option sets are enforced by the CLI."""
        result = runner.invoke(main, ["generate", "-p", "x", "-f", "haiku"])
        assert result.exit_code == 2

    def test_failure(self, runner, fake_service):
        """Test a failed request prints the fixed message and exits non-zero."""
        client, _ = fake_service
        client.error = RuntimeError("connection refused")
        result = runner.invoke(main, ["generate", "-p", "Explain recursion"])
        assert result.exit_code == 1
        assert FAILURE_MESSAGE in result.output

    def test_json_output(self, runner, fake_service):
        """Test JSON output with statistics."""
        result = runner.invoke(main, ["generate", "-p", "Explain recursion", "--json", "--no-color"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["generated_prompt"] == "Act as a patient teacher."
        assert data["status"] == "success"
        assert data["tokens_input"] == 42

    def test_output_file(self, runner, fake_service, tmp_path):
        """Test writing the result to a file."""
        out = tmp_path / "prompt.txt"
        result = runner.invoke(main, ["generate", "-p", "Explain recursion", "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8") == "Act as a patient teacher."

    def test_copy(self, runner, fake_service):
        """Test copying the result to the clipboard."""
        with patch("promptengineer.cli.main.copy_to_clipboard", return_value=True) as copy:
            result = runner.invoke(main, ["generate", "-p", "Explain recursion", "--copy"])
        assert result.exit_code == 0, result.output
        copy.assert_called_once_with("Act as a patient teacher.")
        assert "Copied to clipboard" in result.output

    def test_copy_unavailable(self, runner, fake_service):
        """Test that a clipboard failure is only a warning."""
        with patch("promptengineer.cli.main.copy_to_clipboard", return_value=False):
            result = runner.invoke(main, ["generate", "-p", "Explain recursion", "--copy"])
        assert result.exit_code == 0
        assert "Could not copy" in result.output

    def test_config_file_and_env(self, runner, fake_service, tmp_path, monkeypatch):
        """Test model from a config file and key from the environment."""
        _, configs = fake_service
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        conf = tmp_path / "conf.yaml"
        conf.write_text(yaml.dump({"model": "gpt-4o-mini"}))
        result = runner.invoke(main, ["generate", "-p", "x", "--config", str(conf)])
        assert result.exit_code == 0, result.output
        assert configs[0].model == "gpt-4o-mini"
        assert configs[0].api_key == "sk-env"


class TestPreview:
    """Test the preview command."""

    def test_preview_json(self, runner):
        """Test the assembled messages are printed without a request."""
        with patch("promptengineer.core.llm_client.AsyncOpenAI") as sdk_class:
            result = runner.invoke(main, ["preview", "-p", "Explain recursion", "-e", "beginner", "--json"])
        assert result.exit_code == 0, result.output
        messages = json.loads(result.output)
        assert [m["role"] for m in messages] == ["system", "user"]
        assert '- Expertise Level: "beginner"' in messages[1]["content"]
        sdk_class.assert_not_called()

    def test_preview_requires_prompt(self, runner):
        """Test preview without a prompt."""
        result = runner.invoke(main, ["preview"])
        assert result.exit_code == 1


class TestInteractive:
    """Test the interactive form."""

    def test_fill_generate_quit(self, runner, fake_service):
        """Test filling the form, generating once and quitting."""
        client, _ = fake_service
        answers = [
            "Explain recursion",  # prompt
            "Teacher",  # role
            "",  # topic
            "",  # goal
            "bullet-points",  # output format
            "",  # expertise level
            "",  # details
            "generate",
            "quit",
        ]
        result = runner.invoke(main, ["interactive"], input="\n".join(answers) + "\n")
        assert result.exit_code == 0, result.output
        assert len(client.calls) == 1
        lines = [line for line in client.calls[0][1]["content"].splitlines() if line.startswith("- ")]
        assert lines == [
            '- Prompt: "Explain recursion"',
            '- Role: "Teacher"',
            '- Output Format: "bullet-points"',
        ]
        assert "Act as a patient teacher." in result.output

    def test_edit_and_regenerate(self, runner, fake_service):
        """Test editing fields between generations."""
        client, _ = fake_service
        answers = [
            "generate",
            "edit",
            "",  # keep prompt
            "-",  # clear role
            "History",  # topic
            "",
            "",
            "expert",
            "",
            "generate",
            "quit",
        ]
        result = runner.invoke(
            main,
            ["interactive", "-p", "Explain recursion", "-r", "Teacher"],
            input="\n".join(answers) + "\n",
        )
        assert result.exit_code == 0, result.output
        assert len(client.calls) == 2
        second = client.calls[1][1]["content"]
        assert "Role" not in second
        assert '- Topic: "History"' in second
        assert '- Expertise Level: "expert"' in second


class TestConfigCommands:
    """Test configuration commands."""

    def test_export_yaml(self, runner):
        """Test exporting the effective configuration."""
        result = runner.invoke(main, ["config", "export"])
        assert result.exit_code == 0
        assert yaml.safe_load(result.output)["model"] == "gpt-3.5-turbo"

    def test_import(self, runner, isolated_home):
        """Test importing a config file into the user config."""
        source = isolated_home / "team.json"
        source.write_text(json.dumps({"model": "gpt-4o"}))
        result = runner.invoke(main, ["config", "import", str(source)])
        assert result.exit_code == 0
        saved = yaml.safe_load((isolated_home / ".promptengineer" / "config.yaml").read_text())
        assert saved["model"] == "gpt-4o"

    def test_show_redacts_key(self, runner, monkeypatch):
        """Test the key is never shown in full."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-1234567890abcd")
        result = runner.invoke(main, ["config", "show"])
        assert result.exit_code == 0
        assert "sk-1234567890abcd" not in result.output
        assert "sk-...abcd" in result.output
