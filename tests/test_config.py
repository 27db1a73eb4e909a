from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
import yaml
from evned import config as config_module
from evned.config import (
    ConfigError,
    EvnedConfig,
    InvalidConfigError,
    load_config,
    read_settings,
)


def write_config(tmp_path: Path, content: str) -> Path:
    config_file = tmp_path / ".evned"
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(textwrap.dedent(content), encoding="utf-8")
    return config_file


class Prompter:
    """Records prompts and answers them from a fixed script."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.questions: list[tuple[str, object]] = []
        self.said: list[str] = []

    def ask(self, text: str, default=None, **_: object) -> str:
        self.questions.append((text, default))
        return self.answers.pop(0)

    def say(self, message: str) -> None:
        self.said.append(message)


def test_load_config_success(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        token: S=s1:U=abc
        editor: subl
        sandbox: true
        """,
    )
    prompter = Prompter()

    config = load_config(config_path, ask=prompter.ask, say=prompter.say)

    assert isinstance(config, EvnedConfig)
    assert config.token == "S=s1:U=abc"
    assert config.editor == "subl"
    assert config.sandbox is True
    assert config.source_path == config_path
    assert prompter.questions == []


def test_missing_file_is_created_and_setup_runs(tmp_path: Path) -> None:
    config_path = tmp_path / "nested" / ".evned"
    prompter = Prompter("my-token", "nano")

    config = load_config(
        config_path,
        ask=prompter.ask,
        say=prompter.say,
        resolve_editor=lambda: "/usr/bin/vim",
    )

    assert config_path.exists()
    assert config.token == "my-token"
    assert config.editor == "nano"
    assert config.sandbox is False
    assert prompter.questions[0][1] == "none"
    assert prompter.questions[1][1] == "/usr/bin/vim"
    assert any("developer token" in line for line in prompter.said)

    saved = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    assert saved == {"token": "my-token", "editor": "nano"}


def test_token_setup_runs_only_once(tmp_path: Path) -> None:
    config_path = write_config(tmp_path, "editor: vim\n")
    first = Prompter("abc")

    load_config(config_path, ask=first.ask, say=first.say)
    assert len(first.questions) == 1
    assert "token" in read_settings(config_path)

    second = Prompter()
    config = load_config(config_path, ask=second.ask, say=second.say)
    assert second.questions == []
    assert config.token == "abc"


def test_editor_prompt_without_resolved_default(tmp_path: Path) -> None:
    config_path = write_config(tmp_path, "token: abc\n")
    prompter = Prompter("emacs")

    config = load_config(
        config_path, ask=prompter.ask, say=prompter.say, resolve_editor=lambda: ""
    )

    assert prompter.questions == [
        ("Please enter the editor command you would like to use", None)
    ]
    assert config.editor == "emacs"


def test_default_editor_resolver_uses_path_lookup(monkeypatch) -> None:
    monkeypatch.setattr(config_module.shutil, "which", lambda name: f"/opt/{name}")
    assert config_module.default_editor_resolver() == "/opt/vim"

    monkeypatch.setattr(config_module.shutil, "which", lambda name: None)
    assert config_module.default_editor_resolver() == ""


def test_legacy_symbol_keys_are_accepted(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        ---
        :token: legacy-token
        :editor: mvim
        """,
    )
    prompter = Prompter()

    config = load_config(config_path, ask=prompter.ask, say=prompter.say)

    assert config.token == "legacy-token"
    assert config.editor == "mvim"
    assert prompter.questions == []


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    config_path = write_config(tmp_path, "- token\n- editor\n")
    prompter = Prompter()

    with pytest.raises(InvalidConfigError):
        load_config(config_path, ask=prompter.ask, say=prompter.say)


def test_malformed_yaml_is_rejected(tmp_path: Path) -> None:
    config_path = write_config(tmp_path, "token: [unclosed\n")
    prompter = Prompter()

    with pytest.raises(ConfigError):
        load_config(config_path, ask=prompter.ask, say=prompter.say)


def test_wrong_value_types_are_rejected(tmp_path: Path) -> None:
    prompter = Prompter()

    config_path = write_config(tmp_path, "token: [1, 2]\neditor: vim\n")
    with pytest.raises(InvalidConfigError):
        load_config(config_path, ask=prompter.ask, say=prompter.say)

    config_path = write_config(tmp_path, "token: abc\neditor: vim\nsandbox: maybe\n")
    with pytest.raises(InvalidConfigError):
        load_config(config_path, ask=prompter.ask, say=prompter.say)
