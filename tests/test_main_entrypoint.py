import git_auto_commit.__main__ as entry_module
import git_auto_commit.cli as cli_module


def test_module_entry_uses_cli_main():
    assert entry_module.main is cli_module.main


def test_cli_main_returns_exit_code(monkeypatch):
    monkeypatch.setattr(cli_module.CLI, "run", lambda self, argv: 7)
    assert cli_module.main(["--en"]) == 7
