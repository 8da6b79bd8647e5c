import importlib

from workbench_cli import __main__ as cli_entry


def test_console_module_entrypoint_delegates_to_cli_main(monkeypatch):
    monkeypatch.setattr(cli_entry, "cli_main", lambda: 7)

    assert cli_entry.run() == 7
    assert cli_entry.main() == 7


def test_cli_without_command_prints_help(capsys):
    cli = importlib.import_module("workbench_cli.cli")
    assert cli.main([]) == 0
    assert "usage: workbench" in capsys.readouterr().out
