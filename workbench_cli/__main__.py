"""Run the workbench CLI with ``python -m workbench_cli`` or the ``workbench`` script."""

from .cli import main as cli_main


def run() -> int:
    return cli_main()


def main() -> int:
    """Target of the ``workbench`` console script declared in pyproject.toml."""
    return run()


if __name__ == "__main__":
    raise SystemExit(run())
