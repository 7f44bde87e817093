from sqlbridge.cli import add_bridge_commands


def run_cli() -> None:  # pragma: no cover
    """SQLBridge CLI."""
    add_bridge_commands()()


if __name__ == "__main__":  # pragma: no cover
    run_cli()
