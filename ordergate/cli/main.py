"""
ordergate CLI - command-line entry point.

    ordergate demo --fast
    ordergate place o1 item1 2 100 "123 Main St" --stock item1=10
    ordergate env-template .env.template

This creates the 'ordergate' command via entry point in pyproject.toml.
"""

from ordergate.cli.app import cli


def main() -> None:
    """Main entry point for the ordergate CLI."""
    cli()


if __name__ == "__main__":
    main()
