"""
Allow running ordergate as a module: python -m ordergate
"""

from ordergate.cli.app import cli

if __name__ == "__main__":
    cli()
