# ============================================
# FILE: ordergate/cli/__init__.py
# ============================================
"""
CLI module for ordergate - contains command-line interface components.
"""

from ordergate.cli.main import main

__all__ = ["main"]
