"""
Environment variable management with .env file support.

Loads .env files with python-dotenv, reads typed values and substitutes
${VAR} references in configuration files.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

ENV_PREFIX = "ORDERGATE_"

# ${NAME}, ${NAME:-fallback}, ${NAME:?message}
_BRACED_REF = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<op>[?-])(?P<arg>[^}]*))?\}")
# $NAME (upper-case names only, so prices like "$5" stay untouched)
_BARE_REF = re.compile(r"\$(?P<name>[A-Z_][A-Z0-9_]*)")


class EnvManager:
    """
    Manages environment variables for ordergate.

    Example:
        >>> env = EnvManager()
        >>> env.load()  # Loads .env if it exists
        >>> attempts = env.get_int("ORDERGATE_PAYMENT_MAX_ATTEMPTS", 3)
    """

    def __init__(self, project_root: Path | str | None = None, auto_load: bool = True):
        """
        Args:
            project_root: Directory searched for the .env file (default: cwd)
            auto_load: Load the .env file immediately if found
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self._loaded = False

        if auto_load:
            self.load()

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self, env_file: str | Path | None = None, override: bool = False) -> bool:
        """
        Load environment variables from a .env file.

        Args:
            env_file: Path to the .env file (defaults to .env in project root)
            override: Whether to override variables already set

        Returns:
            True if the file was loaded, False if it does not exist
        """
        env_file = self.project_root / ".env" if env_file is None else Path(env_file)

        if not env_file.exists():
            return False

        load_dotenv(env_file, override=override)
        self._loaded = True
        return True

    def get(self, key: str, default: str | None = None, required: bool = False) -> str | None:
        """
        Get an environment variable value.

        Raises:
            ValueError: If required=True and the variable is not set
        """
        value = os.environ.get(key, default)

        if required and value is None:
            msg = f"Required environment variable not set: {key}"
            raise ValueError(msg)

        return value

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get environment variable as boolean."""
        value = (self.get(key) or "").lower()
        if value in ("true", "1", "yes", "on"):
            return True
        if value in ("false", "0", "no", "off"):
            return False
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        """Get environment variable as integer."""
        try:
            return int(self.get(key, str(default)))
        except (ValueError, TypeError):
            return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        """Get environment variable as float."""
        try:
            return float(self.get(key, str(default)))
        except (ValueError, TypeError):
            return default

    def substitute(self, text: str) -> str:
        """
        Expand variable references in one value of an ordergate YAML file.

        ${ITEM1_STOCK:-10} falls back to 10 when ITEM1_STOCK is unset,
        ${PAYMENT_DELAY:?set the payment latency} raises ValueError with that
        message, and a plain ${NAME} or $NAME that is unset is kept verbatim.

        Example:
            >>> os.environ["ITEM1_STOCK"] = "10"
            >>> env.substitute("${ITEM1_STOCK}")
            '10'
        """
        text = _BRACED_REF.sub(self._resolve_braced, text)
        return _BARE_REF.sub(lambda m: os.environ.get(m["name"], m.group(0)), text)

    @staticmethod
    def _resolve_braced(match: re.Match) -> str:
        name, op, arg = match["name"], match["op"], match["arg"]
        value = os.environ.get(name)
        if value is not None:
            return value
        if op == "-":
            return arg
        if op == "?":
            raise ValueError(arg or f"Required variable not set: {name}")
        return match.group(0)

    def substitute_dict(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Expand references throughout a parsed configuration mapping.

        Nested sections (inventory, payment, ...) and lists are walked;
        non-string scalars such as YAML numbers pass through unchanged.
        """
        return {key: self._substitute_value(value) for key, value in data.items()}

    def _substitute_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return self.substitute(value)
        if isinstance(value, dict):
            return self.substitute_dict(value)
        if isinstance(value, list):
            return [self._substitute_value(item) for item in value]
        return value

    @staticmethod
    def create_env_template(target_path: Path | str, stock: dict[str, int] | None = None) -> None:
        """
        Write a .env template listing every variable OrderConfig.from_env reads.

        Args:
            target_path: Path of the file to write
            stock: Optional seed stock written as ORDERGATE_STOCK
        """
        stock_value = ",".join(f"{item}={qty}" for item, qty in (stock or {}).items())

        lines = [
            "# ordergate environment configuration",
            "# Copy this file to .env and adjust the values",
            "",
            "# Inventory seed (item=quantity, comma separated)",
            f"{ENV_PREFIX}STOCK={stock_value}",
            f"{ENV_PREFIX}RESERVE_ON_COMPLETION=false",
            "",
            "# Payment gateway",
            f"{ENV_PREFIX}PAYMENT_MAX_ATTEMPTS=3",
            f"{ENV_PREFIX}PAYMENT_DELAY=1.0",
            f"{ENV_PREFIX}REFUND_DELAY=0.5",
            "",
            "# Shipping service",
            f"{ENV_PREFIX}SHIPPING_DELAY=1.0",
            f"{ENV_PREFIX}CANCEL_SHIPMENT_DELAY=0.5",
            "",
            "# Observability",
            f"{ENV_PREFIX}METRICS=true",
            f"{ENV_PREFIX}LOGGING=true",
            f"{ENV_PREFIX}LOG_LEVEL=INFO  # DEBUG, INFO, WARNING, ERROR",
            "",
        ]

        Path(target_path).write_text("\n".join(lines))


# Global instance
_global_env: EnvManager | None = None


def get_env() -> EnvManager:
    """Get the global environment manager instance."""
    global _global_env
    if _global_env is None:
        _global_env = EnvManager(auto_load=False)
    return _global_env


def load_env(project_root: Path | str | None = None, override: bool = False) -> bool:
    """
    Load environment variables from a .env file using the global EnvManager.

    Returns:
        True if a .env file was loaded
    """
    env = get_env()
    if project_root:
        env.project_root = Path(project_root)
    return env.load(override=override)
