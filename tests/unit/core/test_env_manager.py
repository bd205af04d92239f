"""Test environment variable management and .env loading."""

import os

import pytest

from ordergate.core import env as env_module
from ordergate.core.config import OrderConfig
from ordergate.core.env import EnvManager, get_env, load_env


@pytest.fixture
def env(tmp_path):
    return EnvManager(project_root=tmp_path, auto_load=False)


class TestEnvManager:
    """Test EnvManager functionality."""

    def test_get_with_default(self, env, monkeypatch):
        monkeypatch.delenv("ORDERGATE_TEST_VAR", raising=False)
        assert env.get("ORDERGATE_TEST_VAR", "default") == "default"

        monkeypatch.setenv("ORDERGATE_TEST_VAR", "value")
        assert env.get("ORDERGATE_TEST_VAR") == "value"

    def test_get_required(self, env, monkeypatch):
        monkeypatch.delenv("ORDERGATE_TEST_VAR", raising=False)

        with pytest.raises(ValueError, match="ORDERGATE_TEST_VAR"):
            env.get("ORDERGATE_TEST_VAR", required=True)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("true", True),
            ("True", True),
            ("1", True),
            ("on", True),
            ("false", False),
            ("0", False),
            ("no", False),
            ("maybe", False),
        ],
    )
    def test_get_bool(self, env, monkeypatch, value, expected):
        monkeypatch.setenv("ORDERGATE_TEST_BOOL", value)
        assert env.get_bool("ORDERGATE_TEST_BOOL") is expected

    def test_get_bool_default(self, env, monkeypatch):
        monkeypatch.delenv("ORDERGATE_TEST_BOOL", raising=False)
        assert env.get_bool("ORDERGATE_TEST_BOOL", True) is True

    def test_get_int_and_float(self, env, monkeypatch):
        monkeypatch.setenv("ORDERGATE_TEST_INT", "42")
        monkeypatch.setenv("ORDERGATE_TEST_FLOAT", "0.25")
        assert env.get_int("ORDERGATE_TEST_INT") == 42
        assert env.get_float("ORDERGATE_TEST_FLOAT") == 0.25

        monkeypatch.setenv("ORDERGATE_TEST_INT", "invalid")
        assert env.get_int("ORDERGATE_TEST_INT", default=10) == 10


class TestSubstitution:
    def test_braced_and_bare(self, env, monkeypatch):
        monkeypatch.setenv("ITEM1_STOCK", "10")

        assert env.substitute("${ITEM1_STOCK}") == "10"
        assert env.substitute("stock=$ITEM1_STOCK") == "stock=10"

    def test_default_operator(self, env, monkeypatch):
        monkeypatch.delenv("ORDERGATE_MISSING", raising=False)
        assert env.substitute("${ORDERGATE_MISSING:-5}") == "5"

    def test_required_operator(self, env, monkeypatch):
        monkeypatch.delenv("ORDERGATE_MISSING", raising=False)

        with pytest.raises(ValueError, match="stock is required"):
            env.substitute("${ORDERGATE_MISSING:?stock is required}")

    def test_unset_variable_left_in_place(self, env, monkeypatch):
        monkeypatch.delenv("ORDERGATE_MISSING", raising=False)
        assert env.substitute("${ORDERGATE_MISSING}") == "${ORDERGATE_MISSING}"

    def test_substitute_dict(self, env, monkeypatch):
        monkeypatch.setenv("ITEM1_STOCK", "10")

        data = {
            "inventory": {"stock": {"item1": "${ITEM1_STOCK}"}},
            "hosts": ["${ITEM1_STOCK}", {"n": "$ITEM1_STOCK"}, 3],
            "delay": 0.5,
        }

        assert env.substitute_dict(data) == {
            "inventory": {"stock": {"item1": "10"}},
            "hosts": ["10", {"n": "10"}, 3],
            "delay": 0.5,
        }

    def test_set_variable_wins_over_fallback(self, env, monkeypatch):
        monkeypatch.setenv("ITEM1_STOCK", "7")
        assert env.substitute("${ITEM1_STOCK:-10}") == "7"
        assert env.substitute("${ITEM1_STOCK:?unused}") == "7"

    def test_prices_and_lower_case_names_untouched(self, env, monkeypatch):
        monkeypatch.setenv("item1", "nope")
        assert env.substitute("costs $5 for $item1") == "costs $5 for $item1"

    def test_nested_lists_in_config_file(self, env, monkeypatch):
        monkeypatch.setenv("ITEM1_STOCK", "10")
        monkeypatch.delenv("ORDERGATE_MISSING", raising=False)

        data = {"batches": [["${ITEM1_STOCK}", "${ORDERGATE_MISSING:-2}"], [None, True]]}

        assert env.substitute_dict(data) == {"batches": [["10", "2"], [None, True]]}


class TestDotenv:
    def test_load_missing_file(self, env):
        assert env.load() is False
        assert env.loaded is False

    def test_load_file(self, env, tmp_path, monkeypatch):
        monkeypatch.delenv("ORDERGATE_DOTENV_VALUE", raising=False)
        (tmp_path / ".env").write_text("ORDERGATE_DOTENV_VALUE=from-file\n")

        assert env.load() is True
        assert env.loaded is True
        assert os.environ["ORDERGATE_DOTENV_VALUE"] == "from-file"
        monkeypatch.delenv("ORDERGATE_DOTENV_VALUE")

    def test_existing_variables_not_overridden(self, env, tmp_path, monkeypatch):
        monkeypatch.setenv("ORDERGATE_DOTENV_VALUE", "from-shell")
        (tmp_path / ".env").write_text("ORDERGATE_DOTENV_VALUE=from-file\n")

        env.load()

        assert os.environ["ORDERGATE_DOTENV_VALUE"] == "from-shell"

    def test_load_env_uses_global_manager(self, tmp_path, monkeypatch):
        monkeypatch.setattr(env_module, "_global_env", None)
        monkeypatch.delenv("ORDERGATE_DOTENV_VALUE", raising=False)
        (tmp_path / ".env").write_text("ORDERGATE_DOTENV_VALUE=global\n")

        assert load_env(tmp_path) is True
        assert get_env().project_root == tmp_path
        assert os.environ["ORDERGATE_DOTENV_VALUE"] == "global"
        monkeypatch.delenv("ORDERGATE_DOTENV_VALUE")


def test_env_template_round_trips_through_config(tmp_path, monkeypatch):
    """A generated template, loaded as .env, yields a valid configuration."""
    target = tmp_path / ".env"
    EnvManager.create_env_template(target, {"item1": 10, "item2": 5})

    content = target.read_text()
    assert "ORDERGATE_STOCK=item1=10,item2=5" in content
    assert "ORDERGATE_PAYMENT_MAX_ATTEMPTS=3" in content

    # Clear every templated variable; monkeypatch removes the loaded values afterwards
    for line in content.splitlines():
        if line.startswith("ORDERGATE_"):
            monkeypatch.delenv(line.partition("=")[0], raising=False)

    monkeypatch.setattr(env_module, "_global_env", EnvManager(project_root=tmp_path, auto_load=False))
    config = OrderConfig.from_env()

    assert config.initial_stock == {"item1": 10, "item2": 5}
    assert config.payment_max_attempts == 3
    assert len(config.listeners) == 2
