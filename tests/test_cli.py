"""Tests for CLI parsing, configuration and the main entry point."""

import logging
import os
from unittest.mock import AsyncMock, patch

import pytest

import depfetch
from args import parse_args
from cli_config import apply_cli_overrides, apply_config, apply_env_overrides, load_config
from common.errors import FetchError, PackageManagerNotFoundError
from common.logging_utils import configure_logging
from constants import Constants, ExitCodes
from fetch import FetchOptions


class TestArgParsing:
    """Tests for 'depfetch' argument parsing."""

    def test_fetch(self):
        ns = parse_args(["fetch", "left-pad@^1.0.0", "/tmp/app"])
        assert ns.action == "fetch"
        assert ns.TARGET == "left-pad@^1.0.0"
        assert ns.DEST == "/tmp/app"
        assert ns.SAVE is False
        assert ns.SAVE_EXACT is False

    def test_fetch_save_exact(self):
        ns = parse_args(["fetch", "left-pad", "/tmp/app", "--save-exact"])
        assert ns.SAVE_EXACT is True

    def test_uninstall_save(self):
        ns = parse_args(["uninstall", "left-pad", "/tmp/app", "--save"])
        assert ns.action == "uninstall"
        assert ns.SAVE is True

    def test_global_options(self):
        ns = parse_args(["--loglevel", "debug", "--npm", "pnpm", "check"])
        assert ns.LOG_LEVEL == "DEBUG"
        assert ns.NPM_COMMAND == "pnpm"
        assert ns.action == "check"

    def test_action_required(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args([])
        assert exc_info.value.code == 2
        # usage errors come from argparse, not from ExitCodes
        assert exc_info.value.code not in [code.value for code in ExitCodes]


class TestConfig:
    """YAML config, environment and CLI precedence."""

    def test_load_and_apply(self, tmp_path):
        cfg_file = tmp_path / "depfetch.yml"
        cfg_file.write_text(
            "npm_command: /opt/node/bin/npm\n"
            "search_paths:\n  - /opt/shared/node_modules\n"
            "unknown_key: 1\n"
        )
        cfg = load_config(str(cfg_file))
        assert "unknown_key" not in cfg
        apply_config(cfg)
        assert Constants.NPM_COMMAND == "/opt/node/bin/npm"
        assert Constants.EXTRA_SEARCH_PATHS == ["/opt/shared/node_modules"]

    def test_missing_file_returns_empty(self, tmp_path):
        assert load_config(str(tmp_path / "nope.yml")) == {}

    def test_invalid_yaml_returns_empty(self, tmp_path):
        cfg_file = tmp_path / "bad.yml"
        cfg_file.write_text("npm_command: [unclosed\n")
        assert load_config(str(cfg_file)) == {}

    def test_env_overrides_file(self, monkeypatch):
        apply_config({"npm_command": "from-file"})
        monkeypatch.setenv(Constants.NPM_COMMAND_ENV, "from-env")
        apply_env_overrides()
        assert Constants.NPM_COMMAND == "from-env"

    def test_cli_overrides_env(self, monkeypatch):
        monkeypatch.setenv(Constants.NPM_COMMAND_ENV, "from-env")
        apply_env_overrides()
        apply_cli_overrides(parse_args(["--npm", "from-cli", "check"]))
        assert Constants.NPM_COMMAND == "from-cli"

    def test_log_level_from_file_stays_out_of_environment(self):
        apply_config({"log_level": "debug"})
        assert Constants.LOG_LEVEL == "DEBUG"
        assert Constants.LOG_LEVEL_ENV not in os.environ

    def test_cli_log_level_leaves_environment_alone(self):
        apply_cli_overrides(parse_args(["--loglevel", "warning", "check"]))
        assert Constants.LOG_LEVEL_ENV not in os.environ
        assert Constants.LOG_LEVEL is None

    def test_config_search_paths_feed_resolution(self, monkeypatch):
        from resolution import read_search_paths
        monkeypatch.setenv("NODE_PATH", "/from/env")
        apply_config({"search_paths": ["/from/config"]})
        assert read_search_paths() == ["/from/env", "/from/config"]


class TestMain:
    """depfetch.main() dispatch and exit codes."""

    @pytest.fixture(autouse=True)
    def _root_handler(self):
        # bind the console handler before capsys swaps sys.stderr
        configure_logging()

    def test_fetch_prints_path(self, capsys):
        with patch("depfetch.fetch", new=AsyncMock(return_value="/tmp/app/node_modules/left-pad")) as m:
            with pytest.raises(SystemExit) as exc_info:
                depfetch.main(["fetch", "left-pad", "/tmp/app", "--save"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == "/tmp/app/node_modules/left-pad"
        m.assert_awaited_once_with("left-pad", "/tmp/app", FetchOptions(save=True, save_exact=False))

    def test_fetch_failure_exit_code(self):
        err = FetchError("boom", kind="subprocess_failure")
        with patch("depfetch.fetch", new=AsyncMock(side_effect=err)):
            with pytest.raises(SystemExit) as exc_info:
                depfetch.main(["fetch", "left-pad", "/tmp/app"])
        assert exc_info.value.code == 1

    def test_uninstall(self):
        with patch("depfetch.uninstall", new=AsyncMock(return_value=None)) as m:
            with pytest.raises(SystemExit) as exc_info:
                depfetch.main(["uninstall", "left-pad", "/tmp/app"])
        assert exc_info.value.code == 0
        m.assert_awaited_once_with("left-pad", "/tmp/app", FetchOptions(save=False))

    def test_check_missing_npm(self):
        missing = AsyncMock(side_effect=PackageManagerNotFoundError("npm missing"))
        with patch("depfetch.is_package_manager_available", new=missing):
            with pytest.raises(SystemExit) as exc_info:
                depfetch.main(["check"])
        assert exc_info.value.code == 1

    def test_loglevel_option_sets_root_level(self):
        root = logging.getLogger()
        previous = root.level
        try:
            with patch("depfetch.is_package_manager_available", new=AsyncMock(return_value="/usr/bin/npm")):
                with pytest.raises(SystemExit):
                    depfetch.main(["--loglevel", "ERROR", "check"])
            assert root.level == logging.ERROR
            assert Constants.LOG_LEVEL_ENV not in os.environ
        finally:
            root.setLevel(previous)

    def test_logfile(self, tmp_path):
        log_file = tmp_path / "depfetch.log"
        with patch("depfetch.is_package_manager_available", new=AsyncMock(return_value="/usr/bin/npm")):
            with pytest.raises(SystemExit):
                depfetch.main(["--logfile", str(log_file), "check"])
        for handler in list(logging.getLogger().handlers):
            if isinstance(handler, logging.FileHandler):
                logging.getLogger().removeHandler(handler)
                handler.close()
        assert os.path.exists(log_file)
