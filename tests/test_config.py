"""
Tests for LogConfiguration and LoggerReconfig.

Covers:
- Defaults
- snake_case / PascalCase keys, YAML and dict loading
- Validation on construction and on assignment
- Runtime reconfiguration (levels, destinations, log file, colors)
"""

from datetime import date

import pytest
from pydantic import ValidationError

from logroute.config import (
    DEFAULT_LOG_FILE_NAME,
    DEFAULT_MESSAGE_FORMAT,
    HostTextColors,
    LogConfiguration,
)
from logroute.core import Logger
from logroute.errors import ConfigurationError, ParameterValidationError
from logroute.reconfig import LoggerReconfig
from logroute.records import HostColor, LogLevel, MessageType


# ═══════════════════════════════════════════════════════════════════
#  LogConfiguration
# ═══════════════════════════════════════════════════════════════════

class TestDefaults:
    def test_values(self):
        config = LogConfiguration()
        assert config.log_level == LogLevel.INFORMATION
        assert config.write_to_host is True
        assert config.log_file_name == DEFAULT_LOG_FILE_NAME == "Results.log"
        assert config.overwrite_log_file is True
        assert config.include_date_in_file_name is True
        assert config.message_format == DEFAULT_MESSAGE_FORMAT
        assert config.has_log_file

    def test_host_colors(self):
        colors = HostTextColors()
        assert colors.error == HostColor.RED
        assert colors.warning == HostColor.YELLOW
        assert colors.information == HostColor.CYAN
        assert colors.success == HostColor.GREEN
        assert colors.for_type(MessageType.PARTIAL_FAILURE) == HostColor.YELLOW

    def test_instances_do_not_share_colors(self):
        a, b = LogConfiguration(), LogConfiguration()
        a.host_text_color.error = "Blue"
        assert b.host_text_color.error == HostColor.RED


class TestLoading:
    def test_snake_case_keys(self):
        config = LogConfiguration.from_dict({
            "log_level": "debug",
            "write_to_host": False,
            "log_file_name": "logs/run.log",
        })
        assert config.log_level == LogLevel.DEBUG
        assert config.write_to_host is False
        assert config.log_file_name == "logs/run.log"

    def test_pascal_case_keys(self):
        config = LogConfiguration.from_dict({
            "LogLevel": "Verbose",
            "OverwriteLogFile": False,
            "HostTextColor": {"PartialFailure": "DarkYellow"},
        })
        assert config.log_level == LogLevel.VERBOSE
        assert config.overwrite_log_file is False
        assert config.host_text_color.partial_failure == HostColor.DARK_YELLOW

    def test_level_as_int(self):
        assert LogConfiguration(log_level=1).log_level == LogLevel.ERROR

    def test_yaml_string(self):
        config = LogConfiguration.from_yaml_string(
            "LogLevel: Warning\n"
            "IncludeDateInFileName: false\n"
            "MessageFormat: '{MessageType}: {Message}'\n"
            "host_text_color:\n"
            "  error: darkred\n"
        )
        assert config.log_level == LogLevel.WARNING
        assert config.include_date_in_file_name is False
        assert config.message_format == "{MessageType}: {Message}"
        assert config.host_text_color.error == HostColor.DARK_RED

    def test_empty_yaml_gives_defaults(self):
        assert LogConfiguration.from_yaml_string("") == LogConfiguration()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "logging.yaml"
        path.write_text("log_level: error\nlog_file_name: ''\n", encoding="utf-8")
        config = LogConfiguration.from_yaml(path)
        assert config.log_level == LogLevel.ERROR
        assert not config.has_log_file

    def test_yaml_round_trip(self):
        config = LogConfiguration(log_level="debug", log_file_name="x.log")
        config.host_text_color.verbose = None
        loaded = LogConfiguration.from_yaml_string(config.to_yaml(by_alias=True))
        assert loaded == config

    def test_to_dict_uses_names(self):
        data = LogConfiguration(log_level="Warning").to_dict()
        assert data["log_level"] == "WARNING"
        assert data["host_text_color"]["error"] == "Red"

    def test_path_file_name(self, tmp_path):
        config = LogConfiguration(log_file_name=tmp_path / "run.log")
        assert config.log_file_name == str(tmp_path / "run.log")

    def test_none_message_format_means_default(self):
        assert LogConfiguration(message_format=None).message_format == DEFAULT_MESSAGE_FORMAT


class TestValidation:
    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            LogConfiguration(log_level="Critical")

    def test_invalid_level_type(self):
        with pytest.raises(ValidationError):
            LogConfiguration(log_level=2.5)

    def test_invalid_color(self):
        with pytest.raises(ValidationError, match="Purple"):
            LogConfiguration(host_text_color={"Error": "Purple"})

    def test_information_color_required(self):
        with pytest.raises(ValidationError):
            HostTextColors(information=None)

    def test_assignment_validated(self):
        config = LogConfiguration()
        with pytest.raises(ValidationError):
            config.log_level = "loud"
        assert config.log_level == LogLevel.INFORMATION

    def test_assignment_converts(self):
        config = LogConfiguration()
        config.log_level = "verbose"
        config.host_text_color.debug = "gray"
        assert config.log_level == LogLevel.VERBOSE
        assert config.host_text_color.debug == HostColor.GRAY

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_file_name_disables_file(self, name):
        assert not LogConfiguration(log_file_name=name).has_log_file

    def test_copy_is_independent(self):
        config = LogConfiguration()
        copy = config.copy_config()
        copy.log_level = LogLevel.OFF
        copy.host_text_color.error = "Blue"
        assert config.log_level == LogLevel.INFORMATION
        assert config.host_text_color.error == HostColor.RED


# ═══════════════════════════════════════════════════════════════════
#  LoggerReconfig
# ═══════════════════════════════════════════════════════════════════

@pytest.fixture
def reconfig(harness):
    return LoggerReconfig(harness.log)


class TestLoggerReconfig:
    def test_defaults_to_singleton(self):
        reconfig = LoggerReconfig()
        reconfig.set_level("Debug")
        assert Logger.instance().config.log_level == LogLevel.DEBUG

    def test_get_configuration_is_a_copy(self, harness, reconfig):
        snapshot = reconfig.get_configuration()
        snapshot.log_level = LogLevel.OFF
        harness.log.info("still on")
        assert harness.host.texts() == ["still on"]

    def test_live_mutation_visible_on_next_call(self, harness):
        harness.log.config.write_to_host = False
        harness.log.info("moved")
        assert harness.streams.texts() == ["moved"]

    def test_set_individual_settings(self, harness, reconfig):
        reconfig.set_configuration(log_level="Error", write_to_streams=True, message_format="! {Message}")
        harness.log.log_message("boom", is_error=True)
        harness.log.info("hidden")
        assert harness.streams.texts() == ["! boom"]
        assert harness.host.count == 0

    def test_unset_switches_keep_values(self, harness, reconfig):
        reconfig.set_configuration(write_to_streams=True)
        reconfig.set_configuration(log_level="Debug")
        assert harness.config.write_to_host is False

    @pytest.mark.parametrize("switches", [
        {"write_to_host": True, "write_to_streams": True},
        {"overwrite_log_file": True, "append_to_log_file": True},
        {"include_date_in_file_name": True, "exclude_date_from_file_name": True},
    ])
    def test_conflicting_switches(self, reconfig, switches):
        with pytest.raises(ConfigurationError, match="Only one of"):
            reconfig.set_configuration(**switches)

    def test_invalid_change_leaves_config_untouched(self, harness, reconfig):
        with pytest.raises(ConfigurationError):
            reconfig.set_configuration(log_level="Debug", host_text_color={"Error": "Purple"})
        assert harness.config.log_level == LogLevel.INFORMATION

    def test_replace_wholesale(self, harness, reconfig):
        new = reconfig.set_configuration({"LogLevel": "Off", "LogFileName": ""})
        assert harness.log.config is new
        harness.log.log_message("x", is_error=True)
        assert harness.host.count == 0

    def test_replace_with_invalid_dict(self, reconfig):
        with pytest.raises(ConfigurationError):
            reconfig.set_configuration({"LogLevel": "Loud"})

    def test_reset_configuration(self, harness, reconfig):
        reconfig.set_configuration(log_level="Off")
        config = reconfig.reset_configuration()
        assert config == LogConfiguration()
        assert harness.log.config is config

    def test_load_configuration(self, harness, reconfig, tmp_path):
        path = tmp_path / "logging.yaml"
        path.write_text("LogLevel: Verbose\nLogFileName: ''\nMessageFormat: '{Result}'\n")
        reconfig.load_configuration(path)
        harness.log.success()
        assert harness.host.texts() == ["SUCCESS"]

    def test_load_invalid_configuration(self, reconfig, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("LogLevel: Loud\n")
        with pytest.raises(ConfigurationError, match="bad.yaml"):
            reconfig.load_configuration(path)


class TestReconfigLogFile:
    def test_enable_and_disable(self, harness, reconfig, tmp_path):
        path = reconfig.enable_log_file("run.log", exclude_date_from_file_name=True)
        assert path == tmp_path / "run.log"
        harness.log.info("one")
        reconfig.disable_log_file()
        harness.log.info("two")
        assert harness.files.lines(path) == ["one"]
        assert reconfig.log_file_path() is None

    def test_enable_without_name_uses_default(self, reconfig, tmp_path):
        path = reconfig.enable_log_file(exclude_date_from_file_name=True)
        assert path == tmp_path / DEFAULT_LOG_FILE_NAME

    def test_enable_with_date(self, make_harness, tmp_path):
        h = make_harness()
        h.log.file_sink._today = lambda: date(2026, 2, 12)
        path = LoggerReconfig(h.log).enable_log_file("run.log", include_date_in_file_name=True)
        assert path == tmp_path / "run_20260212.log"

    def test_changing_file_settings_restarts_overwrite(self, harness, reconfig):
        path = reconfig.enable_log_file("run.log", overwrite_log_file=True, exclude_date_from_file_name=True)
        harness.log.info("a")
        harness.log.info("b")
        reconfig.enable_log_file("run.log", overwrite_log_file=True)
        harness.log.info("c")
        assert [op for op, _, _ in harness.files.calls] == ["create", "append", "create"]
        assert harness.files.lines(path) == ["c"]

    def test_append_switch(self, harness, reconfig):
        reconfig.enable_log_file("run.log", append_to_log_file=True, exclude_date_from_file_name=True)
        harness.log.info("a")
        harness.log.info("b")
        assert [op for op, _, _ in harness.files.calls] == ["append", "append"]


class TestReconfigColorsAndStatus:
    def test_set_host_text_color(self, harness, reconfig):
        reconfig.set_host_text_color("Success", "Blue")
        harness.log.success("ok")
        assert harness.host.entries[0].color == HostColor.BLUE

    def test_clear_color_falls_back_to_information(self, harness, reconfig):
        reconfig.set_host_text_color(MessageType.DEBUG, None)
        reconfig.set_level("Debug")
        harness.log.debug("d")
        assert harness.host.entries[0].color == HostColor.CYAN

    def test_invalid_color(self, reconfig):
        with pytest.raises(ConfigurationError):
            reconfig.set_host_text_color("Error", "Purple")

    def test_invalid_message_type(self, reconfig):
        with pytest.raises(ParameterValidationError):
            reconfig.set_host_text_color("Critical", "Blue")

    def test_level_round_trip(self, reconfig):
        reconfig.set_level(4)
        assert reconfig.get_level() == LogLevel.DEBUG

    def test_status(self, reconfig):
        status = reconfig.status()
        assert status["log_level"] == "INFORMATION"
        assert status["configuration"]["LogLevel"] == "INFORMATION"
        assert status["configuration"]["MessageFormat"] == "{Message}"
