"""
Tests for cmakekits.yaml parsing.
"""

import pytest

from cmakekits.config.parser import ModuleSettings, parse_config, parse_config_data
from cmakekits.core.exceptions import ConfigError


def test_parse_project_config(cmake_project):
    config = parse_config(cmake_project / "cmakekits.yaml")

    assert config.registry.build_type_names() == ["Debug", "Release"]
    assert config.registry.build_kit_names() == ["gcc", "clang", "vs2022"]
    assert config.settings == ModuleSettings()
    assert config.source == cmake_project / "cmakekits.yaml"


def test_on_off_values_survive_yaml(tmp_path):
    config_file = tmp_path / "cmakekits.yaml"
    config_file.write_text(
        """
build_types:
  Release:
    build_type: Release
    cmake_usr_args:
      ENABLE_LTO: ON
      BUILD_TESTING: off
build_kits:
  gcc: {}
"""
    )

    config = parse_config(config_file)

    assert config.registry.build_type("Release").cmake_usr_args == {
        "ENABLE_LTO": "ON",
        "BUILD_TESTING": "OFF",
    }


def test_settings_section(tmp_path):
    config_file = tmp_path / "cmakekits.yaml"
    config_file.write_text(
        """
settings:
  cmd: /opt/cmake/bin/cmake
  build_dir: "{cwd}/out/{build_type}"
  source_dir: src
  dap_name: gdb
  clangd_cmdline: [clangd-18]
build_types:
  Debug: {build_type: Debug}
build_kits:
  gcc:
"""
    )

    settings = parse_config(config_file).settings

    assert settings.cmd == "/opt/cmake/bin/cmake"
    assert settings.build_dir == "{cwd}/out/{build_type}"
    assert settings.source_dir == "src"
    assert settings.dap_name == "gdb"
    assert settings.clangd_cmdline == ["clangd-18"]


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Configuration file not found"):
        parse_config(tmp_path / "cmakekits.yaml")


def test_empty_file(tmp_path):
    config_file = tmp_path / "cmakekits.yaml"
    config_file.write_text("")

    with pytest.raises(ConfigError, match="empty"):
        parse_config(config_file)


def test_invalid_yaml(tmp_path):
    config_file = tmp_path / "cmakekits.yaml"
    config_file.write_text("build_types: [unclosed")

    with pytest.raises(ConfigError, match="Invalid YAML syntax"):
        parse_config(config_file)


def test_requires_build_types_and_kits():
    with pytest.raises(ConfigError, match="At least one build type"):
        parse_config_data({"build_kits": {"gcc": {}}})
    with pytest.raises(ConfigError, match="At least one build kit"):
        parse_config_data({"build_types": {"Debug": {"build_type": "Debug"}}})


def test_unknown_section():
    with pytest.raises(ConfigError, match="Unknown configuration sections: kits"):
        parse_config_data({"kits": {}})


def test_unknown_setting():
    with pytest.raises(ConfigError, match="settings contains unknown keys: generator"):
        parse_config_data(
            {
                "settings": {"generator": "Ninja"},
                "build_types": {"Debug": {"build_type": "Debug"}},
                "build_kits": {"gcc": {}},
            }
        )


@pytest.mark.parametrize(
    "template, message",
    [
        ("{cwd}/out/{project}", r"unknown placeholder \{project\}"),
        ("{cwd}/out/{build_type", "invalid template"),
        ("{cwd}/out}", "invalid template"),
        ("{0}/out", "invalid template"),
    ],
)
def test_invalid_build_dir_template(template, message):
    with pytest.raises(ConfigError, match=message):
        parse_config_data(
            {
                "settings": {"build_dir": template},
                "build_types": {"Debug": {"build_type": "Debug"}},
                "build_kits": {"gcc": {}},
            }
        )
