"""Test YAML schema validation and config loading.

Tests for src.utils.validators:
    - Shipped configs/flow_v1.yaml loads and matches the documented defaults
    - Defaults apply when sections are omitted
    - Reject invalid configs with the offending key in the message
    - Schema versioning (flow.v1 only)
    - Missing files raise FileNotFoundError; malformed YAML and bad content
      raise ConfigError

Run:
    pytest tests/test_schemas.py -v
"""

from pathlib import Path

import pytest
import yaml

from src.utils import validators
from src.utils.validators import ConfigError, FlowConfigV1, load_flow_config, parse_flow_config


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture(scope="module")
def project_root():
    """Project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def write_yaml(tmp_path):
    """Write a mapping to a temporary YAML file and return its path."""
    def _write(data, name="flow.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path
    return _write


# ============================================================================
# VALID CONFIGS
# ============================================================================

def test_load_shipped_config(project_root):
    cfg = load_flow_config(project_root / "configs/flow_v1.yaml")

    assert cfg.schema_version == "flow.v1"
    assert cfg.grid.resolution == (1024, 1024)
    assert cfg.grid.xrange == (-6.1, 6.1)
    assert cfg.field.name == "saddle_spiral"
    assert cfg.field.nudge == 0.02
    assert cfg.seeding.points_per_border == 24
    assert cfg.seeding.rewind_iterations == 1000
    assert cfg.seeding.norm_threshold == 0.5
    assert cfg.animation.frames == 1200
    assert cfg.logging.log_file is None


def test_defaults_when_sections_omitted():
    cfg = parse_flow_config({"schema": "flow.v1"})
    assert cfg == FlowConfigV1()
    assert cfg.animation.respawn is True


def test_logging_section_maps_to_setup_kwargs():
    cfg = parse_flow_config({"logging": {"log_level": "debug", "json": True}})
    kwargs = cfg.logging.model_dump(by_alias=True)
    assert kwargs == {"log_level": "DEBUG", "log_file": None, "json": True, "color": True}


def test_load_from_file(write_yaml):
    path = write_yaml({
        "schema": "flow.v1",
        "grid": {"resolution": [320, 240], "xrange": [0, 4], "yrange": [-1, 2]},
        "field": {"name": "vortex"},
    })
    cfg = load_flow_config(path)
    assert cfg.grid.resolution == (320, 240)
    assert cfg.grid.yrange == (-1.0, 2.0)
    assert cfg.field.name == "vortex"
    assert cfg.field.nudge == 0.02


# ============================================================================
# INVALID CONFIGS
# ============================================================================

@pytest.mark.parametrize("data,match", [
    ({"grid": {"xrange": [1.0, -1.0]}}, "strictly increasing"),
    ({"grid": {"yrange": [0.5, 0.5]}}, "strictly increasing"),
    ({"grid": {"resolution": [0, 10]}}, "at least 1x1"),
    ({"field": {"nudge": 0.0}}, "nudge"),
    ({"field": {"name": "   "}}, "non-empty"),
    ({"seeding": {"points_per_border": 0}}, "points_per_border"),
    ({"seeding": {"border_dist": 7.0}}, "collapses"),
    ({"animation": {"frames": 0}}, "frames"),
    ({"logging": {"log_level": "LOUD"}}, "log_level"),
    ({"schema": "flow.v2"}, "Expected schema 'flow.v1'"),
])
def test_invalid_configs_rejected(data, match):
    with pytest.raises(ConfigError, match=match):
        parse_flow_config(data)


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


def test_non_mapping_rejected(write_yaml):
    path = write_yaml([1, 2, 3])
    with pytest.raises(ConfigError, match="must be a mapping"):
        load_flow_config(path)


def test_malformed_yaml_is_config_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("grid: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="not valid YAML"):
        load_flow_config(path)


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_flow_config(path) == FlowConfigV1()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Flow config not found"):
        validators.load_flow_config(tmp_path / "nope.yaml")


def test_error_message_names_source(write_yaml):
    path = write_yaml({"grid": {"xrange": [2, 1]}}, name="bad_grid.yaml")
    with pytest.raises(ConfigError, match="bad_grid.yaml"):
        load_flow_config(path)
