"""
Tests for configuration management system.
"""

import pytest

from hmm_engine.config import (
    ConfigManager,
    get_config, set_config, update_config,
    load_config_file, save_config_file,
    get_all_config, reset_config
)


def test_default_config():
    """Test that default configuration is loaded correctly."""
    assert get_config('hmm', 'final_state') == 'F'
    assert get_config('hmm', 'precision') == 6
    assert get_config('training', 'max_iterations') is None
    assert get_config('training', 'refine_after_segmentation') is False
    assert get_config('logging', 'level') == 'INFO'


def test_get_config_section():
    """Test getting entire configuration sections."""
    hmm_config = get_config('hmm')
    assert isinstance(hmm_config, dict)
    assert 'final_state' in hmm_config
    assert 'precision' in hmm_config


def test_set_config():
    """Test setting individual configuration values."""
    set_config('hmm', 'precision', 4)
    assert get_config('hmm', 'precision') == 4

    set_config('test_section', 'test_key', 'test_value')
    assert get_config('test_section', 'test_key') == 'test_value'


def test_update_config():
    """Test updating configuration with dictionary."""
    update_config({
        'training': {
            'max_iterations': 50,
            'new_setting': True
        },
        'new_section': {
            'key1': 'value1'
        }
    })

    assert get_config('training', 'max_iterations') == 50
    assert get_config('training', 'new_setting') is True
    assert get_config('new_section', 'key1') == 'value1'

    # Other values are preserved
    assert get_config('training', 'refine_after_segmentation') is False


def test_config_file_operations(temp_dir):
    """Test saving and loading configuration files."""
    config_file = temp_dir / "nested" / "test_config.json"

    set_config('hmm', 'final_state', 'END')
    set_config('test', 'value', 123)

    save_config_file(str(config_file))
    assert config_file.exists()

    reset_config()
    assert get_config('hmm', 'final_state') == 'F'
    assert get_config('test', 'value') is None

    load_config_file(str(config_file))
    assert get_config('hmm', 'final_state') == 'END'
    assert get_config('test', 'value') == 123


def test_get_all_config():
    """Test getting complete configuration dictionary."""
    all_config = get_all_config()

    assert 'hmm' in all_config
    assert 'training' in all_config
    assert 'logging' in all_config

    # Modifying the copy doesn't touch the manager
    all_config['hmm']['precision'] = 99
    assert get_config('hmm', 'precision') == 6


def test_reset_config():
    """Test resetting configuration to defaults."""
    set_config('hmm', 'precision', 3)
    set_config('custom', 'key', 'value')

    reset_config()

    assert get_config('hmm', 'precision') == 6
    assert get_config('custom', 'key') is None


def test_invalid_config_file(temp_dir):
    """Test handling of invalid configuration files."""
    with pytest.raises(ValueError):
        load_config_file(str(temp_dir / "nonexistent.json"))

    invalid_file = temp_dir / "invalid.json"
    invalid_file.write_text("{ invalid json }")

    with pytest.raises(ValueError):
        load_config_file(str(invalid_file))


def test_environment_overrides(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv('HMM_ENGINE_PRECISION', '4')
    monkeypatch.setenv('HMM_ENGINE_MAX_ITERATIONS', '25')
    monkeypatch.setenv('HMM_ENGINE_LOG_LEVEL', 'DEBUG')

    manager = ConfigManager()

    assert manager.get('hmm', 'precision') == 4
    assert manager.get('training', 'max_iterations') == 25
    assert manager.get('logging', 'level') == 'DEBUG'


def test_environment_unbounded_iterations(monkeypatch):
    """Test that 'none' keeps re-estimation unbounded."""
    monkeypatch.setenv('HMM_ENGINE_MAX_ITERATIONS', 'none')

    manager = ConfigManager()

    assert manager.get('training', 'max_iterations') is None


def test_invalid_environment_value(monkeypatch):
    """Test that invalid environment values are ignored with a warning."""
    monkeypatch.setenv('HMM_ENGINE_PRECISION', 'six')

    with pytest.warns(UserWarning):
        manager = ConfigManager()

    assert manager.get('hmm', 'precision') == 6


def test_environment_config_file(monkeypatch, temp_dir):
    """Test loading a config file named by HMM_ENGINE_CONFIG."""
    config_file = temp_dir / "env_config.json"
    config_file.write_text('{"hmm": {"final_state": "STOP"}}')
    monkeypatch.setenv('HMM_ENGINE_CONFIG', str(config_file))

    manager = ConfigManager()

    assert manager.get('hmm', 'final_state') == 'STOP'
    assert manager.get('hmm', 'precision') == 6


def test_invalid_environment_log_level(monkeypatch):
    """Test that an unknown log level name is ignored with a warning."""
    monkeypatch.setenv('HMM_ENGINE_LOG_LEVEL', 'verbose')

    with pytest.warns(UserWarning, match="HMM_ENGINE_LOG_LEVEL"):
        reset_config()

    assert get_config('logging', 'level') == 'INFO'


def test_environment_log_level_is_normalized(monkeypatch):
    """Test that level names are accepted in any case."""
    monkeypatch.setenv('HMM_ENGINE_LOG_LEVEL', 'warning')

    manager = ConfigManager()

    assert manager.get('logging', 'level') == 'WARNING'
