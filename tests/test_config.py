"""
test_config.py
"""
import json

import pytest

from fractalviewer.config import (
    SETTINGS_PATH,
    ConfigError,
    ViewerConfig,
    config_from_args,
    load_settings,
    parse_julia_seed,
)
from fractalviewer.controller import ZoomLimits
from fractalviewer.plane import MODE_JULIA, MODE_MANDELBROT


def test_shipped_settings_are_valid():
    settings = load_settings(SETTINGS_PATH)
    config = ViewerConfig.from_settings(settings).validate()
    assert config.mode_id == MODE_MANDELBROT
    assert config.zoom_factor == 0.5
    assert config.bailout_radius == 2.0
    assert config.zoom_limits() == ZoomLimits(1e-13, 16.0)


def test_missing_default_settings_only_warn(tmp_path, capsys):
    assert load_settings(str(tmp_path / 'absent.json')) is None
    assert "Warning:" in capsys.readouterr().out


def test_missing_explicit_settings_is_an_error(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(str(tmp_path / 'absent.json'), required=True)


def test_no_arguments_uses_shipped_defaults():
    config, args = config_from_args([])
    assert (config.width, config.height) == (800, 800)
    assert config.max_iterations == 500
    assert not args.verbose


def test_size_sets_both_dimensions():
    config, _ = config_from_args(['--size', '300', '--width', '640'])
    assert (config.width, config.height) == (300, 300)


def test_julia_flag_switches_mode():
    config, _ = config_from_args(['--julia=-0.835,-0.232'])
    assert config.mode == 'julia'
    assert config.julia_seed == complex(-0.835, -0.232)
    viewport = config.initial_viewport()
    assert viewport.mode == MODE_JULIA
    assert viewport.center == 0j
    assert viewport.seed == complex(-0.835, -0.232)


def test_flags_override_settings_file(tmp_path):
    path = tmp_path / 'custom.json'
    path.write_text(json.dumps({'max_iterations': 64, 'palette': 'Ocean', 'width': 320}))
    config, _ = config_from_args(['--settings', str(path), '--max-iterations', '128'])
    assert config.max_iterations == 128
    assert config.palette == 'Ocean'
    assert config.width == 320


@pytest.mark.parametrize('argv', [
    ['--width=0'],
    ['--height=-5'],
    ['--max-iterations', '0'],
    ['--zoom-factor', '1.5'],
    ['--bailout-radius', '0'],
    ['--julia', '1,2,3'],
    ['--julia', 'x,2'],
    ['--julia', '1,y'],
])
def test_invalid_arguments_raise_config_error(argv):
    with pytest.raises(ConfigError):
        config_from_args(argv)


def test_julia_mode_needs_a_seed():
    with pytest.raises(ConfigError):
        ViewerConfig(mode='julia').validate()


@pytest.mark.parametrize('settings', [
    {'colour': 'red'},
    {'width': 'wide'},
    {'width': 12.5},
    {'palette': 'Nope'},
    {'mode': 'newton'},
    {'interior_color': [0, 0, 300]},
    {'min_scale': 1.0, 'max_scale': 0.5},
    {'width': float('inf')},
    {'interior_color': [0, 0, float('inf')]},
    {'mode': ['julia']},
    {'palette': {}},
    {'cycle_detection': 'false'},
    {'cycle_detection': 0},
])
def test_invalid_settings_raise_config_error(settings):
    with pytest.raises(ConfigError):
        ViewerConfig.from_settings(settings).validate()


def test_settings_seed_forms():
    from_list = ViewerConfig.from_settings({'julia_seed': [0.25, -0.5]})
    from_text = ViewerConfig.from_settings({'julia_seed': '0.25,-0.5'})
    assert from_list.julia_seed == from_text.julia_seed == complex(0.25, -0.5)


def test_parse_julia_seed():
    assert parse_julia_seed('-0.8,0.156') == complex(-0.8, 0.156)


def test_palette_from_config():
    config = ViewerConfig(palette='Grayscale', interior_color=(0, 0, 102))
    palette = config.make_palette()
    assert palette.name == 'Grayscale'
    assert palette.interior_color == (0, 0, 102)


def test_cycle_detection_accepts_booleans():
    assert ViewerConfig.from_settings({'cycle_detection': False}).cycle_detection is False
    config, _ = config_from_args(['--no-cycle-detection'])
    assert config.cycle_detection is False


def test_julia_seed_passes_through_as_complex():
    config = ViewerConfig().merged({'julia_seed': complex(0.3, 0.5), 'mode': 'julia'})
    assert config.validate().julia_seed == complex(0.3, 0.5)


def test_broken_settings_file_is_a_config_error(tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text('{"width": Infinity, "mode": ["julia"]}')
    with pytest.raises(ConfigError):
        config_from_args(['--settings', str(path)])
