from pathlib import Path

from image_marker.utils.misc import load_module


def test_load_module(tmp_path: Path):
    script = tmp_path / "plugin.py"
    script.write_text("VALUE = 42\n")
    module = load_module(script)
    assert module.VALUE == 42
    assert module.__name__ == "plugin"


def test_load_module_custom_name(tmp_path: Path):
    script = tmp_path / "plugin.py"
    script.write_text("NAME = __name__\n")
    module = load_module(script, module_name="image_marker.plugins.custom")
    assert module.NAME == "image_marker.plugins.custom"
