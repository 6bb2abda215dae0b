import importlib.util
from pathlib import Path
from typing import Optional


def load_module(script_path: Path, module_name: Optional[str] = None):
    if module_name is None:
        module_name = script_path.stem
    spec = importlib.util.spec_from_file_location(module_name, str(script_path))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
