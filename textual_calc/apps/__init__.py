"""Available calculator skins."""

import importlib
import inspect
import logging
from pathlib import Path

from ..core.base import AppRegistry, BaseCalculatorApp

logger = logging.getLogger("textual_calc.apps")


def discover_and_register_apps():
    """Automatically discover and register all apps in the apps directory."""
    apps_dir = Path(__file__).parent

    # Find all Python files in the apps directory (excluding __init__.py)
    for py_file in sorted(apps_dir.glob("*.py")):
        if py_file.name.startswith("__"):
            continue

        module_name = py_file.stem
        try:
            module = importlib.import_module(f".{module_name}", package=__name__)
        except ImportError as e:
            logger.warning(f"Skipping app module {module_name}: {e}")
            continue

        # Find all classes that inherit from BaseCalculatorApp
        for _name, obj in inspect.getmembers(module, inspect.isclass):
            if (issubclass(obj, BaseCalculatorApp) and
                obj is not BaseCalculatorApp and
                hasattr(obj, 'APP_CONFIG')):
                AppRegistry.register(obj)


# Automatically discover and register all apps
discover_and_register_apps()
