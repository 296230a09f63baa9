import json
import argparse
import importlib.util
from typing import Any, Dict, Union
from pathlib import Path

import yaml


def load_config_as_namespace(config_file: Union[str, Path]) -> argparse.Namespace:
    """Read a sectioned YAML (or JSON) run configuration.

    Args:
        config_file: ``.yaml``/``.yml`` files are parsed with PyYAML, anything
            else as JSON.

    Returns:
        One nested namespace per section, e.g. ``cfg.pipeline.seed``.

    Example:
        >>> cfg = load_config_as_namespace("configs/config.yaml")
        >>> cfg.pipeline.classify_both_directions
        False
    """
    path = Path(config_file)
    text = path.read_text()
    raw = yaml.safe_load(text) if path.suffix in (".yaml", ".yml") else json.loads(text)
    return dict_to_namespace(raw or {})


def _to_namespace(value: Any) -> Any:
    if isinstance(value, dict):
        return dict_to_namespace(value)
    if isinstance(value, list):
        return [_to_namespace(item) for item in value]
    return value


def _from_namespace(value: Any) -> Any:
    if isinstance(value, argparse.Namespace):
        return namespace_to_dict(value)
    if isinstance(value, list):
        return [_from_namespace(item) for item in value]
    return value


def dict_to_namespace(d: Dict[str, Any]) -> argparse.Namespace:
    return argparse.Namespace(**{key: _to_namespace(value) for key, value in d.items()})


def namespace_to_dict(namespace: argparse.Namespace) -> Dict[str, Any]:
    return {key: _from_namespace(value) for key, value in vars(namespace).items()}


def flatten_namespace(namespace: argparse.Namespace) -> Dict[str, Any]:
    """Merge the sections of a nested config into a single flat dict.

    Later sections win on key clashes. Top-level scalars are kept as they are.

    Example:
        >>> ns = dict_to_namespace({"pipeline": {"seed": 1}, "classifier": {"num_epochs": 3}})
        >>> flatten_namespace(ns)
        {'seed': 1, 'num_epochs': 3}
    """
    flat = {}
    for key, value in namespace_to_dict(namespace).items():
        if isinstance(value, dict):
            flat.update(value)
        else:
            flat[key] = value
    return flat


def is_module_available(module_name: str) -> bool:
    """True when ``module_name`` can be imported, without importing it."""
    return importlib.util.find_spec(module_name) is not None
