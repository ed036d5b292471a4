from .main import load_config, resolve_config_path, save_config, validate_config_file

__all__ = ["load_config", "resolve_config_path", "save_config", "validate_config_file"]
