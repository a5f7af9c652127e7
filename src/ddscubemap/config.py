"""Define the typed configuration model for cube map assembly.

Use `CubemapConfig` to load, validate, and persist runtime settings.
"""

import dataclasses
import logging
import os
import threading
from dataclasses import dataclass

import yaml

logger = logging.getLogger("ddscubemap.config")

_SUPPORTED_CONFIG_VERSION = 1
_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CubemapConfig:
    """Runtime settings for the assembler and CLI."""

    config_version: int = 1
    log_level: str = "INFO"
    log_file: str = ""
    show_progress: bool = False
    warn_on_incomplete_mips: bool = True

    @classmethod
    def from_yaml(cls, path: str) -> "CubemapConfig":
        """Load configuration from YAML or return defaults."""
        if not os.path.exists(path):
            logger.info("Config file '%s' not found. Using defaults.", path)
            config = cls()
            config.validate()
            return config
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(
                f"Failed to parse YAML config '{path}': {exc}"
            ) from exc
        if not isinstance(data, dict):
            raise ValueError(
                f"Config file '{path}' must contain a YAML mapping, "
                f"got {type(data).__name__}"
            )
        yaml_version = data.get("config_version", 1)
        if isinstance(yaml_version, int) and yaml_version > _SUPPORTED_CONFIG_VERSION:
            logger.warning(
                "Config file '%s' has config_version=%d, but this build only "
                "supports up to version %d. Some settings may be ignored.",
                path, yaml_version, _SUPPORTED_CONFIG_VERSION,
            )
        config = cls()
        _merge_dict_into_config(config, data)
        try:
            config.validate()
        except ValueError as exc:
            raise ValueError(f"{path}: {exc}") from exc
        return config

    def to_yaml(self, path: str):
        """Write configuration to a YAML file."""
        data = dataclasses.asdict(self)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        ext = os.path.splitext(path)[1]
        tmp_path = f"{path}.tmp.{os.getpid()}.{threading.get_ident()}{ext}"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            os.replace(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    pass

    def validate(self):
        """Validate configuration values. Raises ValueError on invalid config."""
        errors = []

        if not isinstance(self.config_version, int) or self.config_version < 1:
            errors.append(
                f"config_version must be a positive integer, got {self.config_version!r}"
            )
        if not isinstance(self.log_level, str) or self.log_level.upper() not in _VALID_LOG_LEVELS:
            errors.append(
                f"log_level must be one of {list(_VALID_LOG_LEVELS)}, got {self.log_level!r}"
            )
        if not isinstance(self.log_file, str):
            errors.append(f"log_file must be a string path, got {self.log_file!r}")
        elif self.log_file and os.path.isdir(self.log_file):
            errors.append(f"log_file points to a directory: {self.log_file}")
        for name in ("show_progress", "warn_on_incomplete_mips"):
            if not isinstance(getattr(self, name), bool):
                errors.append(f"{name} must be true or false, got {getattr(self, name)!r}")

        if errors:
            raise ValueError(
                "Configuration validation failed:\n" +
                "\n".join(f"  - {e}" for e in errors)
            )


def _merge_dict_into_config(config: "CubemapConfig", data: dict):
    known = {f.name for f in dataclasses.fields(config)}
    for key, value in data.items():
        if key not in known:
            logger.warning("Unknown config key ignored: '%s'", key)
            continue
        field_val = getattr(config, key)
        if value is None and field_val is not None:
            logger.warning(
                "Config key '%s' is null but field default is %s. Using default value.",
                key, type(field_val).__name__,
            )
            continue
        expected_type = type(field_val)
        # bool is an int subclass; keep the two apart.
        type_ok = isinstance(value, expected_type) and not (
            expected_type is int and isinstance(value, bool)
        )
        if not type_ok and expected_type is int and isinstance(value, float) \
                and value == int(value):
            value = int(value)
            type_ok = True
        if not type_ok:
            logger.warning(
                "Config type mismatch for '%s': expected %s, got %s (%r). "
                "Using default value.",
                key, expected_type.__name__, type(value).__name__, value,
            )
            continue
        setattr(config, key, value)
