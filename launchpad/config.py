"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables
  2. Project config (<root>/.launchpad/config.yaml)
  3. User config (~/.launchpad/config.yaml)
  4. Defaults

API keys are NEVER stored in config files.
They must be provided via environment variables.
"""

import logging
import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from .presentation.symbols import get_symbols

logger = logging.getLogger(__name__)


# Supported assistant providers and their defaults
PROVIDERS = {
    "claude": {
        "env_key": "ANTHROPIC_API_KEY",
        "default_model": "claude-sonnet-4-20250514",
        "models": [
            "claude-opus-4-20250514",
            "claude-sonnet-4-20250514",
            "claude-3-5-haiku-20241022",
        ]
    },
    "openai": {
        "env_key": "OPENAI_API_KEY",
        "default_model": "gpt-5-mini",
        "models": [
            "gpt-5.2",
            "gpt-5-mini",
            "gpt-5-nano",
        ]
    },
}

DEFAULT_PROVIDER = "claude"

# Narrowest fixed display width that still fits a listing
MIN_DISPLAY_WIDTH = 40


@dataclass
class PathsConfig:
    """Sub-directories of the Launchpad root (absolute paths override)."""
    vault: str = "_vault"
    sops: str = "_sops"
    projects: str = "projects"
    stack: str = "_stack"
    prompts: str = "_agents/prompts"

    def validate(self) -> Optional[str]:
        for name in ("vault", "sops", "projects", "stack", "prompts"):
            if not getattr(self, name):
                return f"paths.{name} must not be empty"
        return None


@dataclass
class LLMConfig:
    """SOP assistant provider configuration."""
    provider: str = DEFAULT_PROVIDER
    model: Optional[str] = None  # None = use provider default

    @property
    def effective_model(self) -> str:
        """Get model, falling back to provider default."""
        if self.model:
            return self.model
        return PROVIDERS.get(self.provider, {}).get("default_model", "")

    @property
    def api_key_env(self) -> str:
        return PROVIDERS.get(self.provider, {}).get("env_key", "")

    @property
    def api_key(self) -> Optional[str]:
        """Get API key from environment. Never stored."""
        return os.environ.get(self.api_key_env) if self.api_key_env else None

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.provider not in PROVIDERS:
            valid = ", ".join(PROVIDERS.keys())
            return f"Unknown provider '{self.provider}'. Valid: {valid}"

        if self.model:
            valid_models = PROVIDERS[self.provider]["models"]
            if self.model not in valid_models:
                return f"Unknown model '{self.model}' for {self.provider}. Valid: {', '.join(valid_models)}"

        return None


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"
    width: int = 0         # 0 = terminal width

    def validate(self) -> Optional[str]:
        valid_symbols = ("unicode", "ascii", "auto")
        if self.symbols not in valid_symbols:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(valid_symbols)}"

        if self.width and self.width < MIN_DISPLAY_WIDTH:
            return f"Display width must be 0 (terminal) or at least {MIN_DISPLAY_WIDTH}"
        return None


@dataclass
class ParallelConfig:
    """Thread pool used for per-file reads in list operations."""
    io_workers: int = 4

    def validate(self) -> Optional[str]:
        if self.io_workers < 1:
            return "parallel.io_workers must be >= 1"
        return None


@dataclass
class Config:
    """Application configuration."""
    paths: PathsConfig = field(default_factory=PathsConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    parallel: ParallelConfig = field(default_factory=ParallelConfig)

    def validate(self) -> Optional[str]:
        for section in (self.paths, self.llm, self.display, self.parallel):
            error = section.validate()
            if error:
                return error
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "paths": {
                "vault": self.paths.vault,
                "sops": self.paths.sops,
                "projects": self.paths.projects,
                "stack": self.paths.stack,
                "prompts": self.paths.prompts,
            },
            "llm": {
                "provider": self.llm.provider,
                "model": self.llm.model
            },
            "display": {
                "symbols": self.display.symbols,
                "width": self.display.width
            },
            "parallel": {
                "io_workers": self.parallel.io_workers
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        paths_data = data.get("paths") or {}
        llm_data = data.get("llm") or {}
        display_data = data.get("display") or {}
        parallel_data = data.get("parallel") or {}

        defaults = PathsConfig()
        return cls(
            paths=PathsConfig(
                vault=str(paths_data.get("vault", defaults.vault)),
                sops=str(paths_data.get("sops", defaults.sops)),
                projects=str(paths_data.get("projects", defaults.projects)),
                stack=str(paths_data.get("stack", defaults.stack)),
                prompts=str(paths_data.get("prompts", defaults.prompts)),
            ),
            llm=LLMConfig(
                provider=llm_data.get("provider", DEFAULT_PROVIDER),
                model=llm_data.get("model")
            ),
            display=DisplayConfig(
                symbols=display_data.get("symbols", "auto"),
                width=_as_int(display_data.get("width"), 0)
            ),
            parallel=ParallelConfig(
                io_workers=_as_int(parallel_data.get("io_workers"), 4)
            )
        )


def _as_int(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer config value %r", value)
        return default


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment (LAUNCHPAD_*)
      2. Project config (<root>/.launchpad/config.yaml)
      3. User config (~/.launchpad/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".launchpad"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".launchpad"
    PROJECT_CONFIG_FILE = "config.yaml"

    # Settable keys: section -> setting -> coercion
    SETTINGS = {
        "paths": {"vault": str, "sops": str, "projects": str, "stack": str, "prompts": str},
        "llm": {"provider": str, "model": str},
        "display": {"symbols": str, "width": int},
        "parallel": {"io_workers": int},
    }

    def __init__(self, root: Optional[Path] = None, user_config_path: Optional[Path] = None):
        self.root = Path(root) if root else Path.cwd()
        self._user_config_path = Path(user_config_path) if user_config_path else self.USER_CONFIG_FILE
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.root / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self._user_config_path

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read_yaml(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read_yaml(self.project_config_path))

        # Layer 3: Environment overrides
        if os.environ.get("LAUNCHPAD_LLM_PROVIDER"):
            config_data.setdefault("llm", {})["provider"] = os.environ["LAUNCHPAD_LLM_PROVIDER"]
        if os.environ.get("LAUNCHPAD_LLM_MODEL"):
            config_data.setdefault("llm", {})["model"] = os.environ["LAUNCHPAD_LLM_MODEL"]
        if os.environ.get("LAUNCHPAD_VAULT_DIR"):
            config_data.setdefault("paths", {})["vault"] = os.environ["LAUNCHPAD_VAULT_DIR"]
        if os.environ.get("LAUNCHPAD_IO_WORKERS"):
            config_data.setdefault("parallel", {})["io_workers"] = os.environ["LAUNCHPAD_IO_WORKERS"]

        self._config = Config.from_dict(config_data)
        return self._config

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring malformed config %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: top level is not a mapping", path)
            return {}
        return data

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self._write(self.project_config_path, config)

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self._write(self.user_config_path, config)

    def _write(self, path: Path, config: Config):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding="utf-8") as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)
        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "llm.provider")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'llm.provider')"

        section, setting = parts
        if section not in self.SETTINGS:
            return f"Unknown section: {section}. Valid: {', '.join(self.SETTINGS)}"

        settings = self.SETTINGS[section]
        if setting not in settings:
            return f"Unknown {section} setting: {setting}. Valid: {', '.join(settings)}"

        try:
            coerced = settings[setting](value)
        except ValueError:
            return f"Invalid value for {key}: {value}"

        target = getattr(config, section)
        previous = getattr(target, setting)
        setattr(target, setting, coerced)

        error = target.validate()
        if error:
            setattr(target, setting, previous)
            return error

        if scope == "project":
            self.save_project(config)
        else:
            self.save_user(config)

        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value as display text."""
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return None

        section, setting = parts
        if setting not in self.SETTINGS.get(section, {}):
            return None

        if key == "llm.model":
            return config.llm.effective_model
        return str(getattr(getattr(config, section), setting))

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()
        symbols = get_symbols(config.display.symbols)

        api_key_status = f"{symbols.check_pass} Set" if config.llm.is_available else f"{symbols.check_fail} Missing"
        lines = [
            "Configuration:",
            "",
            "Paths:",
            f"  Root: {self.root}",
            f"  Vault: {config.paths.vault}",
            f"  SOPs: {config.paths.sops}",
            f"  Projects: {config.paths.projects}",
            "",
            "Assistant:",
            f"  Provider: {config.llm.provider}",
            f"  Model: {config.llm.effective_model}",
            f"  API Key: {api_key_status} ({config.llm.api_key_env})",
            "",
            "Display:",
            f"  Symbols: {config.display.symbols}",
            f"  Width: {config.display.width or 'terminal'}",
            "",
            "Parallel:",
            f"  IO workers: {config.parallel.io_workers}",
            "",
            "Config files:",
            f"  User: {self.user_config_path} {'(exists)' if self.user_config_path.exists() else '(not found)'}",
            f"  Project: {self.project_config_path} {'(exists)' if self.project_config_path.exists() else '(not found)'}",
        ]
        return "\n".join(lines)


def get_config(root: Optional[Path] = None) -> Config:
    """Convenience function to get configuration."""
    return ConfigManager(root).load()
