from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

DEFAULT_INSTALL_ROOT = str(Path.home() / "NixOS-WSL")
DEFAULT_RELEASE_URL = "https://github.com/nix-community/NixOS-WSL/releases/download/{tag}/{image}"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ProvisioningConfig:
    install_root: Path = Path(DEFAULT_INSTALL_ROOT)
    distro_name: str = "NixOS"
    release_tag: str = "2411.6.0"
    image_name: str = "nixos-wsl.tar.gz"
    release_url_template: str = DEFAULT_RELEASE_URL
    repo_url: str = "https://github.com/nixos-wsl-dotfiles/dotfiles.git"
    network_check_url: str = "https://github.com"
    build_target: str = "nixos"
    guest_user: str = "nixos"
    guest_password: str = "nixos"
    guest_config_dir: str = "/etc/nixos"
    # Empty means /home/<guest_user>/dotfiles.
    guest_clone_dir: str = ""
    wslconfig_path: Path = Path.home() / ".wslconfig"
    kernel_command_line: str = "cgroup_no_v1=all"
    download_attempts: int = 3
    download_backoff: float = 5.0
    wsl_feature: str = "Microsoft-Windows-Subsystem-Linux"
    hypervisor_feature: str = "VirtualMachinePlatform"

    @property
    def image_url(self) -> str:
        return self.release_url_template.format(tag=self.release_tag, image=self.image_name)

    @property
    def image_path(self) -> Path:
        return self.install_root / self.image_name

    @property
    def distro_dir(self) -> Path:
        return self.install_root / self.distro_name

    @property
    def local_repo_dir(self) -> Path:
        return self.install_root / "dotfiles"

    @property
    def logs_dir(self) -> Path:
        return self.install_root / "logs"

    @property
    def summary_path(self) -> Path:
        return self.logs_dir / "last_run.json"

    @property
    def guest_clone_path(self) -> str:
        return self.guest_clone_dir or f"/home/{self.guest_user}/dotfiles"

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ProvisioningConfig":
        known = {f.name: f for f in dataclasses.fields(cls)}
        unknown = sorted(set(raw) - set(known))
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for name, value in raw.items():
            if value is None:
                continue
            if name in {"install_root", "wslconfig_path"}:
                value = Path(str(value)).expanduser()
            elif name in {"download_attempts", "download_backoff"}:
                convert = int if name == "download_attempts" else float
                try:
                    value = convert(value)
                except (TypeError, ValueError) as e:
                    raise ConfigError(f"{name} must be a number, got {value!r}") from e
                if name == "download_attempts" and value < 1:
                    raise ConfigError("download_attempts must be >= 1")
            else:
                value = str(value)
            values[name] = value
        return cls(**values)


def load_config(path: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None) -> ProvisioningConfig:
    """Defaults, then the YAML file (if any), then non-None overrides."""

    raw: Dict[str, Any] = {}
    if path:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(path)
        if p.suffix.lower() not in {".yaml", ".yml"}:
            raise ConfigError("config must be YAML")
        try:
            data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: invalid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping/object")
        raw.update(data)

    for k, v in (overrides or {}).items():
        if v is not None:
            raw[k] = v

    return ProvisioningConfig.from_mapping(raw)
