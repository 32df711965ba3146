"""Configuration for the upscaling pipeline, loadable from YAML or JSON."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

import yaml

from .. import constants as cte


@dataclass
class UpscaleConfig:
    """Everything the orchestrator and the folder monitor need to know."""

    input_folder: Path = Path("input_images")
    output_folder: Path = Path("upscaled_images")
    scan_interval: float = 2.0  # seconds between folder scans
    image_types: Tuple[str, ...] = ("jpg", "jpeg", "png", "gif")
    scale_factor: int = cte.DEFAULT_SCALE_FACTOR
    contrast: float = cte.DEFAULT_CONTRAST
    output_prefix: str = "upscaled_"
    jpeg_quality: int = 95
    png_compress_level: int = 9
    arch: str = "cpu"

    def __post_init__(self) -> None:
        self.input_folder = Path(self.input_folder)
        self.output_folder = Path(self.output_folder)
        self.image_types = tuple(ext.lower().lstrip(".") for ext in self.image_types)

    def validate(self) -> "UpscaleConfig":
        """Raise ValueError on out-of-range settings, return self otherwise."""
        if isinstance(self.scale_factor, bool) or not isinstance(self.scale_factor, int):
            raise ValueError("scale_factor must be a positive integer")
        if self.scale_factor < 1:
            raise ValueError("scale_factor must be a positive integer")
        if self.scan_interval < 0:
            raise ValueError("scan_interval must be >= 0")
        if not 0 <= self.contrast <= 100:
            raise ValueError("contrast must be within [0, 100]")
        if not 1 <= self.jpeg_quality <= 100:
            raise ValueError("jpeg_quality must be within [1, 100]")
        if not 0 <= self.png_compress_level <= 9:
            raise ValueError("png_compress_level must be within [0, 9]")
        if self.arch not in {"cpu", "gpu"}:
            raise ValueError("arch must be 'cpu' or 'gpu'")
        if not self.image_types:
            raise ValueError("image_types must not be empty")
        return self

    def with_overrides(self, **overrides: Any) -> "UpscaleConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes).validate()

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["input_folder"] = str(self.input_folder)
        payload["output_folder"] = str(self.output_folder)
        payload["image_types"] = list(self.image_types)
        return payload

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "UpscaleConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(payload) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        data = dict(payload)
        if "image_types" in data:
            if not isinstance(data["image_types"], (list, tuple)):
                raise ValueError("image_types must be a list of extensions")
            data["image_types"] = tuple(str(ext) for ext in data["image_types"])
        for key in ("scan_interval", "contrast"):
            if key in data and data[key] is not None:
                data[key] = float(data[key])
        return cls(**data).validate()


def load_config(path: Path | str) -> UpscaleConfig:
    """
    Parse a YAML or JSON configuration file.

    Relative folders in the file are resolved against the file's directory.
    """
    config_path = Path(path)
    suffix = config_path.suffix.lower()
    with config_path.open("r", encoding="utf-8") as handle:
        if suffix in {".yaml", ".yml"}:
            payload = yaml.safe_load(handle) or {}
        elif suffix == ".json":
            payload = json.load(handle) or {}
        else:
            raise ValueError(f"Unsupported configuration format: {suffix}")
    if not isinstance(payload, dict):
        raise ValueError("configuration file must contain a mapping")

    config = UpscaleConfig.from_mapping(payload)
    base_dir = config_path.parent
    if not config.input_folder.is_absolute():
        config.input_folder = base_dir / config.input_folder
    if not config.output_folder.is_absolute():
        config.output_folder = base_dir / config.output_folder
    return config
