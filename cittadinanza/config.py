"""
Configuration for Cittadinanza Check.

Central configuration for the local viewer, the JSON summary export, display
limits, and the applicant/lineage values a session starts with.

There are two ways to customize:

1. **Edit this file directly**: change defaults in the dataclasses below.
2. **Use a YAML profile**: pass ``--config profiles/my-family.yaml`` on the
   CLI. The YAML overrides the viewer, export and display sections and can
   pre-fill the ``applicant`` and ``lineage`` forms.

Scoring weights are fixed in code; see
``cittadinanza.analysis.scorer``.
"""

from dataclasses import dataclass, field
from pathlib import Path

from .models.applicant import LineageFacts
from .models.document import ACCEPTED_EXTENSIONS


@dataclass
class ViewerConfig:
    """Web viewer settings."""
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = True
    max_upload_mb: int = 25       # Per request; Flask answers 413 above this


@dataclass
class ExportConfig:
    """JSON summary export settings."""
    filename_prefix: str = "italian-citizenship-check"
    indent: int = 2
    output_dir: Path = field(default_factory=lambda: Path("."))


@dataclass
class DisplayConfig:
    """How much of the result the score card shows before collapsing."""
    max_flags_shown: int = 4


@dataclass
class Config:
    """Master configuration combining all settings."""
    viewer: ViewerConfig = field(default_factory=ViewerConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    # File picker filter; other files are still accepted but lose the format bonus
    accepted_extensions: list[str] = field(default_factory=lambda: list(ACCEPTED_EXTENSIONS))

    # Form pre-fill
    default_country: str = "Brasil"
    applicant: dict = field(default_factory=dict)   # export-format keys, e.g. "fullName"
    lineage: dict = field(default_factory=dict)     # export-format keys, e.g. "ancestorName"

    def accept_attribute(self) -> str:
        """Value for the HTML file input ``accept`` attribute."""
        return ",".join(self.accepted_extensions)

    def applicant_seed(self) -> dict:
        """Applicant pre-fill, with the default country applied when absent."""
        seed = {"country": self.default_country}
        seed.update(self.applicant)
        return seed


# ── Global default config ──
DEFAULT_CONFIG = Config()


# ════════════════════════════════════════════════════════════════════════════
# YAML PROFILE LOADER
# ════════════════════════════════════════════════════════════════════════════


def load_config_yaml(yaml_path: str | Path) -> Config:
    """
    Load a YAML profile and return a Config with those values applied.

    Args:
        yaml_path: Path to a YAML file with any of the sections ``viewer``,
            ``export``, ``display``, ``applicant``, ``lineage`` and the
            top-level keys ``default_country`` and ``accepted_extensions``.

    Returns:
        A Config instance with the YAML values layered over the defaults.

    Raises:
        FileNotFoundError: If the YAML file doesn't exist.
        ValueError: If the YAML is empty or not a mapping.
    """
    import yaml

    yaml_path = Path(yaml_path)
    if not yaml_path.exists():
        raise FileNotFoundError(f"Config profile not found: {yaml_path}")

    with open(yaml_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data or not isinstance(data, dict):
        raise ValueError(f"Empty or invalid YAML: {yaml_path}")

    config = Config()

    # ── Viewer ──
    v = data.get("viewer", {})
    if v:
        config.viewer = ViewerConfig(
            host=v.get("host", config.viewer.host),
            port=int(v.get("port", config.viewer.port)),
            debug=bool(v.get("debug", config.viewer.debug)),
            max_upload_mb=int(v.get("max_upload_mb", config.viewer.max_upload_mb)),
        )

    # ── Export ──
    e = data.get("export", {})
    if e:
        config.export = ExportConfig(
            filename_prefix=e.get("filename_prefix", config.export.filename_prefix),
            indent=int(e.get("indent", config.export.indent)),
            output_dir=Path(e.get("output_dir", config.export.output_dir)),
        )

    # ── Display ──
    d = data.get("display", {})
    if d:
        config.display = DisplayConfig(
            max_flags_shown=int(d.get("max_flags_shown", config.display.max_flags_shown)),
        )

    extensions = data.get("accepted_extensions")
    if extensions:
        # Normalise "pdf" / ".PDF" to ".pdf"
        config.accepted_extensions = [
            "." + str(ext).lower().lstrip(".") for ext in extensions
        ]

    if "default_country" in data:
        config.default_country = str(data["default_country"] or "")

    # ── Form pre-fill ──
    applicant = data.get("applicant")
    if applicant:
        if not isinstance(applicant, dict):
            raise ValueError(f"'applicant' must be a mapping in {yaml_path}")
        config.applicant = dict(applicant)

    lineage = data.get("lineage")
    if lineage:
        if not isinstance(lineage, dict):
            raise ValueError(f"'lineage' must be a mapping in {yaml_path}")
        try:
            LineageFacts.from_dict(lineage)
        except ValueError as e:
            raise ValueError(f"Invalid 'lineage' in {yaml_path}: {e}") from e
        config.lineage = dict(lineage)

    return config
