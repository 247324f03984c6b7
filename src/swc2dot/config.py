# src/swc2dot/config.py
from __future__ import annotations

# General imports (stdlib)
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

# Third-party imports
import yaml

# Local imports
from .buffer import INDENT_SIZE, LINE_WIDTH
from .exceptions import ConfigError, ConfigStructureError, DataNotFound, IOFailure
from .swc import CompartmentKind

DEFAULT_CONFIG_FILE = "default_config.yml"

OptionGroup = Dict[str, Optional[str]]


class _StyleLoader(yaml.SafeLoader):
    """SafeLoader that keeps scalars as the text written in the file."""


def _construct_literal(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> str:
    return loader.construct_scalar(node)


# Numbers, booleans and dates stay as written ("1.23", "TRUE", ...); null stays None
for _tag in ("bool", "int", "float", "timestamp"):
    _StyleLoader.add_constructor(f"tag:yaml.org,2002:{_tag}", _construct_literal)


def load_yaml(text: str, source: str) -> Any:
    """
    Parse YAML text with literal scalars.

    Raises:
        ConfigError: If `text` is not valid YAML.
    """
    try:
        return yaml.load(text, Loader=_StyleLoader)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse contents of configuration file {source} as YAML: {exc}") from exc


def parse_option_group(data: Any, group: str, source: str) -> OptionGroup:
    """
    Convert one YAML option group into an ordered option mapping.

    Use:
        Null values become None, every other scalar is kept as its text.

    Args:
        data (Any): Loaded YAML value of the group.
        group (str): Group name, for error messages.
        source (str): Where the YAML came from, for error messages.

    Returns:
        OptionGroup: option name → optional value, in file order.

    Raises:
        ConfigStructureError: If the group is not a mapping, or an option
            value is not null or string-like.
    """
    if not isinstance(data, Mapping):
        raise ConfigStructureError(
            f"Expected config group {group} in file {source} to be a hash, got {type(data).__name__}."
        )

    options: OptionGroup = {}
    for key, value in data.items():
        if key is None or not isinstance(key, str):
            raise ConfigStructureError(f"Expected option names in config group {group} of {source} to be strings.")
        if value is not None and not isinstance(value, str):
            raise ConfigStructureError(
                f"Expected value of option {key} in config group {group} of {source} to be null or string-like."
            )
        options[key] = value
    return options


class StyleConfig:
    """
    Per-compartment-type style options.

    Use:
        Holds one option group per CompartmentKind, keyed by the kind's
        config key and ordered like the enumeration. Overrides replace or add
        single options; groups are never removed.
    """

    def __init__(self) -> None:
        self._groups: Dict[str, OptionGroup] = {kind.config_key: {} for kind in CompartmentKind}

    @classmethod
    def default(cls) -> "StyleConfig":
        """Create a StyleConfig holding the packaged default options."""
        text = resources.files(__package__).joinpath(DEFAULT_CONFIG_FILE).read_text(encoding="utf-8")
        style = cls()
        style.override_from_mapping(load_yaml(text, DEFAULT_CONFIG_FILE), source=DEFAULT_CONFIG_FILE)
        return style

    @classmethod
    def from_file(cls, path: Path) -> "StyleConfig":
        """Create the default StyleConfig and override it from `path`."""
        style = cls.default()
        style.override_from_file(path)
        return style

    def override_from_file(self, path: Path) -> None:
        """
        Override options with the groups found in a YAML file.

        Raises:
            DataNotFound: If the file does not exist.
            IOFailure: If the file cannot be read.
            ConfigError: If the file is not valid YAML.
            ConfigStructureError: If the file or one of its groups is not a hash.
        """
        path = Path(path)
        if not path.is_file():
            raise DataNotFound(f"Configuration file not found: {path}")
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise IOFailure(f"Could not open configuration file {path}: {exc}") from exc

        self.override_from_mapping(load_yaml(text, str(path)), source=str(path))

    def override_from_mapping(self, data: Any, source: str = "<mapping>") -> None:
        """
        Override options from an already loaded YAML document.

        Groups left out of `data` keep their options; unknown top-level keys
        are ignored. An empty document changes nothing.

        Raises:
            ConfigStructureError: If `data` or one of its known groups is not a hash.
        """
        if data is None:
            return
        if not isinstance(data, Mapping):
            raise ConfigStructureError(f"Expected contents of file {source} to be a hash.")

        # Parse every group first so a bad group leaves the configuration untouched
        overrides: Dict[str, OptionGroup] = {}
        for group in self._groups:
            if group not in data:
                continue
            overrides[group] = parse_option_group(data[group], group, source)

        for group, options in overrides.items():
            self._groups[group].update(options)

    def get_style(self, kind: CompartmentKind) -> OptionGroup:
        """Return a copy of the options for `kind`, in insertion order."""
        return dict(self._groups[kind.config_key])

    def groups(self) -> List[str]:
        return list(self._groups)

    def to_dict(self) -> Dict[str, OptionGroup]:
        return {group: dict(options) for group, options in self._groups.items()}


@dataclass(frozen=True)
class Layout:
    line_width: int = LINE_WIDTH                                                 # Soft wrap width of the DOT output (columns)


@dataclass(frozen=True)
class Processing:
    overwrite: bool = True                                                       # Replace existing output files
    keep_going: bool = False                                                     # Batch mode: continue after a failed file
    quiet: bool = False                                                          # Suppress [ok] status lines


@dataclass(frozen=True)
class Config:
    layout: Layout = Layout()                                                    # Output text layout
    processing: Processing = Processing()                                        # Runtime behaviour
    style: StyleConfig = field(default_factory=StyleConfig.default)             # Per-compartment-type vertex styles


def make_config(
    config_file: Optional[Path] = None,
    *,
    line_width: Optional[int] = None,
    overwrite: bool = True,
    keep_going: bool = False,
    quiet: bool = False,
) -> Config:
    """
    Build and validate a Config object for a conversion run.

    Use:
        Load the default vertex styles, merge the optional override file on
        top of them and check the layout settings.

    Args:
        config_file (Optional[Path]): YAML file with style overrides.
        line_width (Optional[int]): Output wrap width; defaults to Layout's.
        overwrite (bool): Replace existing output files.
        keep_going (bool): Continue a batch after a failed file.
        quiet (bool): Suppress status lines.

    Returns:
        Config: Fully-initialized configuration.

    Raises:
        ConfigError: If the line width leaves no room for nested blocks, or
            the override file is not valid YAML.
        ConfigStructureError: If the override file is not shaped as groups of options.
        DataNotFound: If `config_file` does not exist.
    """
    layout = Layout() if line_width is None else Layout(line_width=line_width)

    # Category blocks are nested two levels deep inside the graph
    if layout.line_width <= 2 * INDENT_SIZE:
        raise ConfigError(
            f"Config: 'layout.line_width' must be greater than {2 * INDENT_SIZE}, got {layout.line_width}."
        )

    style = StyleConfig.default() if config_file is None else StyleConfig.from_file(Path(config_file))

    return Config(
        layout=layout,
        processing=Processing(overwrite=overwrite, keep_going=keep_going, quiet=quiet),
        style=style,
    )
