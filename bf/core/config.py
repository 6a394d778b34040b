"""Typed loading of ``buildflow.toml``.

The file lives in the flow package folder and declares the products that can be
built into plugin artifacts, plus run defaults:

    [run]
    entry_point = "make_flow"
    print_context = false
    display_summary = true

    [[products]]
    name = "release"
    build = ["python", "-m", "zipfile", "-c", "out/release.pyz", "release"]
    output = "out"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_str_list, get_table, get_table_list

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_ENTRY_POINT",
    "DEFAULT_OUTPUT_DIR",
    "Config",
    "ConfigError",
    "ProductConfig",
    "RunConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "buildflow.toml"
DEFAULT_ENTRY_POINT = "make_flow"
DEFAULT_OUTPUT_DIR = ".build"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class RunConfig:
    entry_point: str = DEFAULT_ENTRY_POINT
    print_context: bool = False
    display_summary: bool = True


@dataclass(frozen=True, slots=True)
class ProductConfig:
    """A buildable product: the command that builds it and where it lands."""

    name: str
    build: tuple[str, ...] = ()
    output: str = DEFAULT_OUTPUT_DIR


@dataclass(frozen=True, slots=True)
class Config:
    run: RunConfig = field(default_factory=RunConfig)
    products: tuple[ProductConfig, ...] = ()

    def product(self, name: str) -> ProductConfig | None:
        for product in self.products:
            if product.name == name:
                return product
        return None

    @property
    def product_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.products)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from parsed TOML.

        Raises:
            ValueError: A product table has no name.
        """
        run: StrDict = get_table(data, "run") or {}
        products: list[ProductConfig] = []
        for table in get_table_list(data, "products") or []:
            name = get_str(table, "name")
            if name is None:
                raise ValueError("every [[products]] entry needs a name")
            products.append(
                ProductConfig(
                    name=name,
                    build=tuple(get_str_list(table, "build") or ()),
                    output=get_str(table, "output") or DEFAULT_OUTPUT_DIR,
                )
            )

        print_context = get_bool(run, "print_context")
        display_summary = get_bool(run, "display_summary")
        return cls(
            run=RunConfig(
                entry_point=get_str(run, "entry_point") or DEFAULT_ENTRY_POINT,
                print_context=False if print_context is None else print_context,
                display_summary=True if display_summary is None else display_summary,
            ),
            products=tuple(products),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse a ``buildflow.toml`` file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(folder: Path) -> Result[Config, ConfigError]:
    """Load ``buildflow.toml`` from ``folder``; defaults when the file is absent.

    A file that exists but does not parse is still an error.
    """
    path = folder / CONFIG_FILE_NAME
    if not path.exists():
        return Ok(Config())
    return load_config(path)
