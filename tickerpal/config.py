# tickerpal: symbol search gear for hackers
# Copyright (C) 2024-present  tickerpal contributors

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.

# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Platform configuration (files) mgmt.

"""
from typing import (
    Callable,
    MutableMapping,
)
from pathlib import Path

import click
import msgspec
import tomlkit
try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib

from .log import get_logger
from .types import Struct

log = get_logger('palette-config')


_config_dir: Path = Path(click.get_app_dir('tickerpal'))

_conf_names: set[str] = {
    'palette',  # search palette ux settings
}


class ConfigurationError(Exception):
    'Misconfigured settings, likely in a TOML file.'


class PaletteConf(Struct, forbid_unknown_fields=True):
    '''
    Settings for the ``[palette]`` section of ``palette.toml``.

    '''
    label: str = 'Add stock'
    render_as: str = 'button'

    # quiet period (in seconds) after the last keystroke before
    # a lookup is issued.
    debounce: float = 0.3

    # max number of seed entries shown before anything is typed
    seed_limit: int = 10

    # seconds until a lookup is treated as failed, `None` never
    # times out.
    lookup_timeout: float | None = 10.0


def _override_config_dir(
    path: str | Path,
) -> None:
    global _config_dir
    _config_dir = Path(path)


def _conf_fn_w_ext(
    name: str,
) -> str:
    # change this if we ever change the config file format.
    return f'{name}.toml'


def get_conf_dir() -> Path:
    '''
    Return the user configuration directory ``Path``
    on the local filesystem.

    '''
    return _config_dir


def get_conf_path(
    conf_name: str = 'palette',

) -> Path:
    '''
    Return the top-level default config path normally under
    ``~/.config/tickerpal`` on linux for a given ``conf_name``.

    '''
    assert str(conf_name) in _conf_names

    fn = _conf_fn_w_ext(conf_name)
    return _config_dir / Path(fn)


def load(
    # NOTE: always appended with .toml suffix
    conf_name: str = 'palette',
    path: Path | None = None,

    decode: Callable[
        [str | bytes,],
        MutableMapping,
    ] = tomllib.loads,

    touch_if_dne: bool = False,

    **tomlkws,

) -> tuple[dict, Path]:
    '''
    Load config file by name.

    If desired config is not in the top level user config path then
    pass the ``path: Path`` explicitly.

    '''
    path: Path = path or get_conf_path(conf_name)

    if (
        not path.is_file()
        and touch_if_dne
    ):
        # create the $HOME/.config/tickerpal dir if dne
        path.parent.mkdir(
            parents=True,
            exist_ok=True,
        )
        write(
            {conf_name: PaletteConf().to_dict()},
            path=path,
            fail_empty=False,
        )
        assert path.is_file(), f'Config file {path} not created!?'

    if not path.is_file():
        log.debug(f'No config file at {path}, using defaults')
        return {}, path

    with path.open(mode='r') as fp:
        config: dict = decode(
            fp.read(),
            **tomlkws,
        )

    log.debug(f"Read config file {path}")
    return config, path


def write(
    config: dict,  # toml config as dict

    name: str | None = None,
    path: Path | None = None,
    fail_empty: bool = True,

    **toml_kwargs,

) -> None:
    '''
    Write a config (dict) to disk as TOML.

    '''
    if name:
        path: Path = path or get_conf_path(name)

    dirname: Path = path.parent
    if not dirname.is_dir():
        log.debug(f"Creating config dir {dirname}")
        dirname.mkdir(parents=True)

    if (
        not config
        and fail_empty
    ):
        raise ValueError(
            "Watch out you're trying to write a blank config!"
        )

    # `None` has no TOML repr so just leave such keys out
    config = {
        section: {
            k: v for k, v in table.items()
            if v is not None
        } if isinstance(table, dict) else table
        for section, table in config.items()
    }

    log.debug(
        f"Writing config `{name}` file to:\n"
        f"{path}"
    )
    with path.open(mode='w') as fp:
        return tomlkit.dump(  # preserve style on write B)
            config,
            fp,
            **toml_kwargs,
        )


def load_palette_conf(
    path: Path | None = None,
    touch_if_dne: bool = False,

) -> PaletteConf:
    '''
    Load and validate the ``[palette]`` section, falling back to
    defaults for anything not set.

    '''
    conf, path = load(
        'palette',
        path=path,
        touch_if_dne=touch_if_dne,
    )
    section: dict = conf.get('palette', {})
    try:
        return msgspec.convert(section, type=PaletteConf)
    except msgspec.ValidationError as err:
        raise ConfigurationError(
            f'Invalid `[palette]` section in {path}:\n{err}'
        ) from err
