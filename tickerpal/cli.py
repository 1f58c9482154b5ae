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

'''
CLI commons.

'''
import os

import click
import msgspec
import trio

from .log import (
    get_console_log,
    get_logger,
    colorize_json,
)
from . import config
from .lookup import (
    load_symbols,
    mark_watchlisted,
    symbol_table_lookup,
)
from .ui import (
    format_frame,
    open_command_palette,
)


log = get_logger('tickerpal.cli')


@click.group()
@click.option('--loglevel', '-l', default='warning', help='Logging level')
@click.option('--configdir', '-c', help='Configuration directory')
@click.pass_context
def cli(
    ctx: click.Context,
    loglevel: str,
    configdir: str,

) -> None:
    if configdir is not None:
        assert os.path.isdir(configdir), f"`{configdir}` is not a valid path"
        config._override_config_dir(configdir)

    ctx.ensure_object(dict)
    ctx.obj.update({
        'loglevel': loglevel,
        'log': get_console_log(loglevel),
        'confdir': config.get_conf_dir(),
    })


def _load_table(path: str) -> list:
    try:
        return load_symbols(path)
    except (
        OSError,
        msgspec.DecodeError,
    ) as err:
        raise click.BadParameter(
            f'Could not load symbol table {path}: {err}',
            param_hint='--symbols',
        ) from err


@cli.command()
@click.option(
    '--symbols', '-s',
    required=True,
    help='JSON file of instruments to search',
)
@click.option(
    '--watch', '-w',
    multiple=True,
    help='Symbol(s) in the watchlist',
)
@click.option('--json', 'as_json', is_flag=True, help='Dump results as json')
@click.option(
    '--pick', is_flag=True,
    help='Select the first result and print its detail path',
)
@click.argument('query', nargs=1, required=True)
@click.pass_obj
def search(config_obj, symbols, watch, as_json, pick, query):
    '''
    Run a headless palette search over a local symbol table.

    '''
    try:
        conf = config.load_palette_conf()
    except config.ConfigurationError as err:
        raise click.ClickException(str(err)) from err

    table = _load_table(symbols)
    log.info(f'Searching {len(table)} symbols for {query!r}')
    navigated: list[str] = []

    async def main():
        async with open_command_palette(
            lookup=symbol_table_lookup(table, watchlist=watch),
            navigate=navigated.append,
            seed=mark_watchlisted(table, watch),
            conf=conf,
        ) as palette:
            palette.activate()
            palette.type(query)
            await palette.session.wait_settled()

            if as_json:
                click.echo(colorize_json(
                    msgspec.to_builtins(palette.visible_items())
                ))
            else:
                click.echo(format_frame(palette.render()))

            items = palette.visible_items()
            if (
                pick
                and items
            ):
                palette.choose(items[0].symbol)

    trio.run(main)

    if pick:
        if not navigated:
            raise click.ClickException(f'No results for {query!r}')

        click.echo(navigated[-1])


@cli.command()
@click.option(
    '--touch', is_flag=True,
    help='Write a default palette.toml if none exists',
)
@click.pass_obj
def conf(config_obj, touch):
    '''
    Print the effective palette settings.

    '''
    try:
        pconf = config.load_palette_conf(touch_if_dne=touch)
    except config.ConfigurationError as err:
        raise click.ClickException(str(err)) from err

    click.echo(colorize_json(pconf.to_dict()))
