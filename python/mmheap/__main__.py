###############################################################################
# Copyright (C) 2023 Oliver Michael Kamperis
# Email: olliekampo@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License along with
# this program. If not, see <https://www.gnu.org/licenses/>.

"""Demonstrate the min-max heap on the command line."""

import argparse
import logging
import os
import sys
import tomllib
from typing import Any, Callable, Final, Mapping, NamedTuple, Sequence

import numpy as np

from mmheap.auxiliary.argparseutils import (
    bool_options,
    non_negative_int,
    optional_int
)
from mmheap.datastructures.heaps import EmptyHeapError, MinMaxHeap

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"
__version__ = "1.0.0"

__all__ = (
    "run_demo",
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


_DEFAULT_CONFIG_PATH: Final[str] = os.path.join(
    os.path.dirname(os.path.realpath(__file__)),
    "_demo.toml"
)

_DRAIN_CHOICES: Final[tuple[str, ...]] = ("none", "min", "max")


class _DemoConfig(NamedTuple):
    """
    Tuple to store the demo configuration.

    Items
    -----
    `values: list[int]` - The values to insert, in order.

    `drain: str` - How to drain the heap after the demo, one of "none",
    "min" or "max".

    `count: int` - The number of random values to draw instead of using
    `values`, zero to use `values`.

    `seed: int | None` - The seed for the random number generator.

    `low: int` - The inclusive lower bound of the random values.

    `high: int` - The exclusive upper bound of the random values.
    """

    values: list[int]
    drain: str
    count: int
    seed: int | None
    low: int
    high: int


def _check_int(name: str, value: Any) -> int:
    """Check that a configuration value is an integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Config key '{name}' must be an integer, got {value!r}.")
    return value


def _update_config(config: _DemoConfig, table: Mapping[str, Any]) -> _DemoConfig:
    """
    Update a demo configuration from a parsed `[demo]` table.

    Raises
    ------
    `ValueError` - If the table contains unknown keys or invalid values.
    """
    updates: dict[str, Any] = {}
    for key, value in table.items():
        if key == "values":
            if not isinstance(value, list):
                raise ValueError(f"Config key 'values' must be a list, got {value!r}.")
            updates["values"] = [_check_int("values", item) for item in value]
        elif key == "drain":
            if value not in _DRAIN_CHOICES:
                raise ValueError(
                    f"Config key 'drain' must be one of {_DRAIN_CHOICES}, "
                    f"got {value!r}."
                )
            updates["drain"] = value
        elif key == "random":
            if not isinstance(value, Mapping):
                raise ValueError("Config key 'random' must be a table.")
            for random_key, random_value in value.items():
                if random_key not in ("count", "seed", "low", "high"):
                    raise ValueError(f"Unknown config key 'random.{random_key}'.")
                updates[random_key] = _check_int(
                    f"random.{random_key}", random_value
                )
        else:
            raise ValueError(f"Unknown config key '{key}'.")
    return config._replace(**updates)


def _load_config(path: str, config: _DemoConfig | None = None) -> _DemoConfig:
    """
    Load a demo configuration from a TOML file.

    Keys missing from the file keep their values from the given configuration
    (or the built-in defaults if none is given).

    Raises
    ------
    `ValueError` - If the file cannot be read or is invalid.
    """
    if config is None:
        config = _DemoConfig(
            values=[], drain="none", count=0, seed=None, low=0, high=100
        )
    try:
        with open(path, "rb") as file:
            config_dict = tomllib.load(file)
    except OSError as error:
        raise ValueError(f"Cannot read config file '{path}': {error}") from error
    except tomllib.TOMLDecodeError as error:
        raise ValueError(f"Invalid config file '{path}': {error}") from error
    unknown = set(config_dict) - {"demo"}
    if unknown:
        raise ValueError(f"Unknown config tables {sorted(unknown)}.")
    return _update_config(config, config_dict.get("demo", {}))


def _generate_values(config: _DemoConfig) -> list[int]:
    """Get the values to insert, drawing random values if requested."""
    if config.count == 0:
        return list(config.values)
    if config.low >= config.high:
        raise ValueError(
            f"Random bounds must satisfy low < high, got [{config.low}, "
            f"{config.high})."
        )
    generator = np.random.default_rng(config.seed)
    return generator.integers(config.low, config.high, size=config.count).tolist()


def _describe(getter: Callable[[], int]) -> str:
    """Return the result of a heap query, or 'empty' for an empty heap."""
    try:
        return str(getter())
    except EmptyHeapError:
        return "empty"


def run_demo(
    values: Sequence[int],
    drain: str = "none",
    log: bool = False
) -> list[str]:
    """
    Run the min-max heap demonstration.

    Inserts the values in order, queries and extracts both ends, then queries
    both ends again, optionally draining the remaining values.

    Parameters
    ----------
    `values: Sequence[int]` - The values to insert, in order.

    `drain: str = "none"` - Drain the remaining values in ascending ("min")
    or descending ("max") order, or not at all ("none").

    `log: bool = False` - Whether the heap logs its pushes and pops.

    Returns
    -------
    `list[str]` - The lines of output.
    """
    if drain not in _DRAIN_CHOICES:
        raise ValueError(f"Drain must be one of {_DRAIN_CHOICES}, got {drain!r}.")
    heap: MinMaxHeap[int] = MinMaxHeap.from_iterable(values, log=log)

    lines: list[str] = [
        f"Min: {_describe(heap.peek_min)}",
        f"Max: {_describe(heap.peek_max)}",
        f"Extracted Min: {_describe(heap.pop_min)}",
        f"Extracted Max: {_describe(heap.pop_max)}",
        f"Min after extractions: {_describe(heap.peek_min)}",
        f"Max after extractions: {_describe(heap.peek_max)}"
    ]

    if drain != "none":
        pop = heap.pop_min if drain == "min" else heap.pop_max
        drained: list[str] = []
        while not heap.empty():
            drained.append(str(pop()))
        lines.append(f"Drained ({drain} first): {' '.join(drained)}")

    return lines


def _main(argv: Sequence[str] | None = None) -> int:
    """Run the min-max heap demo on the command line."""
    parser = argparse.ArgumentParser(
        prog="mmheap",
        description="Demonstrate a min-max heap (double-ended priority queue)."
    )
    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="A TOML file overriding the default demo configuration."
    )
    parser.add_argument(
        "-v", "--values",
        type=int,
        nargs="+",
        default=None,
        help="The values to insert, in order."
    )
    parser.add_argument(
        "-r", "--random",
        type=non_negative_int,
        default=None,
        help="Insert this many random values instead of explicit values."
    )
    parser.add_argument(
        "-s", "--seed",
        type=optional_int,
        default=argparse.SUPPRESS,
        help="The random seed, or 'None' for an unseeded generator."
    )
    parser.add_argument(
        "--drain",
        type=str,
        choices=_DRAIN_CHOICES,
        default=None,
        help="Drain the remaining values after the demo."
    )
    parser.add_argument(
        "--log",
        help="Log heap pushes and pops at debug level.",
        **bool_options(default=False)
    )
    args: argparse.Namespace = parser.parse_args(argv)

    try:
        config = _load_config(_DEFAULT_CONFIG_PATH)
        if args.config is not None:
            config = _load_config(args.config, config)
        if args.values is not None:
            config = config._replace(values=args.values, count=0)
        if args.random is not None:
            config = config._replace(count=args.random)
        if "seed" in args:
            config = config._replace(seed=args.seed)
        if args.drain is not None:
            config = config._replace(drain=args.drain)
        values = _generate_values(config)
    except ValueError as error:
        print(error)
        return 1

    if args.log:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s"
        )

    for line in run_demo(values, drain=config.drain, log=bool(args.log)):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(_main())
