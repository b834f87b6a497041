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

"""Module defining argument parsing utilities."""

from typing import Any

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "bool_options",
    "optional_bool",
    "optional_int",
    "non_negative_int"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


def bool_options(
    default: bool | None = None,
    const: bool | None = True
) -> dict[str, Any]:
    """
    Create the keyword options for a Boolean flag argument.

    The flag may be given alone (giving `const`), with an explicit value such
    as `--flag off`, or left out (giving `default`).

    Returns
    -------
    `dict[str, Any]` - Keyword arguments for `ArgumentParser.add_argument()`.
    """
    return {
        "nargs": "?",
        "default": default,
        "const": const,
        "type": optional_bool
    }


def optional_bool(value: str) -> bool | None:
    """
    Optional boolean argument type.

    Return None if the value is an empty string or the string "None",
    otherwise return the input string parsed as a boolean.
    """
    if not value or value == "None":
        return None
    if value.lower() in ("true", "yes", "on", "1"):
        return True
    if value.lower() in ("false", "no", "off", "0"):
        return False
    message = f"Cannot parse {value} as a boolean."
    print(message)
    raise ValueError(message)


def optional_int(value: str) -> int | None:
    """
    Optional integer argument type.

    Return None if the value is an empty string or the string "None",
    otherwise return the input string parsed as an integer.
    """
    if not value or value == "None":
        return None
    try:
        return int(value)
    except ValueError as error:
        print(f"Cannot parse {value} as int: {error}")
        raise error


def non_negative_int(value: str) -> int:
    """Integer argument type that rejects negative values."""
    number = optional_int(value)
    if number is None or number < 0:
        message = f"Expected a non-negative integer, got {value!r}."
        print(message)
        raise ValueError(message)
    return number
