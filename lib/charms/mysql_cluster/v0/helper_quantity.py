# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Helpers for reading and writing Kubernetes resource quantities ("200m", "1Gi", "8G")."""
from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Union

from charms.mysql_cluster.v0.exceptions import MysqlClusterDefaultsError
from kubernetes.utils import parse_quantity

# The unique Charmhub library identifier, never change it
LIBID = "6d8f0a2c4e6b4d1f9a3c5e7b9d1f3a5c"

# Increment this major API version when introducing breaking changes
LIBAPI = 0

# Increment this PATCH version before using `charmcraft publish-lib` or reset
# to 0 if you are raising the major API version
LIBPATCH = 1


DECIMAL_SI_SUFFIXES = ["", "k", "M", "G", "T", "P", "E"]


def parse(quantity: Union[str, int, Decimal]) -> Decimal:
    """Parse a quantity string into its exact decimal value.

    Raises:
        MysqlClusterDefaultsError if the quantity is malformed.
    """
    try:
        return parse_quantity(quantity)
    except (ValueError, TypeError, InvalidOperation) as e:
        raise MysqlClusterDefaultsError(f"Invalid resource quantity {quantity!r}: {e}")


def value(quantity: Union[str, int, Decimal]) -> int:
    """Integer value of a quantity, rounded up away from zero like `Quantity.Value()`."""
    parsed = parse(quantity)
    if parsed < 0:
        return -int((-parsed).to_integral_value(rounding=ROUND_CEILING))
    return int(parsed.to_integral_value(rounding=ROUND_CEILING))


def format_decimal_si(val: int) -> str:
    """Canonical DecimalSI form of an integer: the largest exact power of 1000 suffix.

    858993459 -> "858993459", 800000000 -> "800M", 0 -> "0".
    """
    if val == 0:
        return "0"

    mantissa, exponent = val, 0
    while mantissa % 1000 == 0 and exponent < len(DECIMAL_SI_SUFFIXES) - 1:
        mantissa //= 1000
        exponent += 1

    return f"{mantissa}{DECIMAL_SI_SUFFIXES[exponent]}"
