"""Kubernetes resource quantity helpers."""

from __future__ import annotations

import logging
from decimal import Decimal

from kubernetes.utils import parse_quantity

logger = logging.getLogger(__name__)

_MIB = Decimal(1024 * 1024)


def to_quantity(raw: str | int | float | None) -> Decimal | None:
    """Parse a quantity such as ``100m`` or ``20Mi``.

    Unparsable values are treated as undeclared rather than failing the run.
    """
    if raw is None or raw == "":
        return None
    try:
        return parse_quantity(raw)
    except ValueError:
        logger.debug("Ignoring unparsable quantity %r", raw)
        return None


def to_millicores(q: Decimal) -> int:
    return int(q * 1000)


def to_mebibytes(q: Decimal) -> int:
    return int(q / _MIB)


def to_percentage(usage: Decimal, baseline: Decimal) -> float:
    """Return ``usage`` as a percentage of ``baseline``."""
    if baseline <= 0:
        return 0.0
    return float(usage / baseline * 100)
