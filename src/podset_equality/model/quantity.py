"""Exact Kubernetes resource quantities."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import MAX_EMAX, MIN_EMIN, ROUND_UP, Decimal, InvalidOperation, localcontext

from podset_equality.config import BINARY_SUFFIXES, DECIMAL_SUFFIXES


class QuantityError(ValueError):
    """Raised when a string is not a valid resource quantity."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid resource quantity: {text!r}")


# <signed number><suffix>; the exponent form must be tried before the bare "E" (exa)
_QUANTITY_RE = re.compile(
    r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))"
    r"(?P<suffix>Ki|Mi|Gi|Ti|Pi|Ei|[eE][+-]?\d+|[numkMGTPE])?$"
)


@dataclass(frozen=True, eq=False)
class Quantity:
    """A resource amount such as ``500m``, ``2Gi`` or ``1e3``.

    Two quantities are equal when their values are equal, whatever the
    spelling: ``Quantity.parse("1") == Quantity.parse("1000m")``.
    """

    raw: str
    value: Decimal

    @classmethod
    def parse(cls, text: str | int | float) -> Quantity:
        """Parse a quantity string, or a plain YAML number."""
        if isinstance(text, bool):
            raise QuantityError(str(text))
        raw = str(text).strip()
        match = _QUANTITY_RE.match(raw)
        if not match:
            raise QuantityError(raw)

        try:
            number = Decimal(match.group("number"))
        except InvalidOperation as e:
            raise QuantityError(raw) from e

        suffix = match.group("suffix") or ""
        try:
            value = _scale(number, suffix)
        except ArithmeticError as e:
            # exponent outside what Decimal can represent
            raise QuantityError(raw) from e
        return cls(raw=raw, value=value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return self.raw


def parse_resource_list(data: dict | None) -> dict[str, Quantity]:
    """Parse a ResourceList mapping (resource name -> quantity)."""
    if not data:
        return {}
    if not isinstance(data, dict):
        raise QuantityError(str(data))
    return {str(name): Quantity.parse(amount) for name, amount in data.items()}


# Smallest representable amount; anything finer is rounded up to it
_NANO = Decimal("1e-9")


def _scale(number: Decimal, suffix: str) -> Decimal:
    """Apply a suffix to number without losing any digits."""
    with localcontext() as ctx:
        # wide enough for the coefficient times 2**60
        ctx.prec = max(28, len(number.as_tuple().digits) + 20)
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN

        if suffix in BINARY_SUFFIXES:
            value = number * BINARY_SUFFIXES[suffix]
        elif suffix in DECIMAL_SUFFIXES:
            value = number.scaleb(DECIMAL_SUFFIXES[suffix])
        else:
            # decimal exponent, e.g. "e3" or "E-2"
            value = number.scaleb(int(suffix[1:]))

        if value.as_tuple().exponent < -9:
            value = value.quantize(_NANO, rounding=ROUND_UP)
    return value
