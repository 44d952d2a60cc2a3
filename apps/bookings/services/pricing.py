"""
Booking price calculation.

Money is handled as ``Decimal`` throughout. Each amount is rounded to
two places (half up) before it takes part in a sum, so the total always
equals the sum of the amounts shown on the receipt.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, List, Optional, Sequence, Tuple

from ..models import DeliveryType
from .exceptions import BookingValidationError, ConfigurationMissingError

TWO_PLACES = Decimal('0.01')
ZERO = Decimal('0.00')
HUNDRED = Decimal('100')

# Largest amount a booking money column (10 digits, 2 places) can hold
MAX_AMOUNT = Decimal('99999999.99')


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value) -> Decimal:
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


@dataclass
class QuoteLine:
    item: Any
    units: int
    unit_price: Decimal
    line_total: Decimal


@dataclass
class BookingQuote:
    subtotal_amount: Decimal
    surcharge_percentage: Decimal
    surcharge_amount: Decimal
    amount_total: Decimal
    sales_tax_percentage: Decimal
    sales_tax_amount: Decimal
    hanger_units: int
    hanger_amount: Decimal
    total_amount: Decimal
    number_of_units: int
    number_of_pieces: int
    lines: List[QuoteLine] = field(default_factory=list)
    booking_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    receipt_number: Optional[str] = None


def surcharge_percentage_for(delivery_type: str, configuration) -> Decimal:
    """Surcharge percentage applied on top of the subtotal."""
    if delivery_type == DeliveryType.NORMAL:
        return ZERO
    if delivery_type == DeliveryType.URGENT:
        return to_decimal(configuration.urgent_charges_percentage)
    if delivery_type == DeliveryType.SAME_DAY_URGENT:
        return to_decimal(configuration.same_day_urgent_charges_percentage)
    raise BookingValidationError({
        'delivery_type': f'"{delivery_type}" is not a valid delivery type.'
    })


def _validate(lines, delivery_type, hanger_units):
    errors = {}

    if delivery_type not in DeliveryType.values:
        errors['delivery_type'] = [f'"{delivery_type}" is not a valid delivery type.']

    if not lines:
        errors['selected_items'] = ['Select at least one item.']

    for position, (item, units) in enumerate(lines, start=1):
        if item is None:
            errors.setdefault('selected_items', []).append(
                f'Item #{position} does not exist.'
            )
        elif units is None or units < 1:
            errors.setdefault('selected_items', []).append(
                f'Item #{position}: quantity must be at least 1.'
            )

    if hanger_units is None or hanger_units < 0:
        errors['hanger_units'] = ['Hanger units cannot be negative.']

    if errors:
        raise BookingValidationError(errors)


def calculate_quote(
    lines: Sequence[Tuple[Any, int]],
    delivery_type: str,
    hanger_units: int,
    configuration,
) -> BookingQuote:
    """
    Price a booking.

    Args:
        lines: (item, quantity) pairs; items expose unit_price and
            units_per_piece. A ``None`` item stands for an unknown reference.
        delivery_type: One of DeliveryType values
        hanger_units: Number of hangers to charge for
        configuration: PricingConfiguration (or any object with its fields)

    Returns:
        BookingQuote without dates or receipt number

    Raises:
        ConfigurationMissingError: If configuration is None
        BookingValidationError: For invalid lines, hanger count or delivery type,
            or a total too large to store
    """
    if configuration is None:
        raise ConfigurationMissingError()

    _validate(lines, delivery_type, hanger_units)

    quote_lines = []
    subtotal = ZERO
    number_of_units = 0
    number_of_pieces = 0

    for item, units in lines:
        unit_price = quantize_money(item.unit_price)
        line_total = quantize_money(unit_price * units)
        quote_lines.append(QuoteLine(
            item=item,
            units=units,
            unit_price=unit_price,
            line_total=line_total,
        ))
        subtotal += line_total
        number_of_units += units * (item.units_per_piece or 0)
        number_of_pieces += units

    surcharge_percentage = surcharge_percentage_for(delivery_type, configuration)
    amount_total = quantize_money(subtotal * (1 + surcharge_percentage / HUNDRED))
    surcharge_amount = amount_total - subtotal

    sales_tax_percentage = to_decimal(configuration.sales_tax_percentage)
    sales_tax_amount = quantize_money(amount_total * sales_tax_percentage / HUNDRED)

    hanger_amount = quantize_money(
        to_decimal(configuration.hanger_charge_per_unit or 0) * hanger_units
    )

    total_amount = amount_total + sales_tax_amount + hanger_amount
    if total_amount > MAX_AMOUNT:
        raise BookingValidationError({
            'selected_items': f'Booking total {total_amount} exceeds the maximum of {MAX_AMOUNT}.'
        })

    return BookingQuote(
        subtotal_amount=subtotal,
        surcharge_percentage=surcharge_percentage,
        surcharge_amount=surcharge_amount,
        amount_total=amount_total,
        sales_tax_percentage=sales_tax_percentage,
        sales_tax_amount=sales_tax_amount,
        hanger_units=hanger_units,
        hanger_amount=hanger_amount,
        total_amount=total_amount,
        number_of_units=number_of_units,
        number_of_pieces=number_of_pieces,
        lines=quote_lines,
    )
