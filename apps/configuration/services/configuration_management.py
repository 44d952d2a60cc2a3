"""Pricing configuration read/upsert service."""

import logging
from typing import Any, Dict, Optional

from django.db import transaction

from ..models import PricingConfiguration
from .exceptions import ConfigurationMissingError

logger = logging.getLogger(__name__)

CONFIGURATION_FIELDS = [
    'sales_tax_percentage',
    'number_of_days_for_normal',
    'number_of_days_for_urgent',
    'urgent_charges_percentage',
    'same_day_urgent_charges_percentage',
    'hanger_charge_per_unit',
    'ntn_number',
]


def find_configuration() -> Optional[PricingConfiguration]:
    """Return the active configuration, or ``None`` when none was saved."""
    return PricingConfiguration.objects.order_by('id').first()


def get_configuration() -> PricingConfiguration:
    """
    Return the active configuration.

    Raises:
        ConfigurationMissingError: If no configuration exists
    """
    configuration = find_configuration()
    if configuration is None:
        raise ConfigurationMissingError()
    return configuration


@transaction.atomic
def save_configuration(*, data: Dict[str, Any]) -> PricingConfiguration:
    """
    Create the configuration or update the existing one.

    Only the known fields are applied. New bookings pick up the change
    immediately; existing bookings keep the amounts they were booked with.

    Args:
        data: Validated configuration fields

    Returns:
        The saved PricingConfiguration
    """
    fields = {k: v for k, v in data.items() if k in CONFIGURATION_FIELDS}

    configuration = (
        PricingConfiguration.objects
        .select_for_update()
        .order_by('id')
        .first()
    )

    if configuration is None:
        configuration = PricingConfiguration.objects.create(**fields)
        logger.info("Pricing configuration created (id=%s)", configuration.id)
        return configuration

    for field, value in fields.items():
        setattr(configuration, field, value)
    configuration.save()

    logger.info(
        "Pricing configuration updated (id=%s, fields=%s)",
        configuration.id,
        sorted(fields),
    )
    return configuration
