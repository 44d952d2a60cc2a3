"""
Receipt numbers: ``{BRANCH_CODE}-{NNNN}``.

The pure helpers compute the next number from existing receipts. Inside
a booking transaction, ``allocate_receipt_number`` hands numbers out from
a per-branch ``ReceiptSequence`` row held under a row lock. The row
remembers the code it counts for, so a renamed branch starts again from
the highest receipt already issued under its new prefix.
"""

import logging
from typing import Iterable, Optional

from ..models import Booking, ReceiptSequence

logger = logging.getLogger(__name__)

RECEIPT_SEPARATOR = '-'
RECEIPT_DIGITS = 4


def receipt_prefix(branch_code: str) -> str:
    return f"{branch_code}{RECEIPT_SEPARATOR}"


def format_receipt_number(branch_code: str, number: int) -> str:
    """format_receipt_number('MAIN', 7) -> 'MAIN-0007'"""
    return f"{receipt_prefix(branch_code)}{number:0{RECEIPT_DIGITS}d}"


def parse_receipt_sequence(receipt_number: str) -> Optional[int]:
    """Numeric suffix after the last separator, or None if not numeric."""
    suffix = receipt_number.rsplit(RECEIPT_SEPARATOR, 1)[-1]
    if not suffix.isdigit():
        return None
    return int(suffix)


def highest_receipt_sequence(branch_code: str, existing_numbers: Iterable[str]) -> int:
    """
    Highest numeric suffix among receipts issued by ``branch_code``.

    Compared as integers, so MAIN-10000 ranks above MAIN-9999.
    """
    prefix = receipt_prefix(branch_code)
    highest = 0
    for receipt_number in existing_numbers:
        if not receipt_number.startswith(prefix):
            continue
        sequence = parse_receipt_sequence(receipt_number[len(prefix):])
        if sequence is not None and sequence > highest:
            highest = sequence
    return highest


def next_receipt_number(branch_code: str, existing_numbers: Iterable[str]) -> str:
    """Next receipt for the branch; ``{code}-0001`` when none exist."""
    return format_receipt_number(
        branch_code,
        highest_receipt_sequence(branch_code, existing_numbers) + 1
    )


def _issued_sequence(branch) -> int:
    existing = (
        Booking.objects
        .filter(receipt_number__startswith=receipt_prefix(branch.code))
        .values_list('receipt_number', flat=True)
    )
    return highest_receipt_sequence(branch.code, existing)


def allocate_receipt_number(*, branch, resync: bool = False) -> str:
    """
    Take the next receipt number for ``branch``.

    Must run inside ``transaction.atomic()``: the sequence row stays locked
    until the booking using the number commits or rolls back.

    Args:
        branch: Branch issuing the receipt
        resync: Re-seed the counter from existing receipts first (used when
            a previous attempt collided with the unique constraint)

    Returns:
        Receipt number string
    """
    sequence = (
        ReceiptSequence.objects
        .select_for_update()
        .filter(branch=branch)
        .first()
    )

    if sequence is None:
        sequence = ReceiptSequence.objects.create(
            branch=branch,
            branch_code=branch.code,
            last_number=_issued_sequence(branch)
        )
    elif sequence.branch_code != branch.code:
        logger.info(
            "Branch code changed (%s -> %s), reseeding receipt sequence",
            sequence.branch_code or '?', branch.code,
        )
        sequence.branch_code = branch.code
        sequence.last_number = _issued_sequence(branch)
    elif resync:
        issued = _issued_sequence(branch)
        if issued > sequence.last_number:
            logger.warning(
                "Receipt sequence for branch %s was behind (%s < %s), resyncing",
                branch.code, sequence.last_number, issued,
            )
            sequence.last_number = issued

    sequence.last_number += 1
    sequence.save(update_fields=['branch_code', 'last_number', 'updated_at'])

    return format_receipt_number(branch.code, sequence.last_number)
