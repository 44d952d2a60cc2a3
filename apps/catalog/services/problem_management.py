"""Problem label CRUD service."""

from django.db import transaction

from ..models import Problem
from .exceptions import ProblemNotFoundError, DuplicateProblemError


@transaction.atomic
def create_problem(*, name: str) -> Problem:
    """
    Create a problem label.

    Raises:
        DuplicateProblemError: If a label with the same name exists
    """
    name = name.strip()
    if Problem.objects.filter(name__iexact=name).exists():
        raise DuplicateProblemError(f"Problem '{name}' already exists")

    return Problem.objects.create(name=name)


@transaction.atomic
def update_problem(*, problem_id: int, name: str) -> Problem:
    """
    Rename a problem label.

    Bookings store issue labels as text, so renaming does not rewrite them.

    Raises:
        ProblemNotFoundError: If label doesn't exist
        DuplicateProblemError: If another label has the name
    """
    try:
        problem = Problem.objects.select_for_update().get(id=problem_id)
    except Problem.DoesNotExist:
        raise ProblemNotFoundError(f"Problem {problem_id} not found")

    name = name.strip()
    if Problem.objects.filter(name__iexact=name).exclude(id=problem.id).exists():
        raise DuplicateProblemError(f"Problem '{name}' already exists")

    problem.name = name
    problem.save(update_fields=['name', 'updated_at'])
    return problem


@transaction.atomic
def delete_problem(*, problem_id: int) -> None:
    """
    Delete a problem label.

    Raises:
        ProblemNotFoundError: If label doesn't exist
    """
    deleted, _ = Problem.objects.filter(id=problem_id).delete()
    if not deleted:
        raise ProblemNotFoundError(f"Problem {problem_id} not found")
