"""
Roster loading.

Turns a roster JSON document into models after validating it. This is
the boundary where bad input is reported; past it the engine assumes
well-typed data.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from .models.result import Result
from .models.session import Roster
from .utils.file_utils import load_json
from .validation.roster_validator import RosterValidator


logger = logging.getLogger(__name__)


def roster_from_dict(data: Dict[str, Any]) -> Result[Roster]:
    """
    Validate a roster document and build the Roster.

    Args:
        data: Parsed document ``{"students": [...], "groups": [...]}``

    Returns:
        Result containing the Roster, or a failure carrying the
        validation summary
    """
    validation = RosterValidator().validate(data)

    if not validation.is_valid:
        logger.error(f"Roster validation failed with {len(validation.errors)} errors")
        return Result.failure(validation.get_summary())

    for warning in validation.warnings:
        logger.warning(f"Roster: {warning}")

    roster = Roster.from_dict(data)
    session_count = sum(len(owner.sessions) for owner in roster.owners())
    return Result.success(
        roster,
        f"Loaded {len(roster.students)} students, {len(roster.groups)} groups, "
        f"{session_count} sessions"
    )


def load_roster(filepath: Path) -> Result[Roster]:
    """
    Load and validate a roster JSON file.

    Examples:
        >>> result = load_roster(Path("roster.json"))
        >>> roster = result.unwrap()
    """
    data = load_json(Path(filepath))
    if data is None:
        return Result.failure(f"Could not read roster file: {filepath}")

    result = roster_from_dict(data)
    if result.is_success:
        logger.info(f"{result.message} from {filepath}")
    return result
