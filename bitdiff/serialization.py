"""Map comparison outcomes to their JSON representation."""

from .models import (
    BitMismatch,
    ComparisonOutcome,
    EntryMissing,
    Identical,
    LeftMissing,
    RightMissing,
    SizeMismatch,
)

# External type tag for each outcome
OUTCOME_TAGS = {
    EntryMissing: "EntryDoesNotExist",
    LeftMissing: "LeftSideMissing",
    RightMissing: "RightSideMissing",
    Identical: "FullMatch",
    BitMismatch: "SizeMatch",
    SizeMismatch: "SizeMismatch",
}


def outcome_tag(outcome: ComparisonOutcome) -> str:
    return OUTCOME_TAGS[type(outcome)]


def outcome_to_dict(outcome: ComparisonOutcome) -> dict:
    """
    Serialize an outcome as {"type": tag}.

    Only SizeMatch results carry a "diffs" list of {"offset", "length"}.
    """
    result = {"type": outcome_tag(outcome)}
    if isinstance(outcome, BitMismatch):
        result["diffs"] = [run.to_dict() for run in outcome.runs]
    return result
