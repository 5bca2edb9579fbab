"""Voting API client."""

from ddclient.voting.client import VotingClient
from ddclient.voting.schemas import (
    BallotSchema,
    ChoiceStrength,
    DuelSchema,
    VotingResultSchema,
    VotingResultsSchema,
    VotingSchema,
)

__all__ = [
    "VotingClient",
    "VotingSchema",
    "VotingResultSchema",
    "VotingResultsSchema",
    "DuelSchema",
    "ChoiceStrength",
    "BallotSchema",
]
