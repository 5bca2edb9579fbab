"""Voting API schemas."""

from pydantic import BaseModel


class VotingSchema(BaseModel):
    """Voting with its ordered choices."""

    id: str
    choices: list[str]


class ChoiceStrength(BaseModel):
    """One side of a duel."""

    index: int
    choice: str
    strength: int


class DuelSchema(BaseModel):
    """Pairwise comparison of two choices."""

    left: ChoiceStrength
    right: ChoiceStrength


class VotingResultSchema(BaseModel):
    """Tally for a single choice."""

    choice: str
    index: int
    wins: int
    percentage: float
    strength: int = 0
    advantage: int = 0


class VotingResultsSchema(BaseModel):
    """Computed results of a voting."""

    tie: bool = False
    results: list[VotingResultSchema]
    duels: list[DuelSchema] | None = None


# Request/response bodies


class VotingRequest(BaseModel):
    choices: list[str]


class SetChoiceRequest(BaseModel):
    choice: str
    index: int


class SetChoiceResponse(BaseModel):
    choices: list[str]


class BallotSchema(BaseModel):
    """Ranks by choice label, 1 being the most preferred."""

    ballot: dict[str, int]


class VoteResponse(BaseModel):
    revoted: bool


class OkResponse(BaseModel):
    code: int
    message: str
