"""Voting API client."""

from collections.abc import Mapping, Sequence

from ddclient.base import BaseClient, encode_segment
from ddclient.errors import BadRequestError, BadRequestReason
from ddclient.result import Err, Result
from ddclient.voting.schemas import (
    BallotSchema,
    OkResponse,
    SetChoiceRequest,
    SetChoiceResponse,
    VoteResponse,
    VotingRequest,
    VotingResultsSchema,
    VotingSchema,
)


def _invalid(reason: BadRequestReason, message: str) -> Err:
    return Err(BadRequestError.local(reason, message))


def _voting_path(voting_id: str) -> str:
    return f"v1/votings/{encode_segment(voting_id)}"


def _ballot_path(voting_id: str, voter_id: str) -> str:
    return f"{_voting_path(voting_id)}/ballots/{encode_segment(voter_id)}"


def _check_ids(voting_id: str, voter_id: str | None = None) -> Err | None:
    if not voting_id:
        return _invalid(BadRequestReason.INVALID_DATA, "Voting ID is required")
    if voter_id is not None and not voter_id:
        return _invalid(BadRequestReason.INVALID_VOTER_ID, "Voter ID is required")
    return None


class VotingClient(BaseClient):
    """Client for the Direct Decisions v1 voting endpoints.

    Every method returns ``Ok`` with the decoded payload or ``Err`` with an
    ``ApiError``; nothing is retried or cached.

    Example::

        async with VotingClient("my-api-key") as client:
            result = await client.create_voting(["Einstein", "Newton"])
            match result:
                case Ok(voting):
                    print(voting.id)
                case Err(error):
                    print(error.kind, error.message)
    """

    async def create_voting(self, choices: Sequence[str]) -> Result[VotingSchema]:
        """POST /v1/votings - create a voting with the given choices."""
        if not choices:
            return _invalid(BadRequestReason.MISSING_CHOICES, "At least one choice is required")
        return await self._request("POST", "v1/votings", VotingSchema, VotingRequest(choices=list(choices)))

    async def get_voting(self, voting_id: str) -> Result[VotingSchema]:
        """GET /v1/votings/{id} - voting with its choices."""
        if err := _check_ids(voting_id):
            return err
        return await self._request("GET", _voting_path(voting_id), VotingSchema)

    async def delete_voting(self, voting_id: str) -> Result[None]:
        """DELETE /v1/votings/{id}."""
        if err := _check_ids(voting_id):
            return err
        result = await self._request("DELETE", _voting_path(voting_id), OkResponse, allow_empty=True)
        return result.map(lambda _: None)

    async def set_choice(self, voting_id: str, choice: str, index: int) -> Result[list[str]]:
        """POST /v1/votings/{id}/choices - add, move or remove a choice.

        A new choice is inserted at ``index`` and an existing one is moved
        there. Index -1 removes the choice. Returns the updated choices.
        """
        if err := _check_ids(voting_id):
            return err
        if not choice:
            return _invalid(BadRequestReason.CHOICE_REQUIRED, "Choice is required")
        if index < -1:
            return _invalid(BadRequestReason.INVALID_DATA, f"Invalid choice index: {index}")

        result = await self._request(
            "POST",
            f"{_voting_path(voting_id)}/choices",
            SetChoiceResponse,
            SetChoiceRequest(choice=choice, index=index),
        )
        return result.map(lambda resp: resp.choices)

    async def vote(self, voting_id: str, voter_id: str, ballot: Mapping[str, int]) -> Result[bool]:
        """POST /v1/votings/{id}/ballots/{voter} - cast or replace a ballot.

        The ballot maps choices to ranks, 1 being the most preferred; not
        every choice has to be ranked. Returns True when an earlier ballot
        of the same voter was replaced.
        """
        if err := _check_ids(voting_id, voter_id):
            return err
        if not ballot:
            return _invalid(BadRequestReason.BALLOT_REQUIRED, "Ballot is required")
        if any(rank < 0 for rank in ballot.values()):
            return _invalid(BadRequestReason.INVALID_DATA, "Ranks must not be negative")

        result = await self._request(
            "POST",
            _ballot_path(voting_id, voter_id),
            VoteResponse,
            BallotSchema(ballot=dict(ballot)),
        )
        return result.map(lambda resp: resp.revoted)

    async def unvote(self, voting_id: str, voter_id: str) -> Result[None]:
        """DELETE /v1/votings/{id}/ballots/{voter} - retract a ballot."""
        if err := _check_ids(voting_id, voter_id):
            return err
        result = await self._request("DELETE", _ballot_path(voting_id, voter_id), OkResponse, allow_empty=True)
        return result.map(lambda _: None)

    async def get_ballot(self, voting_id: str, voter_id: str) -> Result[dict[str, int]]:
        """GET /v1/votings/{id}/ballots/{voter} - ranks by choice."""
        if err := _check_ids(voting_id, voter_id):
            return err
        result = await self._request("GET", _ballot_path(voting_id, voter_id), BallotSchema)
        return result.map(lambda resp: resp.ballot)

    async def get_voting_results(self, voting_id: str) -> Result[VotingResultsSchema]:
        """GET /v1/votings/{id}/results - computed results."""
        if err := _check_ids(voting_id):
            return err
        return await self._request("GET", f"{_voting_path(voting_id)}/results", VotingResultsSchema)

    async def get_voting_results_duels(self, voting_id: str) -> Result[VotingResultsSchema]:
        """GET /v1/votings/{id}/results/duels - results with pairwise duels."""
        if err := _check_ids(voting_id):
            return err
        return await self._request("GET", f"{_voting_path(voting_id)}/results/duels", VotingResultsSchema)
