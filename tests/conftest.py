"""Shared fixtures: an in-memory Direct Decisions service behind httpx.MockTransport."""

import itertools
import json
from collections.abc import Callable
from urllib.parse import unquote

import httpx
import pytest
import pytest_asyncio

from ddclient import VotingClient

API_KEY = "test-token"
API_URL = "https://api.test"


def json_response(status: int, body, headers: dict | None = None) -> httpx.Response:
    return httpx.Response(status, json=body, headers=headers)


def error_response(status: int, message: str, errors: list[str] | None = None) -> httpx.Response:
    body = {"code": status, "message": message}
    if errors is not None:
        body["errors"] = errors
    return json_response(status, body)


class FakeDirectDecisions:
    """Minimal stateful stand-in for the v1 votings API."""

    def __init__(self, token: str = API_KEY):
        self.token = token
        self.votings: dict[str, list[str]] = {}
        self.ballots: dict[str, dict[str, dict[str, int]]] = {}
        self.requests: list[httpx.Request] = []
        self._ids = itertools.count(1)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return error_response(401, "Unauthorized")

        parts = [unquote(p) for p in request.url.raw_path.decode().strip("/").split("/")]
        if parts[:2] != ["v1", "votings"]:
            return error_response(404, "Not Found")
        rest = parts[2:]
        method = request.method

        if not rest and method == "POST":
            return self._create(json.loads(request.content))

        voting_id = rest[0] if rest else None
        if voting_id not in self.votings:
            return error_response(404, "Not Found")

        match rest[1:], method:
            case [], "GET":
                return json_response(200, {"id": voting_id, "choices": self.votings[voting_id]})
            case [], "DELETE":
                del self.votings[voting_id]
                self.ballots.pop(voting_id, None)
                return json_response(200, {"code": 200, "message": "OK"})
            case ["choices"], "POST":
                return self._set_choice(voting_id, json.loads(request.content))
            case ["ballots", voter], "POST":
                return self._vote(voting_id, voter, json.loads(request.content))
            case ["ballots", voter], "GET":
                ballot = self.ballots[voting_id].get(voter)
                if ballot is None:
                    return error_response(404, "Not Found")
                return json_response(200, {"ballot": ballot})
            case ["ballots", voter], "DELETE":
                if self.ballots[voting_id].pop(voter, None) is None:
                    return error_response(404, "Not Found")
                return json_response(200, {"code": 200, "message": "OK"})
            case ["results"], "GET":
                return json_response(200, self._results(voting_id))
            case ["results", "duels"], "GET":
                return json_response(200, self._results(voting_id, duels=True))
        return error_response(405, "Method Not Allowed")

    def _create(self, body: dict) -> httpx.Response:
        choices = body.get("choices") or []
        if not choices:
            return error_response(400, "Bad Request", ["Missing choices"])
        voting_id = f"{next(self._ids):020x}"
        self.votings[voting_id] = list(choices)
        self.ballots[voting_id] = {}
        return json_response(200, {"id": voting_id, "choices": choices})

    def _set_choice(self, voting_id: str, body: dict) -> httpx.Response:
        choices = self.votings[voting_id]
        choice, index = body["choice"], body["index"]
        if choice in choices:
            choices.remove(choice)
        if index >= 0:
            choices.insert(index, choice)
        return json_response(200, {"choices": choices})

    def _vote(self, voting_id: str, voter: str, body: dict) -> httpx.Response:
        ballot = body.get("ballot") or {}
        if not ballot:
            return error_response(400, "Bad Request", ["Ballot required"])
        if any(choice not in self.votings[voting_id] for choice in ballot):
            return error_response(400, "Bad Request", ["Invalid data"])
        revoted = voter in self.ballots[voting_id]
        self.ballots[voting_id][voter] = ballot
        return json_response(200, {"revoted": revoted})

    def _results(self, voting_id: str, duels: bool = False) -> dict:
        """Count first preferences per choice."""
        choices = self.votings[voting_id]
        ballots = list(self.ballots[voting_id].values())
        wins = dict.fromkeys(choices, 0)
        for ballot in ballots:
            best = min(ballot.values())
            for choice, rank in ballot.items():
                if rank == best:
                    wins[choice] += 1
        total = len(ballots) or 1
        results = [
            {"choice": c, "index": i, "wins": wins[c], "percentage": wins[c] / total * 100}
            for i, c in enumerate(choices)
        ]
        results.sort(key=lambda r: -r["wins"])
        body = {"tie": len(results) > 1 and results[0]["wins"] == results[1]["wins"], "results": results}
        if duels:
            body["duels"] = [
                {
                    "left": {"index": i, "choice": a, "strength": wins[a]},
                    "right": {"index": j, "choice": b, "strength": wins[b]},
                }
                for (i, a), (j, b) in itertools.combinations(enumerate(choices), 2)
            ]
        return body


def client_for(handler: Callable[[httpx.Request], httpx.Response], api_key: str = API_KEY) -> VotingClient:
    """Client whose transport answers every request with ``handler``."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return VotingClient(api_key, api_url=API_URL, http_client=http_client)


@pytest.fixture
def service() -> FakeDirectDecisions:
    return FakeDirectDecisions()


@pytest_asyncio.fixture
async def client(service):
    async with httpx.AsyncClient(transport=httpx.MockTransport(service.handler)) as http_client:
        yield VotingClient(API_KEY, api_url=API_URL, http_client=http_client)


@pytest.fixture
def make_client():
    return client_for
