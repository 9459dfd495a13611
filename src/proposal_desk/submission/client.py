"""HTTP client for the marketplace proposal submission endpoint."""

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict

from proposal_desk.errors import NotAuthenticatedError, SubmissionError
from proposal_desk.settings import SubmissionSettings

from .payload import ProposalPayload

logger = logging.getLogger(__name__)


class SubmissionResponse(BaseModel):
    """Body returned by the submission endpoint."""

    model_config = ConfigDict(extra="allow")

    success: bool = False
    message: Optional[str] = None


class ProposalClient:
    """
    Posts proposals to {api_url}/provider/proposals as multipart form data
    with a bearer token. Non-2xx responses raise SubmissionError carrying the
    server's message.
    """

    PROPOSALS_PATH = "/provider/proposals"

    DEFAULT_HEADERS = {
        "Accept": "application/json",
        "User-Agent": "proposal-desk/0.1",
    }

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        *,
        settings: Optional[SubmissionSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            base_url: API base URL (defaults to settings.api_url)
            token: Bearer token (defaults to settings.token)
            settings: Optional SubmissionSettings; PROPOSAL_DESK_* env vars when omitted
            client: Optional httpx async client; not closed by this instance
        """
        settings = settings or SubmissionSettings.from_env()
        self._base_url = (base_url or settings.api_url).rstrip("/")
        self._token = token if token is not None else settings.token
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=settings.timeout,
            headers=self.DEFAULT_HEADERS,
        )

    async def submit_proposal(self, payload: ProposalPayload) -> SubmissionResponse:
        """POST the payload; returns the parsed body for 2xx responses."""
        if not self._token:
            raise NotAuthenticatedError()

        url = self._base_url + self.PROPOSALS_PATH
        headers = {"Authorization": f"Bearer {self._token}"}
        parts = payload.multipart()
        logger.debug(
            "POST %s for %s (%d milestones, %d attachments)",
            url,
            payload.reference_id,
            len(payload.milestones),
            len(payload.attachments),
        )

        try:
            resp = await self._client.post(
                url,
                files=parts,
                headers=headers,
            )
        except httpx.RequestError as e:
            raise SubmissionError(str(e) or "Failed to submit proposal") from e

        body = _json_body(resp)
        if resp.is_error:
            message = body.get("message") or "Proposal submit failed"
            raise SubmissionError(str(message), status_code=resp.status_code)
        return SubmissionResponse.model_validate(body)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ProposalClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def _json_body(resp: httpx.Response) -> dict[str, Any]:
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
