"""HTTP client for the Zermelo portal API.

ZermeloClient wraps the two calls the CLI needs: exchanging a one-time
auth code (shown in the portal under Koppelingen -> Koppel App) for a
durable access token, and fetching the user's appointments in a time range.
Calls are made once; failures are classified and raised, never retried.
"""

import requests
from pydantic import ValidationError

from src.zermelo_cli.config import get_settings
from src.zermelo_cli.errors import AuthenticationError, FetchError
from src.zermelo_cli.logging import get_logger
from src.zermelo_cli.models import Appointment, Session

logger = get_logger(__name__)


class ZermeloClient:
    """Minimal Zermelo API client.

    Each school has its own portal host; the base URL is built per call from
    the api_url template.
    """

    def __init__(self, api_url: str | None = None, timeout: float | None = None) -> None:
        """Initialize ZermeloClient.

        Args:
            api_url: Base URL template containing ``{school}``. Defaults to settings.
            timeout: Per-request timeout in seconds. Defaults to settings.
        """
        settings = get_settings()
        self.api_url = api_url or settings.api_url
        self.timeout = timeout if timeout is not None else settings.request_timeout

    def base_url(self, school: str) -> str:
        return self.api_url.format(school=school).rstrip("/")

    def authenticate(self, school: str, auth_code: str) -> str:
        """Exchange an auth code for an access token.

        The portal shows the code in groups of three digits; spaces are removed
        before sending.

        Args:
            school: School identifier (portal subdomain).
            auth_code: One-time code from the portal.

        Returns:
            The access token.

        Raises:
            AuthenticationError: On transport failure, rejected code or a
                response without a token.
        """
        url = f"{self.base_url(school)}/oauth/token"
        code = auth_code.replace(" ", "")
        logger.info("authentication_started", school=school, url=url)

        try:
            resp = requests.post(
                url,
                data={"grant_type": "authorization_code", "code": code},
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.warning("authentication_timeout", error=str(e))
            raise AuthenticationError(f"authentication timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            logger.error("authentication_error", error=str(e), type=type(e).__name__)
            raise AuthenticationError(f"could not reach {url}: {e}") from e

        if resp.status_code != 200:
            logger.error("authentication_failed", status=resp.status_code)
            raise AuthenticationError(
                f"server rejected the authentication code (HTTP {resp.status_code})",
                notes=("auth codes can only be used once; request a new one in the portal",),
            )

        try:
            access_token = resp.json()["access_token"]
        except (ValueError, KeyError, TypeError) as e:
            logger.error("authentication_failed", reason="no_access_token")
            raise AuthenticationError("response did not contain an access token") from e
        if not isinstance(access_token, str) or not access_token:
            raise AuthenticationError("response did not contain an access token")

        logger.info("authentication_succeeded", school=school)
        return access_token

    def construct_session(self, school: str, access_token: str) -> Session:
        return Session(school=school, access_token=access_token)

    def fetch_appointments(self, session: Session, start: int, end: int) -> list[Appointment]:
        """Fetch the user's appointments between two epoch timestamps.

        Args:
            session: Authorized session.
            start: Range start (epoch seconds, inclusive).
            end: Range end (epoch seconds).

        Returns:
            Appointments in the order the service returned them.

        Raises:
            FetchError: On transport failure, non-200 status, malformed body
                or an appointment that does not validate.
        """
        url = f"{self.base_url(session.school)}/appointments"
        logger.info("fetch_started", school=session.school, start=start, end=end)

        try:
            resp = requests.get(
                url,
                params={"user": "~me", "start": start, "end": end},
                headers={"Authorization": f"Bearer {session.access_token}"},
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.warning("fetch_timeout", error=str(e))
            raise FetchError(f"fetching appointments timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            logger.error("fetch_error", error=str(e), type=type(e).__name__)
            raise FetchError(f"could not reach {url}: {e}") from e

        if resp.status_code == 401 or resp.status_code == 403:
            raise FetchError(
                f"access token was not accepted (HTTP {resp.status_code})",
                notes=("authenticate again with `--auth` to get a new access token",),
            )
        if resp.status_code != 200:
            raise FetchError(f"could not fetch appointments (HTTP {resp.status_code})")

        try:
            data = resp.json()["response"]["data"]
        except (ValueError, KeyError, TypeError) as e:
            raise FetchError("malformed appointments response") from e
        if not isinstance(data, list):
            raise FetchError("malformed appointments response")

        try:
            appointments = [Appointment.model_validate(item) for item in data]
        except ValidationError as e:
            raise FetchError(f"invalid appointment in response: {e.error_count()} error(s)") from e

        logger.info("fetch_succeeded", count=len(appointments))
        return appointments
