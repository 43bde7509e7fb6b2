"""
Registry Client - ReceitaWS company lookup.

Issues exactly one GET per CNPJ:
https://www.receitaws.com.br/v1/cnpj/{14-digit CNPJ}

No retries: a timeout or transport failure is reported to the caller as a
QueryOutcome, and the user decides whether to try again.
"""

import logging
from typing import Callable, Optional

import requests
from urllib3.exceptions import ReadTimeoutError

from validador_cnpj.config import RegistryConfig
from validador_cnpj.ingestion.response_mapper import ResponseMapper
from validador_cnpj.models import CNPJ, QueryOutcome

logger = logging.getLogger(__name__)


def is_body_read_timeout(error: requests.ConnectionError) -> bool:
    """
    Tell whether a ConnectionError is a read timeout in disguise.

    requests raises ReadTimeout only while waiting for the headers. A stall
    while the body downloads surfaces as ConnectionError wrapping urllib3's
    ReadTimeoutError.
    """
    cause = error.args[0] if error.args else None
    return isinstance(cause, ReadTimeoutError)


class RegistryClient:
    """
    Looks up company records on ReceitaWS.

    Features:
    - Separate connect and read timeouts (10s each by default)
    - One request per lookup, never retried
    - Closed outcome set: SUCCESS, API_ERROR, TIMEOUT, TRANSPORT_ERROR,
      MALFORMED_RESPONSE

    The client holds configuration only. Each lookup opens its own
    requests session, so concurrent lookups share no transport state.
    """

    def __init__(
        self,
        config: Optional[RegistryConfig] = None,
        mapper: Optional[ResponseMapper] = None,
        session_factory: Callable[[], requests.Session] = requests.Session
    ):
        """
        Initialize Registry Client.

        Args:
            config: Registry configuration (uses defaults if None)
            mapper: Response mapper (uses a new ResponseMapper if None)
            session_factory: Builds the HTTP session used by each lookup
        """
        self.config = config or RegistryConfig()
        self.mapper = mapper or ResponseMapper()
        self.session_factory = session_factory

        logger.info(
            f"RegistryClient initialized - "
            f"base_url={self.config.base_url}, "
            f"timeout={self.config.timeout}"
        )

    def _new_session(self) -> requests.Session:
        session = self.session_factory()
        session.headers.update({
            'User-Agent': self.config.user_agent,
            'Accept': 'application/json',
        })
        return session

    def fetch(self, cnpj: CNPJ) -> QueryOutcome:
        """
        Fetch the company record for a validated CNPJ.

        Args:
            cnpj: Checksum-valid CNPJ

        Returns:
            QueryOutcome: Lookup result; transport problems are returned,
                not raised
        """
        url = self.config.get_lookup_url(cnpj.digits)
        logger.info(f"Querying registry: {url}")

        try:
            with self._new_session() as session:
                with session.get(url, timeout=self.config.timeout) as response:
                    if not 200 <= response.status_code < 300:
                        message = f"{response.status_code} - {response.reason}"
                        logger.warning(f"Registry request failed for {cnpj}: {message}")
                        return QueryOutcome.transport_error(
                            message,
                            http_status=response.status_code
                        )

                    body = response.text

        except requests.Timeout as e:
            logger.warning(f"Registry request timed out for {cnpj}: {e}")
            return QueryOutcome.timeout()

        except requests.ConnectionError as e:
            if is_body_read_timeout(e):
                logger.warning(f"Registry response timed out for {cnpj}: {e}")
                return QueryOutcome.timeout()
            logger.error(f"Registry connection failed for {cnpj}: {e}")
            return QueryOutcome.transport_error(str(e))

        except requests.RequestException as e:
            logger.error(f"Registry request failed for {cnpj}: {e}")
            return QueryOutcome.transport_error(str(e))

        outcome = self.mapper.map(body)
        logger.info(f"Registry lookup for {cnpj} finished: {outcome.status.value}")
        return outcome
