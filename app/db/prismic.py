import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from app.schemas.prismic import PrismicConfig
from app.settings import settings

logger = logging.getLogger(__name__)

ERROR_HTTP = "HTTP_ERROR"
ERROR_TRANSPORT = "TRANSPORT_ERROR"
ERROR_INVALID_JSON = "INVALID_JSON"
ERROR_NO_MASTER_REF = "NO_MASTER_REF"


class ContentSourceError(Exception):
    def __init__(self, error_type: str, detail: str = ""):
        super().__init__(f"{error_type}: {detail}")
        self.error_type = error_type
        self.detail = detail


def predicate_at(path: str, value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'[at({path}, "{escaped}")]'


class PrismicClient:
    """
    Thin client over the Prismic REST API v2.
    Every query is pinned to the repository's master ref, looked up once.
    """

    def __init__(self, config: PrismicConfig, http: Optional[httpx.Client] = None):
        self.config = config
        self._http = http or httpx.Client(
            timeout=httpx.Timeout(config.timeout), follow_redirects=True
        )
        self._master_ref: Optional[str] = None

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "PrismicClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def get_master_ref(self) -> str:
        if self._master_ref:
            return self._master_ref

        api = self._get_json(self.config.endpoint, self._auth_params())
        refs = api.get("refs") or []
        master = next((r for r in refs if r.get("isMasterRef")), None)
        if not master or not master.get("ref"):
            raise ContentSourceError(
                ERROR_NO_MASTER_REF, f"{self.config.endpoint} exposes no master ref"
            )
        self._master_ref = master["ref"]
        return self._master_ref

    def query(
        self,
        predicates: Sequence[str],
        fetch: Optional[Sequence[str]] = None,
        page_size: int = 20,
        page: int = 1,
        orderings: Optional[str] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "ref": self.get_master_ref(),
            "q": f"[{''.join(predicates)}]",
            "pageSize": page_size,
            "page": page,
        }
        if fetch:
            params["fetch"] = ",".join(fetch)
        if orderings:
            params["orderings"] = orderings
        params.update(self._auth_params())

        logger.debug(f"Querying {self.config.search_url} with q={params['q']}")
        return self._get_json(self.config.search_url, params)

    def get_by_uid(self, doc_type: str, uid: str) -> Optional[Dict[str, Any]]:
        response = self.query([predicate_at(f"my.{doc_type}.uid", uid)], page_size=1)
        results: List[Dict[str, Any]] = response.get("results") or []
        return results[0] if results else None

    def _auth_params(self) -> Dict[str, str]:
        if self.config.access_token:
            return {"access_token": self.config.access_token}
        return {}

    def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._http.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ContentSourceError(
                ERROR_HTTP, f"{e.response.status_code} from {url}"
            ) from e
        except httpx.HTTPError as e:
            raise ContentSourceError(ERROR_TRANSPORT, f"{url}: {e}") from e

        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise ContentSourceError(ERROR_INVALID_JSON, f"{url}: {e}") from e


def get_prismic() -> PrismicClient:
    """
    Create a Prismic client from the configured endpoint.
    Called at runtime to avoid import-time connections.
    """
    return PrismicClient(settings.prismic_config)
