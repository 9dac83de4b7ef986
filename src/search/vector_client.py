"""
Vector Index Client Singleton.

Thin wrapper around the Upstash Vector SDK (upstash_vector.Index):
- query(vector=..., top_k=..., include_metadata=True, filter=...)
- upsert(vectors=[Vector(id, vector, metadata), ...])
- reset()
- info()

SDK, transport and response-decoding failures are re-raised as
BackendError / BackendUnavailable so callers never handle SDK exception
types. The SDK's own retry loop is disabled and its HTTP client is
replaced by one using the configured timeout, so a failed or hung query
surfaces quickly.
"""

import threading
from typing import Any, Dict, Iterable, List, Optional

import httpx
from upstash_vector import Index, Vector
from upstash_vector.errors import UpstashError

from config.settings import get_settings
from core.logging import get_logger
from search.errors import BackendError, BackendUnavailable

logger = get_logger(__name__)


def _result_to_dict(result: Any) -> Dict[str, Any]:
    """Convert an SDK QueryResult into a plain {id, score, vector, metadata} dict."""
    vector = getattr(result, "vector", None)
    return {
        "id": result.id,
        "score": result.score,
        "vector": list(vector) if vector is not None else None,
        "metadata": getattr(result, "metadata", None),
    }


class VectorIndexClient:
    """
    Singleton wrapper around the Upstash Vector index.

    Handles product queries and the object operations used by seeding.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        index: Optional[Index] = None,
    ):
        if index is not None:
            self.url, self.token = url, token
            self.timeout_seconds = None
            self._index = index
            return

        settings = get_settings()
        self.url = url or settings.upstash_vector_rest_url
        self.token = token or settings.upstash_vector_rest_token

        if not self.url or not self.token:
            raise BackendUnavailable(
                "UPSTASH_VECTOR_REST_URL and UPSTASH_VECTOR_REST_TOKEN are required"
            )

        self.timeout_seconds = settings.search_timeout_seconds
        self._index = Index(url=self.url, token=self.token, retries=0)

        # The SDK builds its own httpx.Client with a 600s read timeout
        self._index._client.close()
        self._index._client = httpx.Client(
            timeout=httpx.Timeout(self.timeout_seconds, connect=min(self.timeout_seconds, 10.0)),
        )

    # =========================================================================
    # Search
    # =========================================================================

    def query(
        self,
        vector: List[float],
        top_k: int,
        filter: Optional[str] = None,
        include_metadata: bool = True,
        include_vectors: bool = True,
    ) -> List[Dict[str, Any]]:
        """
        Run one nearest-neighbor query.

        Args:
            vector: Probe vector.
            top_k: Maximum number of matches.
            filter: Filter expression. Omitted from the request when empty.
            include_metadata: Return each match's stored metadata.
            include_vectors: Return each match's stored vector.

        Returns:
            List of {id, score, vector, metadata} dicts, in ranked order.

        Raises:
            BackendUnavailable: Timeout or transport failure.
            BackendError: The index rejected the request.
        """
        params: Dict[str, Any] = {
            "vector": vector,
            "top_k": top_k,
            "include_metadata": include_metadata,
            "include_vectors": include_vectors,
        }
        if filter:
            params["filter"] = filter

        results = self._call("query", **params)
        return [_result_to_dict(r) for r in results]

    # =========================================================================
    # Object Operations
    # =========================================================================

    def upsert(self, records: Iterable[Dict[str, Any]]) -> Any:
        """
        Upsert records of the form {id, vector, metadata}.
        """
        vectors = [
            Vector(id=r["id"], vector=r["vector"], metadata=r.get("metadata"))
            for r in records
        ]
        return self._call("upsert", vectors=vectors)

    def reset(self) -> Any:
        """Delete every vector in the index."""
        return self._call("reset")

    def info(self) -> Any:
        """Index statistics (vector count, dimension, ...)."""
        return self._call("info")

    def _call(self, method: str, **kwargs) -> Any:
        try:
            return getattr(self._index, method)(**kwargs)
        except httpx.TimeoutException as e:
            raise BackendUnavailable(f"Vector index {method} timed out: {e}") from e
        except httpx.HTTPError as e:
            raise BackendUnavailable(f"Vector index {method} failed to connect: {e}") from e
        except UpstashError as e:
            raise BackendError(f"Vector index {method} rejected: {e}") from e
        except (ValueError, KeyError) as e:
            # Non-JSON body (gateway error page) or a body without "result"
            raise BackendError(f"Vector index {method} returned an unreadable response: {e!r}") from e


# =============================================================================
# Singleton
# =============================================================================

_vector_client: Optional[VectorIndexClient] = None
_vector_lock = threading.Lock()


def get_vector_client() -> VectorIndexClient:
    """Get or create the VectorIndexClient singleton (thread-safe)."""
    global _vector_client
    if _vector_client is None:
        with _vector_lock:
            if _vector_client is None:
                _vector_client = VectorIndexClient()
    return _vector_client
