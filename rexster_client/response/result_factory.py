"""
Result Factory

Builds result objects from decoded Rexster response payloads.
"""

import logging
from typing import Any

from .client_response import RexsterObject, RexsterElement, RexsterElementList

logger = logging.getLogger(__name__)


def _is_element(value: Any) -> bool:
    return isinstance(value, dict) and '_type' in value


class ResultFactory:
    """Turns decoded JSON payloads into RexsterObject wrappers."""

    @staticmethod
    def get_generic(client, payload: Any) -> RexsterObject:
        """
        Wrap a decoded payload in the most specific result class.

        Args:
            client: The client that issued the request
            payload: Decoded JSON body, passed through unchanged

        Returns:
            RexsterElement for a single vertex/edge, RexsterElementList for a
            list of vertices/edges, RexsterObject otherwise
        """
        results = payload.get('results') if isinstance(payload, dict) else None

        if _is_element(results):
            result_class = RexsterElement
        elif isinstance(results, list) and all(_is_element(item) for item in results):
            result_class = RexsterElementList
        else:
            result_class = RexsterObject

        logger.debug(f"Building {result_class.__name__} from response payload")
        return result_class(client=client, data=payload)


def get_generic(client, payload: Any) -> RexsterObject:
    """Default result factory used by RexsterClient."""
    return ResultFactory.get_generic(client, payload)
