"""Merge token parsing shared by the merge use cases."""

from pydantic import ValidationError

from nomen.domain.error import NotFoundError
from nomen.domain.value import MergeToken


def parse_merge_token(raw: str) -> MergeToken:
    """Parse a client-supplied token.

    A malformed token cannot match any request, so it is reported the same
    way as an unknown one.

    Raises:
        NotFoundError: If the token is malformed
    """
    try:
        return MergeToken(root=raw)
    except ValidationError as e:
        raise NotFoundError("MergeRequest", raw[:8] + "...") from e
