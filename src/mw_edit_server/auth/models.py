"""
Authentication Models

Identity of the caller of the edit tools, as established by a verified JWT.
"""

from typing import Final, List
from pydantic import BaseModel, Field, ConfigDict


SERVICE_NAME: Final[str] = "mw-edit-server"
WIKI_NAME: Final[str] = "MediaWiki"


class UserContext(BaseModel):
    """
    Authenticated caller derived from a verified JWT.

    Edits are committed under the bot account the server authenticates as;
    ``username`` records on whose behalf they were requested.
    """

    username: str = Field(
        ...,
        min_length=1,
        description="MediaWiki username associated with the request.",
    )

    roles: List[str] = Field(
        default_factory=list,
        description="List of MediaWiki user groups (roles).",
    )

    scopes: List[str] = Field(
        default_factory=list,
        description="Operations the token grants, e.g. 'edit_page'.",
    )

    client_id: str = Field(
        default=WIKI_NAME,
        min_length=1,
        description="Client identifier that issued the JWT.",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",             # Prevents claim injection via unexpected fields
    )
