"""Workflow API wire schemas.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

_IDENTITY = AliasChoices("AdUserName", "DirectoryIdentity", "identity")


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class BlockRequest(_WireModel):
    """User pending blocking."""

    oid: str | int = Field(alias="Oid")
    identity: str = Field(validation_alias=_IDENTITY)


class UnblockRequest(_WireModel):
    """User pending unblocking.

    ``requested_expiration`` is restored when it is still in the future.
    """

    id: str | int = Field(alias="Id")
    identity: str = Field(validation_alias=_IDENTITY)
    requested_expiration: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "AccountExpirationDate",
            "RequestedExpirationDate",
            "requested_expiration",
        ),
    )


class ValidateRequest(_WireModel):
    """Credentials check of a blocked account."""

    id: str | int = Field(alias="Id")
    identity: str = Field(validation_alias=_IDENTITY)
    password: str = Field(alias="Password", repr=False)


class BlockResult(_WireModel):
    """Block outcome posted back to the workflow service."""

    oid: str | int = Field(alias="Oid")
    account_expiration_date: datetime | None = Field(
        default=None,
        alias="AccountExpirationDate",
    )
    success: bool = Field(alias="Success")
    message: str = Field(default="", alias="Message")


class RequestResult(_WireModel):
    """Validate or unblock outcome put back to the workflow service."""

    id: str | int = Field(alias="Id")
    success: bool = Field(alias="Success")
    message: str = Field(default="", alias="Message")
