"""ldap3 implementation of the directory gateway.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator

from ldap3 import (
    MODIFY_REPLACE,
    NTLM,
    SCHEMA,
    SIMPLE,
    SUBTREE,
    Connection,
    Server,
)
from ldap3.core.exceptions import (
    LDAPBindError,
    LDAPException,
    LDAPSocketOpenError,
)
from ldap3.utils.conv import escape_filter_chars

from config import Settings

from .base import AbstractDirectoryGateway, DirectoryUser, log
from .codec import AttributeValue
from .dataclasses import DirectoryAttributeSnapshot
from .exceptions import (
    AttributeUnavailableError,
    DirectoryConnectionError,
    DirectoryWriteError,
    ExpirationUnavailableError,
    UserNotFoundError,
)
from .utils import (
    NEVER_EXPIRES,
    dt_to_ft,
    ft_to_dt,
    identity_to_bare_username,
)

ACCOUNT_EXPIRES = "accountExpires"
OCTET_STRING_SYNTAX = "1.3.6.1.4.1.1466.115.121.1.40"
INVALID_CREDENTIALS = 49


class LDAP3DirectoryUser(DirectoryUser):
    """User record read with ldap3, changes sent on save."""

    def __init__(
        self,
        identity: str,
        dn: str,
        raw_attributes: dict[str, list[bytes]] | None,
        connection: Connection,
        gateway: "LDAP3DirectoryGateway",
    ) -> None:
        """Set entry data.

        :param str identity: identity the record was located by
        :param str dn: distinguished name
        :param dict | None raw_attributes: raw values from search response
        :param Connection connection: bound service connection
        :param LDAP3DirectoryGateway gateway: owner, checks credentials
        """
        super().__init__(identity)
        self.dn = dn
        self._raw = (
            {k.lower(): v for k, v in raw_attributes.items()}
            if raw_attributes is not None
            else None
        )
        self._connection = connection
        self._gateway = gateway
        self._changes: dict[str, list[AttributeValue]] = {}
        # NOTE: filetime as loaded, written back unchanged on restore
        self._loaded_expires = (
            self._raw.get(ACCOUNT_EXPIRES.lower(), []) if self._raw else []
        )

    def _raw_values(self, name: str) -> list[bytes]:
        if self._raw is None:
            raise AttributeUnavailableError
        return self._raw.get(name.lower(), [])

    def _decode(self, name: str, raw: bytes) -> AttributeValue:
        if self._gateway.is_binary(name):
            return raw
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return raw

    def get_expiration_date(self) -> datetime | None:
        """Get accountExpires as datetime."""
        if self._raw is None:
            raise ExpirationUnavailableError
        values = self._raw.get(ACCOUNT_EXPIRES.lower(), [])
        if not values:
            return None
        return ft_to_dt(int(values[0]))

    def set_expiration_date(self, value: datetime | None) -> None:
        """Stage accountExpires.

        The loaded date keeps its exact filetime, sub-microsecond ticks
        and the 0 / never sentinels included.
        """
        loaded = self._loaded_expires
        if loaded and ft_to_dt(int(loaded[0])) == value:
            self._changes[ACCOUNT_EXPIRES] = [loaded[0].decode("ascii")]
            return

        filetime = NEVER_EXPIRES if value is None else dt_to_ft(value)
        self._changes[ACCOUNT_EXPIRES] = [str(filetime)]

    def get_attribute(self, name: str) -> DirectoryAttributeSnapshot:
        """Get all raw values, decoded unless binary."""
        self._gateway.check_attribute(name)
        values = tuple(
            self._decode(name, raw) for raw in self._raw_values(name)
        )
        if not values:
            return DirectoryAttributeSnapshot(name, None)
        return DirectoryAttributeSnapshot(name, values[0], values)

    def set_attribute(self, name: str, value: AttributeValue | None) -> None:
        """Stage replace, empty list deletes the attribute."""
        self._gateway.check_attribute(name)
        if self._raw is None:
            raise AttributeUnavailableError
        self._changes[name] = [] if value is None else [value]

    def restore_attribute(self, snapshot: DirectoryAttributeSnapshot) -> None:
        """Stage replace with every captured value."""
        self._gateway.check_attribute(snapshot.name)
        if self._raw is None:
            raise AttributeUnavailableError
        self._changes[snapshot.name] = snapshot.stored_values

    async def validate_credentials(self, username: str, password: str) -> bool:
        """Check credentials with a separate bind."""
        return await self._gateway.validate_credentials(username, password)

    def _modify(self) -> None:
        changes = {
            name: [(MODIFY_REPLACE, values)]
            for name, values in self._changes.items()
        }
        try:
            ok = self._connection.modify(self.dn, changes)
        except LDAPException as err:
            raise DirectoryWriteError(str(err)) from err

        if not ok:
            result = self._connection.result or {}
            raise DirectoryWriteError(
                f"{result.get('description', 'error')}: "
                f"{result.get('message', '')}".strip(),
            )

    async def save(self) -> None:
        """Send all staged changes in one modify request."""
        if not self._changes:
            return

        await asyncio.to_thread(self._modify)

        if self._raw is not None:
            for name, values in self._changes.items():
                self._raw[name.lower()] = [
                    v if isinstance(v, bytes) else v.encode("utf-8")
                    for v in values
                ]
        self._changes.clear()


class LDAP3DirectoryGateway(AbstractDirectoryGateway):
    """Active Directory access with ldap3."""

    def __init__(self, settings: Settings) -> None:
        """Set server from settings.

        :param Settings settings: app settings
        """
        self.settings = settings
        self.server = Server(
            settings.AD_HOST or settings.AD_DOMAIN,
            port=settings.AD_PORT,
            use_ssl=settings.AD_USE_SSL,
            get_info=SCHEMA,
            connect_timeout=settings.AD_CONNECT_TIMEOUT_SECONDS,
        )
        self.attributes = [ACCOUNT_EXPIRES]
        if settings.UPDATE_FIELD:
            self.attributes.append(settings.UPDATE_FIELD)

    def _attribute_type(self, name: str) -> Any | None:
        schema = self.server.schema
        if schema is None:
            return None
        return schema.attribute_types.get(name)

    def check_attribute(self, name: str) -> None:
        """Ensure the server schema knows the attribute.

        :raises AttributeUnavailableError: unknown attribute
        """
        if self.server.schema is None:
            return
        if self._attribute_type(name) is None:
            raise AttributeUnavailableError

    def is_binary(self, name: str) -> bool:
        """Check Octet String syntax of the attribute."""
        attribute_type = self._attribute_type(name)
        return getattr(attribute_type, "syntax", None) == OCTET_STRING_SYNTAX

    def _bind(self) -> Connection:
        user = self.settings.AD_USER
        try:
            return Connection(
                self.server,
                user=user,
                password=self.settings.AD_PASSWORD,
                authentication=NTLM if "\\" in user else SIMPLE,
                auto_bind=True,
                raise_exceptions=False,
            )
        except LDAPException as err:
            raise DirectoryConnectionError(str(err)) from err

    def _search_filter(self, identity: str) -> str:
        if "@" in identity:
            return (
                "(&(objectClass=user)"
                f"(userPrincipalName={escape_filter_chars(identity)}))"
            )
        username = escape_filter_chars(identity_to_bare_username(identity))
        return f"(&(objectClass=user)(sAMAccountName={username}))"

    def _find(
        self,
        connection: Connection,
        identity: str,
    ) -> LDAP3DirectoryUser:
        try:
            connection.search(
                search_base=self.settings.BASE_DN,
                search_filter=self._search_filter(identity),
                search_scope=SUBTREE,
                attributes=self.attributes,
                size_limit=1,
            )
        except LDAPException as err:
            raise DirectoryConnectionError(str(err)) from err

        entries = [
            item
            for item in connection.response or []
            if item.get("type") == "searchResEntry"
        ]
        if not entries:
            raise UserNotFoundError

        entry = entries[0]
        return LDAP3DirectoryUser(
            identity=identity,
            dn=entry["dn"],
            raw_attributes=entry.get("raw_attributes"),
            connection=connection,
            gateway=self,
        )

    @asynccontextmanager
    async def open_user(self, identity: str) -> AsyncIterator[DirectoryUser]:
        """Bind, locate user and unbind after the block."""
        connection = await asyncio.to_thread(self._bind)
        try:
            yield await asyncio.to_thread(self._find, connection, identity)
        finally:
            await asyncio.to_thread(connection.unbind)

    def _principal(self, username: str) -> str:
        if "@" in username:
            return username
        return f"{username}@{self.settings.AD_DOMAIN}"

    def _check_bind(self, username: str, password: str) -> bool:
        connection = Connection(
            self.server,
            user=self._principal(username),
            password=password,
            authentication=SIMPLE,
            raise_exceptions=False,
        )
        try:
            if connection.bind():
                return True
            result = connection.result or {}
        except LDAPBindError:
            return False
        except LDAPSocketOpenError as err:
            raise DirectoryConnectionError(str(err)) from err
        finally:
            connection.unbind()

        if result.get("result") not in (None, INVALID_CREDENTIALS):
            log.warning(
                "Credential check for {} returned {}",
                username,
                result.get("description"),
            )
        return False

    async def validate_credentials(self, username: str, password: str) -> bool:
        """Check password with a simple bind as UPN.

        Names without a domain part are bound as ``username@AD_DOMAIN``.
        Empty passwords would produce an unauthenticated bind that always
        succeeds, so they are rejected without contacting the server.
        """
        if not password:
            return False
        return await asyncio.to_thread(self._check_bind, username, password)
