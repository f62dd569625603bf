"""DI Provider ADBlocker module.

Copyright (c) 2024 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from typing import AsyncIterator, NewType

import httpx
from dishka import Provider, Scope, from_context, provide

from config import Settings
from ldap_protocol.blocking import (
    AbstractBlockingStrategy,
    get_blocking_strategy,
)
from ldap_protocol.directory import (
    AbstractDirectoryGateway,
    LDAP3DirectoryGateway,
)
from ldap_protocol.reconciliation import ReconciliationEngine
from workflow import WorkflowAPIClient, make_pinning_hook

WorkflowHTTPClient = NewType("WorkflowHTTPClient", httpx.AsyncClient)


class MainProvider(Provider):
    """Provider for blocking job."""

    scope = Scope.APP
    settings = from_context(provides=Settings, scope=Scope.APP)

    @provide(scope=Scope.APP)
    async def get_workflow_http_client(
        self,
        settings: Settings,
    ) -> AsyncIterator[WorkflowHTTPClient]:
        """Get async client for the workflow service.

        :param Settings settings: app settings
        :raises ValueError: pinning enabled without public key
        :yield WorkflowHTTPClient: client with base url and app headers
        """
        event_hooks = {}
        if settings.USE_PINNING:
            if not settings.SSL_PUBLIC_KEY:
                raise ValueError(
                    f"SSL_PUBLIC_KEY is required for {settings.ENVIRONMENT}",
                )
            event_hooks["response"] = [
                make_pinning_hook(settings.SSL_PUBLIC_KEY),
            ]

        async with httpx.AsyncClient(
            base_url=str(settings.API_URL),
            timeout=settings.API_TIMEOUT_SECONDS,
            headers={
                "X-AppId": settings.APP_ID,
                "X-AppSecret": settings.APP_SECRET,
                "Accept": "application/json",
            },
            event_hooks=event_hooks,
        ) as client:
            yield WorkflowHTTPClient(client)

    @provide(scope=Scope.APP)
    def get_workflow_api(
        self,
        client: WorkflowHTTPClient,
    ) -> WorkflowAPIClient:
        """Get workflow API."""
        return WorkflowAPIClient(client)

    @provide(scope=Scope.APP)
    def get_directory_gateway(
        self,
        settings: Settings,
    ) -> AbstractDirectoryGateway:
        """Get directory gateway."""
        return LDAP3DirectoryGateway(settings)

    @provide(scope=Scope.APP)
    def get_strategy(self, settings: Settings) -> AbstractBlockingStrategy:
        """Get blocking strategy selected by settings."""
        return get_blocking_strategy(settings)

    @provide(scope=Scope.REQUEST)
    def get_engine(
        self,
        api: WorkflowAPIClient,
        directory: AbstractDirectoryGateway,
        strategy: AbstractBlockingStrategy,
    ) -> ReconciliationEngine:
        """Get reconciliation engine for one cycle."""
        return ReconciliationEngine(api, directory, strategy)
