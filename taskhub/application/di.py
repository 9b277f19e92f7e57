from dishka import AsyncContainer, Provider, make_async_container

from taskhub.config import Config
from taskhub.domain.auth.util.di import AuthzProvider
from taskhub.infrastructure.memory import MemoryInfraProvider
from taskhub.util.di.scope import Scope


def create_container(config: Config | None = None, *providers: Provider) -> AsyncContainer:
    """Build the application container.

    Extra `providers` are added after the defaults, so they can override
    the in-memory adapters with real persistence.
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        MemoryInfraProvider(),
        AuthzProvider(),
        *providers,
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
