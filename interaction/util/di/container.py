"""Production container assembly and FastAPI wiring."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from interaction.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Assemble the container the running service uses.

    Every mockable component resolves to its production implementation.
    Configuration comes from the environment when Settings is first resolved.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    # Request objects become injectable in routes
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach ``container`` to ``app`` (tests call this again to swap it)."""
    setup_dishka(container, app)
