"""Production container and its FastAPI hookup."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from nomen.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Container with the production variant of every component.

    ``FastapiProvider`` makes the current ``Request`` injectable.
    """
    providers = [get_provider(entry, use_mock=False)() for entry in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach ``container`` to ``app`` so ``FromDishka`` parameters resolve."""
    setup_dishka(container, app)
