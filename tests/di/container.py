"""Container with in-memory components, optionally swapped for real ones."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from nomen.util.di import PROVIDERS, Component, get_provider


def swappable_components() -> set[Component]:
    """Components that have both a production and an in-memory provider."""
    return {
        entry.__mock_component__
        for entry in PROVIDERS
        if entry.__mock_component__ is not None
    }


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Container for tests.

    Every swappable component is in-memory unless named in ``unmock``:

        build_test_container()                       # unit and e2e tests
        build_test_container(unmock={"persistence"}) # against Postgres

    Raises:
        ValueError: If ``unmock`` names an unknown component
    """
    unmock = unmock or set()
    unknown = unmock - swappable_components()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    providers = [
        get_provider(
            entry,
            use_mock=entry.__mock_component__ is not None
            and entry.__mock_component__ not in unmock,
        )()
        for entry in PROVIDERS
    ]
    return make_async_container(*providers, FastapiProvider())
