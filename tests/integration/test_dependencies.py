"""Every provider in dependencies.py is wired into at least one route."""

import inspect

from fastapi.routing import APIRoute

import dependencies


def _calls(dependant) -> set:
    found = set()
    for dep in dependant.dependencies:
        found.add(dep.call)
        found |= _calls(dep)
    return found


def test_all_providers_are_used(app):
    used = set()
    for route in app.routes:
        if isinstance(route, APIRoute):
            used |= _calls(route.dependant)

    providers = {
        fn
        for name, fn in inspect.getmembers(dependencies, inspect.isfunction)
        if name.startswith("get_") and fn.__module__ == dependencies.__name__
    }
    assert providers
    assert providers - used == set()
