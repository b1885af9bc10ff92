"""
Fixture composition: named, lazily-constructed, per-test dependencies.

A fixture is a named initializer plus the names it requires. Initializers
receive their requirements as keyword arguments and produce a value:

- ``async def`` generator: the yielded value is the fixture, code after the
  ``yield`` is teardown
- ``async def`` coroutine or plain function: the return value is the fixture

Fixture sets are built per concern and merged into one namespace; a name
defined twice is rejected when the sets are merged. A ``FixtureScope`` is
opened per test with the seed values the runner provides (the Playwright
page, an HTTP client, ...). Inside a scope every fixture is constructed at
most once, in dependency order, and torn down in reverse order on exit.

Usage::

    pages = FixtureRegistry("pages")

    @pages.fixture
    async def login_page(page):
        yield LoginPage(page)

    suite = merge_registries(pages, business)
    async with suite.scope(page=page) as scope:
        values = await scope.resolve("login_page")
        await scope.call(test_body)
"""
from __future__ import annotations

import inspect
import logging
from contextlib import AsyncExitStack
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

import anyio

from parabank_e2e.exceptions import (
    FixtureConflictError,
    FixtureCycleError,
    FixtureSetupError,
    UnknownFixtureError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixtureDef:
    """A registered fixture: initializer, requirements and owning set."""

    name: str
    func: Callable[..., Any]
    requires: Tuple[str, ...]
    owner: str

    @property
    def description(self) -> str:
        doc = inspect.getdoc(self.func) or ""
        return doc.splitlines()[0] if doc else ""


def _parameter_names(func: Callable[..., Any]) -> Tuple[str, ...]:
    names = []
    for param in inspect.signature(func).parameters.values():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        names.append(param.name)
    return tuple(names)


class FixtureRegistry:
    """A named set of fixture definitions."""

    def __init__(self, name: str, definitions: Iterable[FixtureDef] = ()) -> None:
        self.name = name
        self._defs: Dict[str, FixtureDef] = {}
        for definition in definitions:
            self.add(definition)

    # ---- registration -----------------------------------------------------------
    def add(self, definition: FixtureDef) -> FixtureDef:
        existing = self._defs.get(definition.name)
        if existing is not None:
            raise FixtureConflictError(
                f"Fixture '{definition.name}' is defined by both "
                f"'{existing.owner}' and '{definition.owner}'"
            )
        self._defs[definition.name] = definition
        return definition

    def fixture(
        self,
        func: Optional[Callable[..., Any]] = None,
        *,
        name: Optional[str] = None,
        requires: Optional[Iterable[str]] = None,
    ):
        """Register a fixture. Usable as ``@registry.fixture`` or with arguments.

        ``requires`` defaults to the initializer's parameter names.
        """
        def decorator(target: Callable[..., Any]) -> Callable[..., Any]:
            deps = tuple(requires) if requires is not None else _parameter_names(target)
            self.add(FixtureDef(name=name or target.__name__, func=target, requires=deps, owner=self.name))
            return target

        if func is not None:
            return decorator(func)
        return decorator

    # ---- lookup -----------------------------------------------------------------
    def __contains__(self, name: object) -> bool:
        return name in self._defs

    def __iter__(self) -> Iterator[FixtureDef]:
        return iter(self._defs.values())

    def __len__(self) -> int:
        return len(self._defs)

    def __getitem__(self, name: str) -> FixtureDef:
        try:
            return self._defs[name]
        except KeyError:
            raise UnknownFixtureError(name) from None

    def names(self) -> List[str]:
        return list(self._defs)

    def __add__(self, other: "FixtureRegistry") -> "FixtureRegistry":
        return merge_registries(self, other)

    def __repr__(self) -> str:
        return f"FixtureRegistry({self.name!r}, fixtures={self.names()!r})"

    # ---- graph ------------------------------------------------------------------
    def resolution_order(self, names: Iterable[str], provided: Iterable[str] = ()) -> List[str]:
        """Topologically ordered fixtures needed to build ``names``.

        Provided (seed) names are leaves and are not part of the result.

        Raises:
            UnknownFixtureError: a name is neither registered nor provided
            FixtureCycleError: requirements form a cycle
        """
        seeds = set(provided)
        order: List[str] = []
        done: set[str] = set()
        path: List[str] = []

        def visit(name: str, required_by: Optional[str]) -> None:
            if name in seeds or name in done:
                return
            if name in path:
                raise FixtureCycleError(path[path.index(name):] + [name])
            if name not in self._defs:
                raise UnknownFixtureError(name, required_by)
            path.append(name)
            for dep in self._defs[name].requires:
                visit(dep, name)
            path.pop()
            done.add(name)
            order.append(name)

        for name in names:
            visit(name, None)
        return order

    def missing_requirements(self, provided: Iterable[str] = ()) -> Dict[str, List[str]]:
        """Requirement names that are neither registered nor provided, by fixture."""
        seeds = set(provided)
        missing: Dict[str, List[str]] = {}
        for definition in self._defs.values():
            for dep in definition.requires:
                if dep not in self._defs and dep not in seeds:
                    missing.setdefault(dep, []).append(definition.name)
        return missing

    def validate(self, provided: Iterable[str] = (), require_complete: bool = False) -> None:
        """Check for seed clashes and cycles.

        With ``require_complete`` every requirement must also be registered
        or provided; otherwise unknown names only fail when resolved.
        """
        seeds = set(provided)
        clashes = sorted(seeds & set(self._defs))
        if clashes:
            raise FixtureConflictError(
                f"Seed value(s) {', '.join(clashes)} clash with fixtures in '{self.name}'"
            )
        missing = self.missing_requirements(seeds)
        if require_complete and missing:
            name, required_by = next(iter(missing.items()))
            raise UnknownFixtureError(name, required_by[0])
        self.resolution_order(self._defs, seeds | set(missing))

    def scope(self, **provided: Any) -> "FixtureScope":
        return FixtureScope(self, provided)


def merge_registries(*registries: FixtureRegistry, name: Optional[str] = None) -> FixtureRegistry:
    """Compose fixture sets into one namespace.

    Raises:
        FixtureConflictError: a fixture name is defined by more than one set
    """
    merged = FixtureRegistry(name or "+".join(registry.name for registry in registries))
    for registry in registries:
        for definition in registry:
            merged.add(definition)
    return merged


class FixtureScope:
    """Per-test resolution context with memoized values and ordered teardown."""

    def __init__(self, registry: FixtureRegistry, provided: Mapping[str, Any]) -> None:
        self.registry = registry
        self._values: Dict[str, Any] = dict(provided)
        self._provided = frozenset(provided)
        self._stack: Optional[AsyncExitStack] = None
        self._lock = anyio.Lock()
        self.constructed: List[str] = []

    async def __aenter__(self) -> "FixtureScope":
        self.registry.validate(self._provided)
        self._stack = AsyncExitStack()
        await self._stack.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        stack, self._stack = self._stack, None
        if stack is None:
            return False
        if self.constructed:
            logger.debug("Tearing down fixtures: %s", ", ".join(reversed(self.constructed)))
        return await stack.__aexit__(exc_type, exc_val, exc_tb)

    # ---- resolution -------------------------------------------------------------
    async def resolve(self, *names: str) -> Dict[str, Any]:
        """Construct (once) and return the requested fixtures by name."""
        if self._stack is None:
            raise RuntimeError("FixtureScope is not active. Use 'async with registry.scope(...)'")

        async with self._lock:
            for fixture_name in self.registry.resolution_order(names, self._provided):
                if fixture_name not in self._values:
                    await self._construct(self.registry[fixture_name])
        return {fixture_name: self._values[fixture_name] for fixture_name in names}

    async def get(self, name: str) -> Any:
        return (await self.resolve(name))[name]

    async def call(self, func: Callable[..., Any]) -> Any:
        """Inject fixtures into ``func`` by parameter name and run it."""
        values = await self.resolve(*_parameter_names(func))
        result = func(**values)
        if inspect.isawaitable(result):
            result = await result
        return result

    def is_constructed(self, name: str) -> bool:
        return name in self._values and name not in self._provided

    async def _construct(self, definition: FixtureDef) -> None:
        kwargs = {dep: self._values[dep] for dep in definition.requires}
        func = definition.func
        logger.debug("Setting up fixture %s (requires: %s)", definition.name, ", ".join(definition.requires) or "-")

        try:
            if inspect.isasyncgenfunction(func):
                value = await self._enter_async_generator(definition, func(**kwargs))
            elif inspect.isgeneratorfunction(func):
                value = self._enter_generator(definition, func(**kwargs))
            else:
                value = func(**kwargs)
                if inspect.isawaitable(value):
                    value = await value
        except Exception:
            logger.error("Fixture %s failed during setup", definition.name)
            raise

        self._values[definition.name] = value
        self.constructed.append(definition.name)

    async def _enter_async_generator(self, definition: FixtureDef, agen) -> Any:
        try:
            value = await agen.__anext__()
        except StopAsyncIteration:
            raise FixtureSetupError(definition.name, "initializer finished without yielding a value") from None

        async def finish() -> None:
            try:
                await agen.__anext__()
            except StopAsyncIteration:
                return
            await agen.aclose()
            raise FixtureSetupError(definition.name, "initializer yielded more than once")

        if self._stack is None:
            await agen.aclose()
            raise RuntimeError(f"FixtureScope closed while {definition.name} was being set up")
        self._stack.push_async_callback(finish)
        return value

    def _enter_generator(self, definition: FixtureDef, gen) -> Any:
        try:
            value = next(gen)
        except StopIteration:
            raise FixtureSetupError(definition.name, "initializer finished without yielding a value") from None

        def finish() -> None:
            try:
                next(gen)
            except StopIteration:
                return
            gen.close()
            raise FixtureSetupError(definition.name, "initializer yielded more than once")

        if self._stack is None:
            gen.close()
            raise RuntimeError(f"FixtureScope closed while {definition.name} was being set up")
        self._stack.callback(finish)
        return value

