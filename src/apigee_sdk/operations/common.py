"""Common utilities for Apigee resource operations.

This module contains the shared pieces used by every resource module (proxies,
environments, deployments, caches, key-value maps, shared flows, API products
and the organization itself).

Declaring operations:
    - Table-driven (``endpoint``): Use for operations that only fill a path
      template and pick an HTTP verb, optionally forwarding one argument
      as the request body. The generated coroutine validates and percent-encodes
      the path parameters before delegating to the dispatcher.
    - Hand-written methods: Use when the operation validates its input beyond
      presence checks, reshapes the request or response, or chains several
      calls. They build paths with ``OperationsBase.org_path`` and
      ``quote_segment``.
"""

import logging
import re
import string
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeAlias
from urllib.parse import quote

from ..errors import ValidationError

logger = logging.getLogger("apigee_sdk.operations.common")

# Names accepted by Apigee for proxies and similar entities; match with fullmatch
NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

Operation: TypeAlias = Callable[..., Awaitable[Any]]


class Dispatcher(Protocol):
    """The subset of ``ApiClient`` the operations rely on."""

    async def send(
        self,
        path: str,
        method: str = "get",
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        *,
        files: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one authenticated request."""
        ...


class OperationsBase:
    """State shared by the resource operation mixins."""

    org: str
    api: Dispatcher

    def org_path(self, path: str = "") -> str:
        """Return ``path`` prefixed with the organization root, ``v1/o/{org}``."""
        root = f"v1/o/{quote_segment(self.org)}"
        return f"{root}/{path}" if path else root


def quote_segment(value: Any) -> str:
    """Percent-encode a value for use as a single URL path segment."""
    return quote(str(value), safe="")


def require(resource: str, **params: Any) -> None:
    """Raise ``ValidationError`` for the first parameter that is missing or empty."""
    for name, value in params.items():
        if value is None or value == "":
            raise ValidationError(resource, name)


def validate_name(resource: str, value: Any, parameter: str = "name") -> str:
    """Return ``value`` if it is a valid Apigee entity name, else raise ``ValidationError``."""
    if not isinstance(value, str) or not NAME_PATTERN.fullmatch(value):
        raise ValidationError(resource, parameter)
    return value


def objectify(properties: list[dict[str, Any]]) -> dict[str, Any]:
    """Flatten ``[{"name": "foo", "value": "bar"}, ...]`` into ``{"foo": "bar"}``.

    The strings ``"true"`` and ``"false"`` become booleans.
    """
    result: dict[str, Any] = {}
    for prop in properties:
        value = prop.get("value")
        result[prop["name"]] = value == "true" if value in ("true", "false") else value
    return result


def to_property_array(values: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Expand ``{"foo": "bar"}`` into ``[{"name": "foo", "value": "bar"}]``."""
    return [{"name": key, "value": value} for key, value in values.items()]


def bool_param(value: bool) -> str:
    """Render a boolean the way the management API expects in query strings."""
    return "true" if value else "false"


@dataclass(frozen=True, slots=True)
class Endpoint:
    """A path template and HTTP verb relative to the organization root."""

    resource: str
    template: str
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | None = None

    @property
    def fields(self) -> tuple[str, ...]:
        """Names of the placeholders in ``template``, in order."""
        return tuple(name for _, name, _, _ in string.Formatter().parse(self.template) if name)

    def render(self, params: Mapping[str, Any]) -> str:
        """Fill the template with percent-encoded parameters.

        Raises:
            ValidationError: If a placeholder has no value or an empty one.

        """
        values: dict[str, str] = {}
        for name in self.fields:
            value = params.get(name)
            if value is None or value == "":
                raise ValidationError(self.resource, name)
            values[name] = quote_segment(value)
        return self.template.format(**values)


def endpoint(
    resource: str,
    template: str,
    method: str = "GET",
    *,
    headers: Mapping[str, str] | None = None,
    body: str | None = None,
    args: Sequence[str] | None = None,
    doc: str | None = None,
) -> Operation:
    """Build an operation method from a path template.

    Args:
        resource: Human-readable resource name used in validation errors.
        template: Path relative to ``v1/o/{org}``, with ``{placeholders}`` for
            the method's arguments. May include a fixed query string.
        method: HTTP verb.
        headers: Fixed request headers.
        body: Name of the argument forwarded as the request body.
        args: Order in which positional arguments are bound. Defaults to the
            placeholders in template order, followed by ``body``.
        doc: Docstring of the generated method.

    Returns:
        An async method taking the placeholders (and ``body``) positionally or
        by keyword.

    Raises:
        ValueError: If ``args`` does not name exactly the accepted arguments.

    """
    spec = Endpoint(resource, template, method, dict(headers or {}), body)
    order = tuple(args) if args is not None else spec.fields + ((body,) if body else ())
    accepted = set(spec.fields) | ({body} if body else set())
    if set(order) != accepted or len(order) != len(accepted):
        msg = f"Positional order {order} does not match the arguments of {template!r}"
        raise ValueError(msg)

    async def operation(self: OperationsBase, *values: Any, **params: Any) -> Any:
        if len(values) > len(order):
            msg = f"{resource} operation takes at most {len(order)} positional arguments ({len(values)} given)"
            raise TypeError(msg)
        for name, value in zip(order, values, strict=False):
            if name in params:
                msg = f"Multiple values for argument {name!r} of {resource} operation"
                raise TypeError(msg)
            params[name] = value
        unexpected = set(params) - accepted
        if unexpected:
            msg = f"Unexpected arguments for {resource} operation: {', '.join(sorted(unexpected))}"
            raise TypeError(msg)
        path = self.org_path(spec.render(params))
        payload = params.get(body) if body else None
        logger.debug("%s %s operation -> %s", spec.method, resource, path)
        return await self.api.send(path, spec.method, dict(spec.headers), payload)

    operation.__doc__ = doc
    operation.endpoint = spec  # type: ignore[attr-defined]
    operation.args = order  # type: ignore[attr-defined]
    return operation


__all__ = [
    "NAME_PATTERN",
    "Dispatcher",
    "Endpoint",
    "Operation",
    "OperationsBase",
    "bool_param",
    "endpoint",
    "objectify",
    "quote_segment",
    "require",
    "to_property_array",
    "validate_name",
]
