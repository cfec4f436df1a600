"""Email and URL checks delegated to the ``validators`` package."""
from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, FrozenSet, Mapping

import validators

from .errors import ConfigurationError

FormatCheck = Callable[..., Any]


def _accepted_options(check: FormatCheck) -> FrozenSet[str]:
    # ``validators`` wraps its checks with functools.wraps, so the signature
    # of the undecorated function is visible here.
    parameters = inspect.signature(check).parameters.values()
    return frozenset(
        param.name
        for param in parameters
        if param.kind in (param.KEYWORD_ONLY, param.POSITIONAL_OR_KEYWORD) and param.name != "value"
    )


_EMAIL_OPTIONS = _accepted_options(validators.email)
_URL_OPTIONS = _accepted_options(validators.url)


def _call(check: FormatCheck, accepted: FrozenSet[str], value: str, options: Mapping[str, Any]) -> bool:
    kwargs: Dict[str, Any] = dict(options or {})
    unknown = sorted(set(kwargs) - accepted)
    if unknown:
        raise ConfigurationError(
            f"unsupported {check.__name__} option(s): {', '.join(unknown)}"
        )
    # A failed check returns a falsy ValidationError instance.
    return bool(check(value, **kwargs))


def is_email_format(value: str, options: Mapping[str, Any] | None = None) -> bool:
    return _call(validators.email, _EMAIL_OPTIONS, value, options or {})


def is_url_format(value: str, options: Mapping[str, Any] | None = None) -> bool:
    return _call(validators.url, _URL_OPTIONS, value, options or {})


__all__ = ["is_email_format", "is_url_format"]
