"""Named rules used to check single values."""
from __future__ import annotations

import inspect
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .errors import ConfigurationError, configuration_error
from .formats import is_email_format, is_url_format

RuleOptions = Mapping[str, Any]
Predicate = Callable[[Any, RuleOptions], Any]
MessageProducer = Callable[[Any, RuleOptions], str]

DEFAULT_MESSAGE = "is invalid"

_DATE_RE = re.compile(r"([0-9]{2})/(0[1-9]|1[0-2])/([0-9]{4})")


@dataclass(frozen=True)
class Rule:
    """A named predicate and the message reported when it fails."""

    name: str
    predicate: Predicate
    message: Union[str, MessageProducer] = DEFAULT_MESSAGE

    def check(self, value: Any, options: RuleOptions) -> bool:
        return bool(self.predicate(value, options))

    def describe(self, value: Any, options: RuleOptions) -> str:
        if callable(self.message):
            return self.message(value, options)
        return self.message


def _params(options: RuleOptions) -> Mapping[str, Any]:
    params = options.get("params") if options else None
    return params or {}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _days_in_month(month: int, year: int) -> int:
    if month == 2:
        if (year % 4 == 0 and year % 100 != 0) or year % 400 == 0:
            return 29
        return 28
    if month % 2 == 0:
        return 30
    return 31


def _date(value: Any, options: RuleOptions) -> bool:
    if not isinstance(value, str):
        return False
    match = _DATE_RE.fullmatch(value)
    if not match:
        return False
    day, month, year = (int(group) for group in match.groups())
    return 1 <= day <= _days_in_month(month, year)


def _length_bounds(options: RuleOptions) -> Tuple[float, Optional[float]]:
    params = _params(options)
    low = params.get("min")
    high = params.get("max")
    low = 1 if low is None else low
    if not _is_number(low) or (high is not None and not _is_number(high)):
        raise ConfigurationError("params 'min' and 'max' must be numbers or nulls")
    if high is not None and low >= high:
        raise ConfigurationError("param 'min' must be less than 'max'")
    return low, high


def _string(value: Any, options: RuleOptions) -> bool:
    if not isinstance(value, str):
        return False
    low, high = _length_bounds(options)
    return len(value) >= low and (high is None or len(value) <= high)


def _string_message(value: Any, options: RuleOptions) -> str:
    if not isinstance(value, str):
        return "must be a string"
    low, high = _length_bounds(options)
    if len(value) < low:
        return f"must be min={low} characters."
    if high is not None and len(value) > high:
        return f"must be max={high} characters."
    return DEFAULT_MESSAGE


def _email(value: Any, options: RuleOptions) -> bool:
    return is_email_format(str(value), _params(options))


def _url(value: Any, options: RuleOptions) -> bool:
    return is_url_format(str(value), _params(options))


def builtin_rules() -> List[Rule]:
    return [
        Rule("array", lambda value, _: isinstance(value, list), "must be an array"),
        Rule("boolean", lambda value, _: isinstance(value, bool), "must be a boolean"),
        Rule("date", _date, "date is invalid"),
        Rule("email", _email, "email is invalid"),
        Rule("number", lambda value, _: _is_number(value), "must be a number"),
        Rule("string", _string, _string_message),
        Rule("url", _url, "url is invalid"),
    ]


def _accepts_two_arguments(predicate: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(predicate)
    except (TypeError, ValueError):  # builtins without introspectable signatures
        return True
    try:
        signature.bind(None, None)
    except TypeError:
        return False
    return True


class RuleRegistry:
    """Ordered collection of rules keyed by unique name.

    Every registry starts with the built-in rules; custom rules are appended
    with :meth:`register` and never removed afterwards.
    """

    def __init__(self) -> None:
        self._rules: Dict[str, Rule] = {}
        for rule in builtin_rules():
            self._rules[rule.name] = rule

    def register(self, name: str, predicate: Predicate, message: Optional[str] = None) -> Rule:
        if not name or not predicate:
            raise configuration_error("params 'name' and 'predicate' are required")
        if not isinstance(name, str):
            raise configuration_error("param 'name' must be a string")
        if ":" in name:
            raise configuration_error(f"rule '{name}': names cannot contain ':'")
        if name in self._rules:
            raise configuration_error(f"rule '{name}' already exists")
        if not callable(predicate):
            raise configuration_error("param 'predicate' must be callable")
        if not _accepts_two_arguments(predicate):
            raise configuration_error(f"rule '{name}': predicate must accept (value, options)")
        if message is not None and not isinstance(message, str):
            raise configuration_error("param 'message' must be a string")

        rule = Rule(name, predicate, message or DEFAULT_MESSAGE)
        self._rules[name] = rule
        return rule

    def get(self, name: str) -> Optional[Rule]:
        return self._rules.get(name)

    def resolve(self, type_name: str, path: str = "") -> Rule:
        """Find the rule for ``type_name``, ignoring any ``:suffix``."""
        rule = self._rules.get(type_name.split(":", 1)[0])
        if rule is None:
            raise configuration_error(f"type '{type_name}' is invalid", path)
        return rule

    def names(self) -> List[str]:
        return list(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)


__all__ = ["DEFAULT_MESSAGE", "Rule", "RuleOptions", "RuleRegistry", "builtin_rules"]
