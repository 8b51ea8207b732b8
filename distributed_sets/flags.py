"""
Textual codec interface and ``argparse`` integration.

A :class:`TextValue` can be rendered to and parsed from a single string,
which is what command-line option parsers need from an accumulator value.
:class:`StringSetAction` plugs any ``TextValue`` into ``argparse``::

    tags = StringSet(store, "cli:tags")
    parser.add_argument("--tag", action=StringSetAction, target=tags)
    parser.parse_args(["--tag", "a,b", "--tag", "c"])
    sorted(tags.members())  # ['a', 'b', 'c']
"""

from __future__ import annotations

import argparse
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from .exceptions import SetParseError


class TextValue(ABC):
    """
    Value with a textual encode/decode pair.
    """

    @abstractmethod
    def render(self) -> str:
        """Encode the current value as text."""

    @abstractmethod
    def parse(self, text: str) -> None:
        """
        Decode ``text`` into the value.

        Raises
        ------
        SetParseError
            When ``text`` cannot be parsed.
        """

    def __str__(self) -> str:
        return self.render()


class StringSetAction(argparse.Action):
    """
    ``argparse`` action feeding every option occurrence into ``target.parse``.

    Occurrences accumulate: parsing never clears members added earlier. The
    target handle itself is stored on the namespace under ``dest``.
    """

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        *,
        target: TextValue,
        **kwargs: Any,
    ) -> None:
        if kwargs.get("nargs") not in (None, 1):
            raise ValueError("StringSetAction consumes exactly one value per occurrence.")
        kwargs.pop("nargs", None)
        kwargs.setdefault("default", target)
        super().__init__(option_strings, dest, **kwargs)
        self.target = target

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        try:
            self.target.parse(values)
        except SetParseError as exc:
            raise argparse.ArgumentError(self, str(exc)) from exc
        setattr(namespace, self.dest, self.target)
